"""Unit tests for key-value extraction."""

from normalization.key_values import (
    extract_key_values,
    extract_summary,
    field_value,
    humanize_field_name,
)
from schemas.internal.raw import RawAnalyzeResult, RawDocumentField


def _extract(payload, **kwargs):
    params = {"model_selector": "invoice", "model_id": "prebuilt-invoice", "page_count": 2, "table_count": 1}
    params.update(kwargs)
    return extract_key_values(RawAnalyzeResult.model_validate(payload), **params)


def test_service_pairs_take_priority():
    pairs = _extract(
        {
            "keyValuePairs": [
                {"key": {"content": "Name"}, "value": {"content": "Ada"}, "confidence": 0.82},
                {"key": {"content": "Signed"}},
            ],
            "documents": [{"fields": {"Total": {"content": "10"}}}],
        }
    )
    assert [(p.key, p.value, p.confidence) for p in pairs] == [
        ("Name", "Ada", 82),
        ("Signed", "", 95),
    ]


def test_document_fields_are_used_when_no_pairs():
    pairs = _extract(
        {
            "documents": [
                {
                    "docType": "invoice",
                    "fields": {
                        "InvoiceTotal": {"type": "number", "valueNumber": 110.5, "confidence": 0.9},
                        "VendorName": {"content": "Contoso"},
                    },
                }
            ]
        }
    )
    assert [(p.key, p.value) for p in pairs] == [
        ("Invoice Total", "110.5"),
        ("Vendor Name", "Contoso"),
    ]
    assert pairs[0].confidence == 90


def test_metadata_fallback_is_never_empty():
    pairs = _extract({})
    assert [(p.key, p.value, p.confidence) for p in pairs] == [
        ("Document Type", "invoice", 100),
        ("Model Used", "prebuilt-invoice", 100),
        ("Page Count", "2", 100),
        ("Table Count", "1", 100),
    ]


def test_field_value_order():
    assert field_value(RawDocumentField(value_string="abc")) == "abc"
    assert field_value(RawDocumentField(value_date="2024-01-31")) == "2024-01-31"
    assert field_value(RawDocumentField()) == "N/A"


def test_humanize_field_name():
    assert humanize_field_name("invoiceId") == "Invoice Id"
    assert humanize_field_name("Total") == "Total"


def test_only_first_document_fields_are_used():
    pairs = _extract(
        {"documents": [{"docType": "receipt"}, {"fields": {"Total": {"content": "10"}}}]}
    )
    assert [p.key for p in pairs] == ["Document Type", "Model Used", "Page Count", "Table Count"]


def _summary(payload):
    return extract_summary(RawAnalyzeResult.model_validate(payload))


def test_summary_follows_field_alias_chains():
    summary = _summary(
        {
            "documents": [
                {
                    "confidence": 0.874,
                    "fields": {
                        "VendorName": {"content": "Contoso"},
                        "Name": {"content": "ignored"},
                        "IssueDate": {"content": "2024-01-31"},
                        "InvoiceTotal": {"content": "$110.50"},
                        "Number": {"content": "INV-7"},
                    },
                },
                {"fields": {"CustomerName": {"content": "second document"}}},
            ]
        }
    )
    assert (summary.name, summary.date, summary.amount, summary.id) == (
        "Contoso",
        "2024-01-31",
        "$110.50",
        "INV-7",
    )
    assert summary.confidence == 87


def test_summary_falls_back_to_pair_keywords():
    summary = _summary(
        {
            "keyValuePairs": [
                {"key": {"content": "Customer Name"}, "value": {"content": "Ada"}},
                {"key": {"content": "Name"}, "value": {"content": "second"}},
                {"key": {"content": "Due Date"}, "value": {"content": "May 1"}},
                {"key": {"content": "TOTAL"}, "value": {"content": "10.00"}},
                {"key": {"content": "Order Number"}, "value": {"content": "77"}},
            ]
        }
    )
    assert summary.labelled() == [
        ("Name", "Ada"),
        ("Date", "May 1"),
        ("Amount", "10.00"),
        ("ID", "77"),
    ]
    assert summary.confidence is None


def test_summary_pairs_ignored_when_a_field_matched():
    summary = _summary(
        {
            "documents": [{"fields": {"Total": {"content": "5"}}}],
            "keyValuePairs": [{"key": {"content": "Name"}, "value": {"content": "Ada"}}],
        }
    )
    assert summary.labelled() == [("Amount", "5")]


def test_summary_empty_without_matches():
    assert _summary({}).labelled() == []
