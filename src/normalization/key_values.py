"""Key-value extraction with a never-empty fallback."""

from __future__ import annotations

import re

from normalization.confidence import (
    ELEMENT_DEFAULT_CONFIDENCE,
    METADATA_CONFIDENCE,
    to_percent,
)
from schemas.internal.documents import DocumentSummary, KeyValuePair
from schemas.internal.raw import RawAnalyzeResult, RawDocumentField

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
MISSING_VALUE = "N/A"
UNKNOWN_KEY = "Unknown"


def humanize_field_name(name: str) -> str:
    """``InvoiceTotal`` -> ``Invoice Total``."""
    spaced = _CAMEL_BOUNDARY.sub(" ", name.strip())
    return spaced[:1].upper() + spaced[1:]


def field_value(field: RawDocumentField) -> str:
    if field.content:
        return field.content
    if field.value_string:
        return field.value_string
    if field.value_number is not None:
        return f"{field.value_number:g}"
    if field.value_date:
        return field.value_date
    return MISSING_VALUE


def extract_key_values(
    result: RawAnalyzeResult,
    *,
    model_selector: str | None,
    model_id: str | None,
    page_count: int,
    table_count: int,
) -> list[KeyValuePair]:
    """Return service pairs, else document fields, else run metadata."""
    if result.key_value_pairs:
        return [
            KeyValuePair(
                key=(pair.key.content if pair.key and pair.key.content else UNKNOWN_KEY),
                value=pair.value.content if pair.value else "",
                confidence=to_percent(pair.confidence, ELEMENT_DEFAULT_CONFIDENCE),
            )
            for pair in result.key_value_pairs
        ]

    # Only the first analyzed document is consulted.
    if result.documents and result.documents[0].document_fields:
        return [
            KeyValuePair(
                key=humanize_field_name(name),
                value=field_value(field),
                confidence=to_percent(field.confidence, ELEMENT_DEFAULT_CONFIDENCE),
            )
            for name, field in result.documents[0].document_fields.items()
        ]

    return metadata_key_values(
        model_selector=model_selector,
        model_id=model_id,
        page_count=page_count,
        table_count=table_count,
    )


SUMMARY_FIELDS: dict[str, tuple[str, ...]] = {
    "name": ("CustomerName", "VendorName", "Name", "FullName"),
    "date": ("InvoiceDate", "TransactionDate", "Date", "IssueDate"),
    "amount": ("InvoiceTotal", "TotalAmount", "Amount", "Total"),
    "id": ("InvoiceId", "DocumentId", "Id", "Number"),
}
SUMMARY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "date": ("date",),
    "amount": ("amount", "total"),
    "id": ("id", "number"),
}


def extract_summary(result: RawAnalyzeResult) -> DocumentSummary:
    """Pick headline values from the first document, else from key-value pairs.

    Document fields are tried through alias chains such as ``CustomerName``
    then ``VendorName``. Key-value pairs are only scanned when no alias
    matched; each pair fills at most one slot, by keyword in its key.
    """
    values: dict[str, str] = {}
    confidence = None
    if result.documents:
        document = result.documents[0]
        if document.confidence is not None:
            confidence = to_percent(document.confidence, ELEMENT_DEFAULT_CONFIDENCE)
        for slot, aliases in SUMMARY_FIELDS.items():
            for alias in aliases:
                field = document.document_fields.get(alias)
                if field is not None and field.content:
                    values[slot] = field.content
                    break

    if not values:
        for pair in result.key_value_pairs:
            if not (pair.key and pair.key.content and pair.value):
                continue
            key = pair.key.content.lower()
            for slot, keywords in SUMMARY_KEYWORDS.items():
                if slot not in values and any(word in key for word in keywords):
                    values[slot] = pair.value.content
                    break

    return DocumentSummary(confidence=confidence, **values)


def metadata_key_values(
    *,
    model_selector: str | None,
    model_id: str | None,
    page_count: int,
    table_count: int,
) -> list[KeyValuePair]:
    return [
        KeyValuePair(
            key="Document Type",
            value=model_selector or model_id or UNKNOWN_KEY,
            confidence=METADATA_CONFIDENCE,
        ),
        KeyValuePair(
            key="Model Used", value=model_id or UNKNOWN_KEY, confidence=METADATA_CONFIDENCE
        ),
        KeyValuePair(key="Page Count", value=str(page_count), confidence=METADATA_CONFIDENCE),
        KeyValuePair(key="Table Count", value=str(table_count), confidence=METADATA_CONFIDENCE),
    ]


__all__ = [
    "SUMMARY_FIELDS",
    "SUMMARY_KEYWORDS",
    "extract_key_values",
    "extract_summary",
    "field_value",
    "humanize_field_name",
    "metadata_key_values",
]
