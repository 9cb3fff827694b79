# tests/conftest.py
import copy

import pytest

from core.config import get_settings

SETTINGS_ENV = (
    "DOCINTEL_ENDPOINT",
    "DOCINTEL_API_KEY",
    "DOCINTEL_API_VERSION",
    "DOCINTEL_API_PATH",
    "DOCINTEL_CONTENT_TYPE",
    "DOCINTEL_REQUEST_TIMEOUT",
    "POLL_INTERVAL_SECONDS",
    "POLL_MAX_TICKS",
    "DEFAULT_MODEL",
    "FALLBACK_MODEL_ID",
    "MODEL_MAPPING",
)

SAMPLE_ANALYZE_RESULT = {
    "apiVersion": "2023-07-31",
    "modelId": "prebuilt-layout",
    "content": "Invoice 42\nTotal 10",
    "pages": [
        {
            "pageNumber": 1,
            "angle": 0,
            "width": 8.5,
            "height": 11,
            "unit": "inch",
            "words": [
                {"content": "Invoice", "confidence": 0.99, "span": {"offset": 0, "length": 7}},
                {"content": "42", "confidence": 0.957, "span": {"offset": 8, "length": 2}},
                {"content": "Total", "confidence": 0.9, "span": {"offset": 11, "length": 5}},
                {"content": "10", "span": {"offset": 17, "length": 2}},
            ],
            "lines": [
                {
                    "content": "Invoice 42",
                    "confidence": 0.957,
                    "polygon": [10, 20, 110, 20, 110, 70, 10, 70],
                    "spans": [{"offset": 0, "length": 10}],
                },
                {
                    "content": "Total 10",
                    "polygon": [10, 80, 90, 80, 90, 100, 10, 100],
                    "spans": [{"offset": 11, "length": 8}],
                },
            ],
            "selectionMarks": [
                {"state": "selected", "confidence": 0.88, "polygon": [1, 1, 2, 1, 2, 2, 1, 2]},
                {"state": "unselected", "confidence": 0.5},
            ],
        }
    ],
    "tables": [
        {
            "rowCount": 2,
            "columnCount": 2,
            "confidence": 0.93,
            "cells": [
                {"kind": "columnHeader", "rowIndex": 0, "columnIndex": 0, "content": "Item", "confidence": 0.9},
                {"kind": "columnHeader", "rowIndex": 0, "columnIndex": 1, "content": "Price", "confidence": 0.8},
                {"rowIndex": 1, "columnIndex": 0, "content": "Widget", "confidence": 0.7},
            ],
            "boundingRegions": [{"pageNumber": 1, "polygon": [0, 0, 4, 0, 4, 2, 0, 2]}],
        }
    ],
    "keyValuePairs": [
        {"key": {"content": "Invoice"}, "value": {"content": "42"}, "confidence": 0.91},
    ],
    "styles": [
        {"isHandwritten": True, "confidence": 0.8, "spans": [{"offset": 11, "length": 8}]},
    ],
    "figures": [
        {
            "id": "1.1",
            "caption": {"content": "Logo"},
            "elements": ["/paragraphs/0"],
            "boundingRegions": [{"pageNumber": 1, "polygon": [5, 5, 6, 5, 6, 6, 5, 6]}],
        }
    ],
}


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep the developer's environment out of settings-dependent tests."""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "0")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("DOCINTEL_ENDPOINT", "https://example.cognitiveservices.azure.com/")
    monkeypatch.setenv("DOCINTEL_API_KEY", "secret-key")
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def sample_result():
    return copy.deepcopy(SAMPLE_ANALYZE_RESULT)
