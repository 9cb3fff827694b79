"""JSON export with run metadata."""

from __future__ import annotations

import json

from reporting.formatters.base import BaseFormatter
from reporting.utils import format_timestamp
from schemas.internal.documents import NormalizedDocument


class JSONFormatter(BaseFormatter):
    name = "json"
    media_type = "application/json"
    extension = ".json"

    def __init__(self, *, indent: int = 2, timestamp: str | None = None) -> None:
        self.indent = indent
        self.timestamp = timestamp

    def format(self, document: NormalizedDocument) -> str:
        payload = {
            "raw_text": document.raw_text,
            "document": document.model_dump(mode="json"),
            "metadata": {
                "model": document.model_selector,
                "model_id": document.model_id,
                "timestamp": self.timestamp or format_timestamp(),
                "confidence": document.stats.average_confidence,
            },
        }
        return json.dumps(payload, ensure_ascii=False, indent=self.indent)
