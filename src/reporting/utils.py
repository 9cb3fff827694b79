"""Utility functions for export formatting."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

HIGH_CONFIDENCE = 95
MEDIUM_CONFIDENCE = 85


def confidence_label(score: float) -> Literal["High", "Medium", "Low"]:
    """Bucket a 0-100 confidence for display."""
    if score >= HIGH_CONFIDENCE:
        return "High"
    if score >= MEDIUM_CONFIDENCE:
        return "Medium"
    return "Low"


def format_timestamp(dt: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp, defaulting to now."""
    dt = dt or datetime.now(timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


MARKDOWN_ESCAPES = {
    "\\": "\\\\",
    "`": "\\`",
    "*": "\\*",
    "_": "\\_",
    "[": "\\[",
    "]": "\\]",
    "<": "\\<",
    ">": "\\>",
    "#": "\\#",
    "|": "\\|",
}


def escape_markdown_cell(text: str) -> str:
    """Escape Markdown special characters and fold newlines for a table cell."""
    if not text:
        return ""
    for char, escaped in MARKDOWN_ESCAPES.items():
        text = text.replace(char, escaped)
    return text.replace("\r\n", " ").replace("\n", " ")


__all__ = ["MARKDOWN_ESCAPES", "confidence_label", "escape_markdown_cell", "format_timestamp"]
