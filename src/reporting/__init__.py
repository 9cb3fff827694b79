"""Reporting module exports."""

from __future__ import annotations

from reporting.formatters import (
    BaseFormatter,
    CSVFormatter,
    JSONFormatter,
    MarkdownFormatter,
    TextFormatter,
    table_to_csv,
)

EXPORT_FORMATS = ("json", "csv", "text", "markdown")


def get_formatter(name: str) -> BaseFormatter:
    """Return the formatter registered under ``name``."""
    key = name.strip().lower()
    if key == "json":
        return JSONFormatter()
    if key == "csv":
        return CSVFormatter(include_tables=True)
    if key in ("text", "txt"):
        return TextFormatter()
    if key in ("markdown", "md"):
        return MarkdownFormatter()
    raise ValueError(f"Unsupported export format: {name}")


__all__ = [
    "EXPORT_FORMATS",
    "BaseFormatter",
    "CSVFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "TextFormatter",
    "get_formatter",
    "table_to_csv",
]
