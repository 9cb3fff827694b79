"""Export formatters for normalized documents."""

from reporting.formatters.base import BaseFormatter
from reporting.formatters.markdown import MarkdownFormatter
from reporting.formatters.structured import JSONFormatter
from reporting.formatters.tabular import CSVFormatter, table_to_csv
from reporting.formatters.text import TextFormatter

__all__ = [
    "BaseFormatter",
    "CSVFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "TextFormatter",
    "table_to_csv",
]
