"""Plain text export."""

from reporting.formatters.base import BaseFormatter
from schemas.internal.documents import NormalizedDocument


class TextFormatter(BaseFormatter):
    name = "text"
    media_type = "text/plain"
    extension = ".txt"

    def format(self, document: NormalizedDocument) -> str:
        return document.raw_text
