"""Base formatter interface."""

from abc import ABC, abstractmethod

from schemas.internal.documents import NormalizedDocument


class BaseFormatter(ABC):
    """Abstract base class for document export formatters."""

    name: str = ""
    media_type: str = "text/plain"
    extension: str = ".txt"

    @abstractmethod
    def format(self, document: NormalizedDocument) -> str:
        """
        Render a normalized document in the target format.

        Args:
            document: Result of one completed analysis

        Returns:
            Formatted content
        """

    def filename(self, stem: str) -> str:
        return f"{stem}{self.extension}"
