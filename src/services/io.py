"""Service-layer helpers for input/output handling."""

from __future__ import annotations

from pathlib import Path

SUPPORTED_SUFFIXES = frozenset(
    {".pdf", ".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff", ".heif"}
)


def is_supported_document(filename: str | None, content_type: str | None = None) -> bool:
    """Images and PDFs only, judged by content type first, then suffix."""
    if content_type:
        if content_type == "application/pdf" or content_type.startswith("image/"):
            return True
    if not filename:
        return False
    return Path(filename).suffix.lower() in SUPPORTED_SUFFIXES


def read_document(path: str | Path) -> tuple[bytes, str]:
    """Return the bytes and file name of a supported document."""
    path = Path(path)
    if not is_supported_document(path.name):
        raise ValueError(f"Unsupported document type: {path.suffix or path.name}")
    return path.read_bytes(), path.name


def write_text(path: str | Path, content: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


__all__ = [
    "SUPPORTED_SUFFIXES",
    "is_supported_document",
    "read_document",
    "write_text",
]
