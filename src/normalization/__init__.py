"""Response normalization for Document Intelligence results."""

from .confidence import (
    ELEMENT_DEFAULT_CONFIDENCE,
    LINE_DEFAULT_CONFIDENCE,
    METADATA_CONFIDENCE,
    WORD_DEFAULT_CONFIDENCE,
    to_percent,
)
from .document import coerce_analyze_result, normalize
from .geometry import bounding_box, polygon_points

__all__ = [
    "ELEMENT_DEFAULT_CONFIDENCE",
    "LINE_DEFAULT_CONFIDENCE",
    "METADATA_CONFIDENCE",
    "WORD_DEFAULT_CONFIDENCE",
    "bounding_box",
    "coerce_analyze_result",
    "normalize",
    "polygon_points",
    "to_percent",
]
