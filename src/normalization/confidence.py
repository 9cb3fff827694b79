"""Confidence scaling and the defaults applied when the service omits a score.

The service reports confidence as a 0-1 float. Everything downstream works on
integer percentages, and the conversion happens here only.

Default policy when a score is absent (kept for compatibility with the
existing UI; the values are placeholders rather than a measured product
decision):

* lines and words: 99
* tables, cells, checkboxes, figures and service key-value pairs: 95
* key-value pairs synthesized from run metadata: 100
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

LINE_DEFAULT_CONFIDENCE = 99
WORD_DEFAULT_CONFIDENCE = 99
ELEMENT_DEFAULT_CONFIDENCE = 95
METADATA_CONFIDENCE = 100


def to_percent(value: float | None, default: int) -> int:
    """Scale a 0-1 score to an integer percentage, rounding half up."""
    if value is None or not math.isfinite(value):
        return default
    scaled = (Decimal(str(value)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return max(0, min(100, int(scaled)))


def mean_percent(values: Iterable[int], default: int) -> int:
    """Mean of already-scaled percentages, rounded half up."""
    items = list(values)
    if not items:
        return default
    mean = Decimal(sum(items)) / Decimal(len(items))
    return int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


__all__ = [
    "ELEMENT_DEFAULT_CONFIDENCE",
    "LINE_DEFAULT_CONFIDENCE",
    "METADATA_CONFIDENCE",
    "WORD_DEFAULT_CONFIDENCE",
    "mean_percent",
    "to_percent",
]
