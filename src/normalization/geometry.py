"""Polygon and span helpers for raw analysis payloads."""

from __future__ import annotations

from typing import Iterable, Sequence

from schemas.internal.documents import BoundingBox, Point
from schemas.internal.raw import RawBoundingRegion, RawPoint, RawPolygon, RawSpan


def polygon_points(raw: RawPolygon | None) -> list[Point]:
    """Return ``(x, y)`` points from either polygon encoding.

    The flat encoding lists corners top-left, top-right, bottom-right,
    bottom-left as ``[x0, y0, x1, y1, x2, y2, x3, y3]``. A trailing odd
    coordinate is ignored.
    """
    if not raw:
        return []
    if isinstance(raw[0], RawPoint):
        return [(float(point.x), float(point.y)) for point in raw]  # type: ignore[union-attr]
    coords = [float(value) for value in raw]  # type: ignore[arg-type]
    return [(coords[i], coords[i + 1]) for i in range(0, len(coords) - 1, 2)]


def first_polygon(*candidates: RawPolygon | None) -> list[Point]:
    """Return the first non-empty polygon among ``candidates``."""
    for candidate in candidates:
        points = polygon_points(candidate)
        if points:
            return points
    return []


def region_polygon(regions: Sequence[RawBoundingRegion]) -> tuple[int | None, list[Point]]:
    """Return page number and polygon of the first bounding region."""
    for region in regions:
        points = polygon_points(region.polygon)
        if points:
            return region.page_number, points
    if regions:
        return regions[0].page_number, []
    return None, []


def bounding_box(raw: RawPolygon | None) -> BoundingBox:
    return BoundingBox.from_polygon(polygon_points(raw))


def span_ranges(spans: Iterable[RawSpan]) -> list[tuple[int, int]]:
    return [(span.offset, span.offset + span.length) for span in spans if span.length > 0]


def span_within(offset: int, ranges: Sequence[tuple[int, int]]) -> bool:
    return any(start <= offset < end for start, end in ranges)


def spans_overlap(left: Sequence[tuple[int, int]], right: Sequence[tuple[int, int]]) -> bool:
    for l_start, l_end in left:
        for r_start, r_end in right:
            if l_start < r_end and r_start < l_end:
                return True
    return False


__all__ = [
    "bounding_box",
    "first_polygon",
    "polygon_points",
    "region_polygon",
    "span_ranges",
    "span_within",
    "spans_overlap",
]
