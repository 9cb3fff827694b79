"""Map a raw ``succeeded`` analysis payload to a :class:`NormalizedDocument`.

The mapping is pure and deterministic. Missing optional data is replaced
with the defaults declared in :mod:`normalization.confidence` and
:mod:`normalization.key_values`; nothing here raises for absent fields.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from normalization.confidence import (
    ELEMENT_DEFAULT_CONFIDENCE,
    LINE_DEFAULT_CONFIDENCE,
    WORD_DEFAULT_CONFIDENCE,
    to_percent,
)
from normalization.geometry import (
    first_polygon,
    region_polygon,
    span_ranges,
    span_within,
    spans_overlap,
)
from normalization.key_values import extract_key_values, extract_summary
from normalization.tables import normalize_table
from schemas.internal.documents import (
    Checkbox,
    Figure,
    HandwritingStyle,
    Line,
    NormalizedDocument,
    Page,
    Word,
)
from schemas.internal.raw import (
    RawAnalyzeResult,
    RawFigure,
    RawOperationResult,
    RawPage,
    RawStyle,
    RawWord,
)

logger = logging.getLogger(__name__)

RawInput = RawAnalyzeResult | RawOperationResult | Mapping[str, Any] | None


def normalize(
    raw: RawInput,
    *,
    model_selector: str | None = None,
    model_id: str | None = None,
) -> NormalizedDocument:
    """Normalize a raw analysis result (or the whole poll body).

    ``model_id`` is used only when the payload does not name its model.
    """
    result = coerce_analyze_result(raw)
    model_id = result.model_id or model_id
    handwritten = _handwritten_ranges(result.styles)

    pages = [
        _normalize_page(page, index, handwritten) for index, page in enumerate(result.pages)
    ]
    checkboxes = [
        checkbox
        for index, page in enumerate(result.pages)
        for checkbox in _normalize_selection_marks(page, index)
    ]
    tables = [normalize_table(table, index) for index, table in enumerate(result.tables)]
    figures = [_normalize_figure(figure, index) for index, figure in enumerate(result.figures)]
    key_value_pairs = extract_key_values(
        result,
        model_selector=model_selector,
        model_id=model_id,
        page_count=len(pages),
        table_count=len(tables),
    )

    document = NormalizedDocument(
        model_selector=model_selector,
        model_id=model_id,
        api_version=result.api_version,
        pages=pages,
        tables=tables,
        checkboxes=checkboxes,
        figures=figures,
        key_value_pairs=key_value_pairs,
        handwriting_styles=[_normalize_style(style) for style in result.styles],
        summary=extract_summary(result),
    )
    logger.debug(
        "Normalized %d pages, %d tables, %d checkboxes, %d figures",
        len(pages),
        len(tables),
        len(checkboxes),
        len(figures),
    )
    return document


def coerce_analyze_result(raw: RawInput) -> RawAnalyzeResult:
    """Accept an ``analyzeResult`` object, a full poll body, or plain JSON."""
    if raw is None:
        return RawAnalyzeResult()
    if isinstance(raw, RawAnalyzeResult):
        return raw
    if isinstance(raw, RawOperationResult):
        return raw.analyze_result or RawAnalyzeResult()
    if "status" in raw:
        return RawOperationResult.model_validate(raw).analyze_result or RawAnalyzeResult()
    if "analyzeResult" in raw:
        return RawAnalyzeResult.model_validate(raw["analyzeResult"] or {})
    return RawAnalyzeResult.model_validate(raw)


def _normalize_page(
    page: RawPage, index: int, handwritten: Sequence[tuple[int, int]]
) -> Page:
    words_by_line = _assign_words(page)
    lines: list[Line] = []
    for line_index, raw_line in enumerate(page.lines):
        line_ranges = span_ranges(raw_line.spans)
        lines.append(
            Line(
                text=raw_line.content,
                confidence=to_percent(raw_line.confidence, LINE_DEFAULT_CONFIDENCE),
                polygon=first_polygon(raw_line.polygon, raw_line.bounding_box),
                words=[_normalize_word(word) for word in words_by_line[line_index]],
                is_handwritten=bool(handwritten) and spans_overlap(line_ranges, handwritten),
            )
        )
    return Page(
        page_number=page.page_number or index + 1,
        width=page.width,
        height=page.height,
        unit=page.unit,
        angle=page.angle,
        lines=lines,
    )


def _assign_words(page: RawPage) -> list[list[RawWord]]:
    """Attach page words to lines.

    Lines that carry their own ``words`` keep them. Otherwise a word belongs
    to the first line whose spans contain the word's span offset.
    """
    assigned: list[list[RawWord]] = [list(line.words or []) for line in page.lines]
    open_lines = [
        (index, span_ranges(line.spans))
        for index, line in enumerate(page.lines)
        if line.words is None and line.spans
    ]
    if not open_lines:
        return assigned
    for word in page.words:
        if word.span is None:
            continue
        for index, ranges in open_lines:
            if span_within(word.span.offset, ranges):
                assigned[index].append(word)
                break
    return assigned


def _normalize_word(word: RawWord) -> Word:
    return Word(
        text=word.content,
        confidence=to_percent(word.confidence, WORD_DEFAULT_CONFIDENCE),
        polygon=first_polygon(word.polygon, word.bounding_box),
    )


def _normalize_selection_marks(page: RawPage, page_index: int) -> list[Checkbox]:
    checkboxes: list[Checkbox] = []
    for mark_index, mark in enumerate(page.selection_marks):
        state = mark.state if mark.state in ("selected", "unselected") else "unselected"
        if state != mark.state:
            logger.debug("Unknown selection mark state %r treated as unselected", mark.state)
        checkboxes.append(
            Checkbox(
                id=f"{page_index}-{mark_index}",
                page_number=page.page_number or page_index + 1,
                state=state,
                confidence=to_percent(mark.confidence, ELEMENT_DEFAULT_CONFIDENCE),
                polygon=first_polygon(mark.polygon, mark.bounding_box),
            )
        )
    return checkboxes


def _normalize_figure(figure: RawFigure, index: int) -> Figure:
    page_number, polygon = region_polygon(figure.bounding_regions)
    return Figure(
        id=figure.id or str(index),
        caption=figure.caption.content if figure.caption else "",
        confidence=to_percent(figure.confidence, ELEMENT_DEFAULT_CONFIDENCE),
        elements=list(figure.elements),
        page_number=page_number,
        polygon=polygon,
    )


def _normalize_style(style: RawStyle) -> HandwritingStyle:
    return HandwritingStyle(
        is_handwritten=bool(style.is_handwritten),
        confidence=to_percent(style.confidence, ELEMENT_DEFAULT_CONFIDENCE),
        span_count=len(style.spans),
    )


def _handwritten_ranges(styles: Sequence[RawStyle]) -> list[tuple[int, int]]:
    ranges: list[tuple[int, int]] = []
    for style in styles:
        if style.is_handwritten:
            ranges.extend(span_ranges(style.spans))
    return ranges


__all__ = ["coerce_analyze_result", "normalize"]
