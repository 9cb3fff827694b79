"""Raw Document Intelligence response contracts.

These models mirror the JSON returned by the analysis service's poll endpoint.
Every optional collection defaults to empty and explicit ``null`` values are
dropped before validation, so the normalizer never has to guard against
missing keys itself.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    model_validator,
)
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


def lenient(default: Any = None) -> WrapValidator:
    """Replace a value of the wrong type with ``default`` instead of failing.

    The service occasionally sends ``"n/a"`` or similar where a number is
    expected. One bad scalar must not make the whole result unreadable.
    A callable ``default`` is called for a fresh value, as with ``list``.
    """

    def validate(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            logger.debug("Replacing invalid raw value %r", value)
            return default() if callable(default) else default

    return WrapValidator(validate)


LenientFloat = Annotated[Optional[float], lenient()]
LenientInt = Annotated[Optional[int], lenient()]
LenientBool = Annotated[Optional[bool], lenient()]
LenientStr = Annotated[Optional[str], lenient()]
Text = Annotated[str, lenient("")]
Index = Annotated[int, lenient(0)]
SpanCount = Annotated[int, lenient(1)]
Coordinate = Annotated[float, lenient(0.0)]


class RawModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        protected_namespaces=(),
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class RawPoint(RawModel):
    x: Coordinate = 0.0
    y: Coordinate = 0.0


# Flat ``[x0, y0, x1, y1, ...]`` (current API) or ``[{x, y}, ...]`` (older API).
RawPolygon = Union[List[float], List[RawPoint]]


class RawSpan(RawModel):
    offset: Index = 0
    length: Index = 0


class RawBoundingRegion(RawModel):
    page_number: LenientInt = None
    polygon: Annotated[Optional[RawPolygon], lenient()] = None


class RawWord(RawModel):
    content: Text = ""
    polygon: Annotated[Optional[RawPolygon], lenient()] = None
    bounding_box: Annotated[Optional[RawPolygon], lenient()] = None
    confidence: LenientFloat = None
    span: Optional[RawSpan] = None


class RawLine(RawModel):
    content: Text = ""
    polygon: Annotated[Optional[RawPolygon], lenient()] = None
    bounding_box: Annotated[Optional[RawPolygon], lenient()] = None
    confidence: LenientFloat = None
    spans: List[RawSpan] = Field(default_factory=list)
    words: Optional[List[RawWord]] = None


class RawSelectionMark(RawModel):
    state: Annotated[str, lenient("unselected")] = "unselected"
    polygon: Annotated[Optional[RawPolygon], lenient()] = None
    bounding_box: Annotated[Optional[RawPolygon], lenient()] = None
    confidence: LenientFloat = None
    span: Optional[RawSpan] = None


class RawPage(RawModel):
    page_number: LenientInt = None
    angle: LenientFloat = None
    width: LenientFloat = None
    height: LenientFloat = None
    unit: LenientStr = None
    words: List[RawWord] = Field(default_factory=list)
    lines: List[RawLine] = Field(default_factory=list)
    selection_marks: List[RawSelectionMark] = Field(default_factory=list)
    spans: List[RawSpan] = Field(default_factory=list)


class RawTableCell(RawModel):
    kind: LenientStr = None
    row_index: Index = 0
    column_index: Index = 0
    row_span: SpanCount = 1
    column_span: SpanCount = 1
    content: Text = ""
    confidence: LenientFloat = None
    bounding_regions: List[RawBoundingRegion] = Field(default_factory=list)


class RawTable(RawModel):
    row_count: LenientInt = None
    column_count: LenientInt = None
    confidence: LenientFloat = None
    cells: List[RawTableCell] = Field(default_factory=list)
    bounding_regions: List[RawBoundingRegion] = Field(default_factory=list)


class RawKeyValueElement(RawModel):
    content: Text = ""
    bounding_regions: List[RawBoundingRegion] = Field(default_factory=list)


class RawKeyValuePair(RawModel):
    key: Optional[RawKeyValueElement] = None
    value: Optional[RawKeyValueElement] = None
    confidence: LenientFloat = None


class RawStyle(RawModel):
    is_handwritten: LenientBool = None
    confidence: LenientFloat = None
    spans: List[RawSpan] = Field(default_factory=list)


class RawCaption(RawModel):
    content: Text = ""
    bounding_regions: List[RawBoundingRegion] = Field(default_factory=list)


class RawFigure(RawModel):
    id: LenientStr = None
    caption: Optional[RawCaption] = None
    confidence: LenientFloat = None
    elements: List[str] = Field(default_factory=list)
    bounding_regions: List[RawBoundingRegion] = Field(default_factory=list)
    spans: List[RawSpan] = Field(default_factory=list)


class RawDocumentField(RawModel):
    type: LenientStr = None
    content: LenientStr = None
    value_string: LenientStr = None
    value_number: LenientFloat = None
    value_date: LenientStr = None
    confidence: LenientFloat = None


class RawAnalyzedDocument(RawModel):
    doc_type: LenientStr = None
    confidence: LenientFloat = None
    document_fields: dict[str, RawDocumentField] = Field(
        default_factory=dict, alias="fields"
    )


class RawAnalyzeResult(RawModel):
    api_version: LenientStr = None
    model_id: LenientStr = None
    content: Text = ""
    pages: List[RawPage] = Field(default_factory=list)
    tables: List[RawTable] = Field(default_factory=list)
    key_value_pairs: List[RawKeyValuePair] = Field(default_factory=list)
    styles: List[RawStyle] = Field(default_factory=list)
    figures: List[RawFigure] = Field(default_factory=list)
    documents: List[RawAnalyzedDocument] = Field(default_factory=list)


class RawError(RawModel):
    code: LenientStr = None
    message: LenientStr = None
    innererror: Annotated[Optional[dict[str, Any]], lenient()] = None
    details: Annotated[List[dict[str, Any]], lenient(list)] = Field(default_factory=list)


class RawOperationResult(RawModel):
    """Body of a poll response: ``{status, analyzeResult?, error?}``."""

    status: str
    created_date_time: LenientStr = None
    last_updated_date_time: LenientStr = None
    analyze_result: Optional[RawAnalyzeResult] = None
    error: Optional[RawError] = None


__all__ = [
    "RawAnalyzeResult",
    "RawAnalyzedDocument",
    "RawBoundingRegion",
    "RawCaption",
    "RawDocumentField",
    "RawError",
    "RawFigure",
    "RawKeyValueElement",
    "RawKeyValuePair",
    "RawLine",
    "RawOperationResult",
    "RawPage",
    "RawPoint",
    "RawPolygon",
    "RawSelectionMark",
    "RawSpan",
    "RawStyle",
    "RawTable",
    "RawTableCell",
    "RawWord",
]
