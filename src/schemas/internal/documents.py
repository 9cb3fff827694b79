"""Normalized document-analysis contracts consumed by the presentation layer."""

from __future__ import annotations

from statistics import fmean
from typing import List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

Point = Tuple[float, float]
Confidence = int
CheckboxState = Literal["selected", "unselected"]


class BoundingBox(BaseModel):
    """Axis-aligned box derived from a polygon."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_polygon(cls, polygon: Sequence[Point]) -> "BoundingBox":
        """Return the min/max box enclosing ``polygon`` (zero box when empty)."""
        if not polygon:
            return cls()
        xs = [point[0] for point in polygon]
        ys = [point[1] for point in polygon]
        left, top = min(xs), min(ys)
        return cls(x=left, y=top, width=abs(max(xs) - left), height=abs(max(ys) - top))


class Region(BaseModel):
    """Base for anything located by a polygon; the box is always derived."""

    polygon: List[Point] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_polygon(self.polygon)


class Word(Region):
    text: str
    confidence: Confidence = Field(ge=0, le=100)


class Line(Region):
    text: str
    confidence: Confidence = Field(ge=0, le=100)
    words: List[Word] = Field(default_factory=list)
    is_handwritten: bool = False


class Page(BaseModel):
    page_number: int
    width: Optional[float] = None
    height: Optional[float] = None
    unit: Optional[str] = None
    angle: Optional[float] = None
    lines: List[Line] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class TableCell(BaseModel):
    row_index: int = Field(ge=0)
    column_index: int = Field(ge=0)
    content: str = ""
    confidence: Confidence = Field(ge=0, le=100)
    kind: Optional[str] = None
    row_span: int = 1
    column_span: int = 1

    model_config = ConfigDict(frozen=True)


class TableRow(BaseModel):
    index: int
    cells: List[str] = Field(default_factory=list)
    is_header: bool = False
    confidence: Confidence = Field(ge=0, le=100)

    model_config = ConfigDict(frozen=True)


class Table(Region):
    id: str
    row_count: int = Field(ge=0)
    column_count: int = Field(ge=0)
    confidence: Confidence = Field(ge=0, le=100)
    page_number: Optional[int] = None
    cells: List[TableCell] = Field(default_factory=list)
    rows: List[TableRow] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_grid(self) -> "Table":
        positions = [(cell.row_index, cell.column_index) for cell in self.cells]
        if len(positions) != len(set(positions)):
            raise ValueError(f"table {self.id} has duplicate cell positions")
        if self.cells and len(self.cells) != self.row_count * self.column_count:
            raise ValueError(
                f"table {self.id} cells do not tile a "
                f"{self.row_count}x{self.column_count} grid"
            )
        return self


class Checkbox(Region):
    id: str
    page_number: int
    state: CheckboxState
    confidence: Confidence = Field(ge=0, le=100)


class Figure(Region):
    id: str
    caption: str = ""
    confidence: Confidence = Field(ge=0, le=100)
    elements: List[str] = Field(default_factory=list)
    page_number: Optional[int] = None


class KeyValuePair(BaseModel):
    key: str
    value: str = ""
    confidence: Confidence = Field(ge=0, le=100)

    model_config = ConfigDict(frozen=True)


class HandwritingStyle(BaseModel):
    is_handwritten: bool
    confidence: Confidence = Field(ge=0, le=100)
    span_count: int = 0

    model_config = ConfigDict(frozen=True)


class DocumentSummary(BaseModel):
    """Headline name, date, amount and id picked out of a prebuilt result."""

    name: Optional[str] = None
    date: Optional[str] = None
    amount: Optional[str] = None
    id: Optional[str] = None
    confidence: Optional[Confidence] = Field(default=None, ge=0, le=100)

    model_config = ConfigDict(frozen=True)

    def labelled(self) -> List[Tuple[str, str]]:
        """Present entries as ``(label, value)`` pairs, in display order."""
        entries = [("Name", self.name), ("Date", self.date), ("Amount", self.amount), ("ID", self.id)]
        return [(label, value) for label, value in entries if value]


class DocumentStats(BaseModel):
    page_count: int = 0
    line_count: int = 0
    word_count: int = 0
    table_count: int = 0
    checkbox_count: int = 0
    selected_checkbox_count: int = 0
    figure_count: int = 0
    key_value_count: int = 0
    average_confidence: float = 0.0
    handwritten_line_count: int = 0
    handwriting_percentage: float = 0.0

    model_config = ConfigDict(frozen=True)


class NormalizedDocument(BaseModel):
    """Stable result of one completed analysis.

    ``raw_text`` and ``stats`` are computed from the pages, tables and other
    collections, so they can never drift from the content they summarize.
    """

    model_selector: Optional[str] = None
    model_id: Optional[str] = None
    api_version: Optional[str] = None
    pages: List[Page] = Field(default_factory=list)
    tables: List[Table] = Field(default_factory=list)
    checkboxes: List[Checkbox] = Field(default_factory=list)
    figures: List[Figure] = Field(default_factory=list)
    key_value_pairs: List[KeyValuePair] = Field(default_factory=list)
    handwriting_styles: List[HandwritingStyle] = Field(default_factory=list)
    summary: DocumentSummary = Field(default_factory=DocumentSummary)

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    def iter_lines(self) -> List[Line]:
        return [line for page in self.pages for line in page.lines]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def raw_text(self) -> str:
        return "\n".join(line.text for line in self.iter_lines())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stats(self) -> DocumentStats:
        lines = self.iter_lines()
        handwritten = sum(1 for line in lines if line.is_handwritten)
        average = round(fmean(line.confidence for line in lines), 2) if lines else 0.0
        return DocumentStats(
            page_count=len(self.pages),
            line_count=len(lines),
            word_count=sum(len(line.words) for line in lines),
            table_count=len(self.tables),
            checkbox_count=len(self.checkboxes),
            selected_checkbox_count=sum(
                1 for box in self.checkboxes if box.state == "selected"
            ),
            figure_count=len(self.figures),
            key_value_count=len(self.key_value_pairs),
            average_confidence=average,
            handwritten_line_count=handwritten,
            handwriting_percentage=round(handwritten / len(lines) * 100, 2) if lines else 0.0,
        )


__all__ = [
    "BoundingBox",
    "Checkbox",
    "CheckboxState",
    "DocumentStats",
    "DocumentSummary",
    "Figure",
    "HandwritingStyle",
    "KeyValuePair",
    "Line",
    "NormalizedDocument",
    "Page",
    "Point",
    "Region",
    "Table",
    "TableCell",
    "TableRow",
    "Word",
]
