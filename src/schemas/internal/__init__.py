"""Internal schema definitions."""

from .documents import (  # noqa: F401
    BoundingBox,
    Checkbox,
    DocumentStats,
    DocumentSummary,
    Figure,
    HandwritingStyle,
    KeyValuePair,
    Line,
    NormalizedDocument,
    Page,
    Table,
    TableCell,
    TableRow,
    Word,
)
from .operations import (  # noqa: F401
    AnalysisProgress,
    Failed,
    OperationHandle,
    PollOutcome,
    Running,
    Succeeded,
)
from .raw import RawAnalyzeResult, RawOperationResult  # noqa: F401

__all__ = [
    "AnalysisProgress",
    "BoundingBox",
    "Checkbox",
    "DocumentStats",
    "DocumentSummary",
    "Failed",
    "Figure",
    "HandwritingStyle",
    "KeyValuePair",
    "Line",
    "NormalizedDocument",
    "OperationHandle",
    "Page",
    "PollOutcome",
    "RawAnalyzeResult",
    "RawOperationResult",
    "Running",
    "Succeeded",
    "Table",
    "TableCell",
    "TableRow",
    "Word",
]
