"""Schema package for external and internal contracts."""

from .requests import AnalysisRequest, AnalyzeOptions
from .responses import AnalysisRunResult, ErrorResponse, ModelCatalog

__all__ = [
    "AnalysisRequest",
    "AnalysisRunResult",
    "AnalyzeOptions",
    "ErrorResponse",
    "ModelCatalog",
]
