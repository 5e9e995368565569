"""
Pydantic schemas package.

Exports all schemas for API request/response validation.
"""

from .request import (
    HttpMethod,
    RequestConfig,
)

from .history import (
    NewHistoryRecord,
    HistoryRecord,
    ProxyResponse,
)

from .diff import (
    DiffKind,
    DiffItem,
    DiffRequest,
    DiffResponse,
    CompareRequest,
    CompareResponse,
)

from .analysis import (
    StructureSummary,
    AnalysisResult,
)

__all__ = [
    # Request schemas
    "HttpMethod",
    "RequestConfig",
    # History schemas
    "NewHistoryRecord",
    "HistoryRecord",
    "ProxyResponse",
    # Diff schemas
    "DiffKind",
    "DiffItem",
    "DiffRequest",
    "DiffResponse",
    "CompareRequest",
    "CompareResponse",
    # Analysis schemas
    "StructureSummary",
    "AnalysisResult",
]
