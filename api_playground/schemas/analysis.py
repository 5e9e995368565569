"""
Pydantic schemas for request/response analysis.
"""

from typing import Literal

from pydantic import BaseModel


PerformanceRating = Literal["excellent", "good", "average", "slow"]
SecurityRating = Literal["secure", "moderate", "needs_attention"]
StatusCategory = Literal[
    "success", "redirect", "client_error", "server_error", "network_error", "unknown"
]
Complexity = Literal["simple", "nested", "complex"]


class StructureSummary(BaseModel):
    """Shape of a response body."""
    array_count: int
    object_count: int
    max_depth: int
    complexity: Complexity


class AnalysisResult(BaseModel):
    """Heuristic scores and advice derived from one request/response pair."""
    status_category: StatusCategory
    performance_rating: PerformanceRating
    performance_score: float
    security_score: int
    security_rating: SecurityRating
    structure: StructureSummary
    response_size: int
    response_size_display: str
    suggestions: list[str]
