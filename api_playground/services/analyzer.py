"""
Heuristic analysis of a single request/response pair.

Scores are deliberately simple and explainable: fixed deductions for
security, fixed thresholds for performance, and a body shape summary.
"""

from collections.abc import Mapping
from typing import Any

from ..schemas.analysis import (
    AnalysisResult,
    Complexity,
    PerformanceRating,
    SecurityRating,
    StatusCategory,
    StructureSummary,
)
from ..schemas.history import HistoryRecord
from .envelope import NO_RESPONSE_STATUS, ResponseEnvelope, format_size, response_size
from .json_values import JsonKind, kind_of


SLOW_THRESHOLD_MS = 2000
AVERAGE_THRESHOLD_MS = 1000
GOOD_THRESHOLD_MS = 500

# Bodies above this many bytes get a pagination suggestion
LARGE_BODY_BYTES = 100 * 1024

CACHE_HEADERS = ("Cache-Control", "ETag", "Expires", "Last-Modified")

HTTPS_PENALTY = 30
AUTHORIZATION_PENALTY = 20
USER_AGENT_PENALTY = 10
CORS_WILDCARD_PENALTY = 15


def performance_rating(response_time_ms: int) -> PerformanceRating:
    if response_time_ms > SLOW_THRESHOLD_MS:
        return "slow"
    if response_time_ms > AVERAGE_THRESHOLD_MS:
        return "average"
    if response_time_ms > GOOD_THRESHOLD_MS:
        return "good"
    return "excellent"


def performance_score(response_time_ms: int) -> float:
    """0-100, losing a point every 50ms."""
    return max(0.0, 100 - response_time_ms / 50)


def uses_https(url: str) -> bool:
    return url.lower().startswith("https://")


def _lower_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {name.lower(): value for name, value in headers.items()}


def _header_names(headers: Mapping[str, str]) -> set[str]:
    return {name.lower() for name in headers}


def security_score(
    request_url: str,
    request_headers: Mapping[str, str],
    response_headers: Mapping[str, str],
) -> int:
    """
    Start at 100 and deduct for each missing safeguard, never below 0.

    Header names are matched case-insensitively.
    """
    sent = _header_names(request_headers)
    received = _lower_headers(response_headers)

    score = 100
    if not uses_https(request_url):
        score -= HTTPS_PENALTY
    if "authorization" not in sent:
        score -= AUTHORIZATION_PENALTY
    if "user-agent" not in sent:
        score -= USER_AGENT_PENALTY
    if received.get("access-control-allow-origin", "").strip() == "*":
        score -= CORS_WILDCARD_PENALTY
    return max(0, score)


def security_rating(score: int) -> SecurityRating:
    if score > 80:
        return "secure"
    if score > 60:
        return "moderate"
    return "needs_attention"


def status_category(status_code: int) -> StatusCategory:
    if status_code == NO_RESPONSE_STATUS:
        return "network_error"
    if 200 <= status_code < 300:
        return "success"
    if 300 <= status_code < 400:
        return "redirect"
    if 400 <= status_code < 500:
        return "client_error"
    if status_code >= 500:
        return "server_error"
    return "unknown"


def _complexity(depth: int) -> Complexity:
    if depth <= 1:
        return "simple"
    if depth <= 3:
        return "nested"
    return "complex"


def summarize_structure(body: Any) -> StructureSummary:
    """
    Count arrays and objects in ``body`` and measure its nesting depth.

    Scalars have depth 0 and every container adds one level, so
    ``{"a": 1}`` is depth 1 and ``{"a": [1]}`` depth 2.
    """
    arrays = 0
    objects = 0
    depth = 0

    stack = [(body, 0)]
    while stack:
        value, level = stack.pop()
        kind = kind_of(value)
        if kind is JsonKind.ARRAY:
            arrays += 1
            children = value
        elif kind is JsonKind.OBJECT:
            objects += 1
            children = value.values()
        else:
            continue
        depth = max(depth, level + 1)
        stack.extend((child, level + 1) for child in children)

    return StructureSummary(
        array_count=arrays,
        object_count=objects,
        max_depth=depth,
        complexity=_complexity(depth),
    )


def build_suggestions(
    request_url: str,
    request_headers: Mapping[str, str],
    response: ResponseEnvelope,
    size: int,
) -> list[str]:
    """Advice strings in a fixed order, one per triggered check."""
    sent = _header_names(request_headers)
    received = _header_names(response.response_headers)
    suggestions: list[str] = []

    if not uses_https(request_url):
        suggestions.append("Use HTTPS for secure communication")
    if "authorization" not in sent:
        suggestions.append("Consider adding authentication headers")
    if "user-agent" not in sent:
        suggestions.append("Add a User-Agent header for better API compatibility")
    if response.response_time_ms > SLOW_THRESHOLD_MS:
        suggestions.append("Response time is high - consider caching or optimization")
    if size > LARGE_BODY_BYTES:
        suggestions.append(
            f"Response body is large ({format_size(size)}) - consider pagination or field filtering"
        )
    if not response.is_failure and not any(name.lower() in received for name in CACHE_HEADERS):
        suggestions.append("Add Cache-Control headers for better performance")

    return suggestions


def analyze(
    response: ResponseEnvelope,
    request_url: str,
    request_headers: Mapping[str, str] | None = None,
) -> AnalysisResult:
    """
    Analyze one response together with the request that produced it.

    Args:
        response: The response envelope (status, headers, body, timing)
        request_url: URL the request was sent to
        request_headers: Headers sent with the request

    Returns:
        AnalysisResult with scores, structure summary and suggestions
    """
    request_headers = request_headers or {}
    size = response_size(response.response_body)
    score = security_score(request_url, request_headers, response.response_headers)

    return AnalysisResult(
        status_category=status_category(response.status_code),
        performance_rating=performance_rating(response.response_time_ms),
        performance_score=performance_score(response.response_time_ms),
        security_score=score,
        security_rating=security_rating(score),
        structure=summarize_structure(response.response_body),
        response_size=size,
        response_size_display=format_size(size),
        suggestions=build_suggestions(request_url, request_headers, response, size),
    )


def analyze_record(record: HistoryRecord) -> AnalysisResult:
    """Analyze a stored history record."""
    envelope = ResponseEnvelope(
        response_body=record.response_body,
        response_headers=record.response_headers,
        status_code=record.status_code,
        status_text=record.status_text,
        response_time_ms=record.response_time_ms,
    )
    return analyze(envelope, record.url, record.headers)
