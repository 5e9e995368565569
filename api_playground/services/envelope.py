"""
Response envelope construction.

Normalizes a target's reply, or a failed attempt to get one, into the
response half of a history record.
"""

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..exceptions import RequestExecutionError
from .json_values import MAX_JSON_DEPTH, json_depth


# Status code recorded when no response was received
NO_RESPONSE_STATUS = 0


@dataclass(frozen=True)
class ResponseEnvelope:
    """Response fields of a HistoryRecord."""
    response_body: Any
    status_code: int
    status_text: str
    response_time_ms: int
    response_headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_failure(self) -> bool:
        return self.status_code == NO_RESPONSE_STATUS


def decode_body(response: httpx.Response) -> Any:
    """
    Decode a response payload.

    JSON is decoded whenever the payload parses, whatever the declared
    content type; otherwise the text is kept. JSON nested deeper than
    ``MAX_JSON_DEPTH`` is kept as text as well. An empty payload is None.
    """
    if not response.content:
        return None
    try:
        decoded = response.json()
    except (ValueError, RecursionError):
        # JSONDecodeError, UnicodeDecodeError and pathologically deep payloads
        return response.text
    if json_depth(decoded) > MAX_JSON_DEPTH:
        return response.text
    return decoded


def build_envelope(response: httpx.Response, elapsed_ms: int) -> ResponseEnvelope:
    """Package a received response, whatever its status code."""
    return ResponseEnvelope(
        response_body=decode_body(response),
        response_headers=dict(response.headers),
        status_code=response.status_code,
        status_text=response.reason_phrase or "",
        response_time_ms=elapsed_ms,
    )


def build_failure_envelope(error: RequestExecutionError, elapsed_ms: int) -> ResponseEnvelope:
    """Synthesize an envelope for an outbound call that got no response."""
    return ResponseEnvelope(
        response_body={"error": error.message},
        status_code=NO_RESPONSE_STATUS,
        status_text=error.describe(),
        response_time_ms=elapsed_ms,
    )


def response_size(body: Any) -> int:
    """UTF-8 byte length of the compact JSON serialization of ``body``."""
    serialized = json.dumps(body, ensure_ascii=False, separators=(",", ":"))
    return len(serialized.encode("utf-8"))


def format_size(size: int) -> str:
    """
    Human readable size.

    Example:
        >>> format_size(512)
        '512 bytes'
        >>> format_size(2048)
        '2.0 KB'
    """
    if size > 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size} bytes"
