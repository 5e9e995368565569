"""
Pydantic schemas for proxy execution history.

Defines the persisted request/response record and the envelope returned
by the proxy endpoint.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .request import HttpMethod


class NewHistoryRecord(BaseModel):
    """
    A request/response pair ready to be persisted.

    The store assigns ``id`` and ``created_at``; everything else is fixed
    by the proxy executor.
    """
    owner_id: str
    method: HttpMethod
    url: str
    headers: dict[str, str] = {}
    query_params: dict[str, str] = {}
    body: str | None = None
    response_body: Any = None
    response_headers: dict[str, str] = {}
    status_code: int
    status_text: str
    response_time_ms: int

    model_config = ConfigDict(frozen=True)


class HistoryRecord(NewHistoryRecord):
    """Schema for a stored history record with all fields."""
    id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ProxyResponse(BaseModel):
    """
    Envelope returned by ``POST /api/proxy``.

    Field names follow the browser client's camelCase contract.
    """
    id: str
    data: Any = None
    status: int
    status_text: str = Field(serialization_alias="statusText")
    headers: dict[str, str]
    response_time_ms: int = Field(serialization_alias="responseTimeMs")

    @classmethod
    def from_record(cls, record: HistoryRecord) -> "ProxyResponse":
        return cls(
            id=record.id,
            data=record.response_body,
            status=record.status_code,
            status_text=record.status_text,
            headers=record.response_headers,
            response_time_ms=record.response_time_ms,
        )
