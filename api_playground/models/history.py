"""
History model for storing proxied request records.

Each proxy execution creates exactly one row containing the request as
submitted, the response (or synthesized failure) and timing information.
Rows are append-only.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import String, Text, JSON, Integer, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HistoryEntry(Base):
    """
    SQLAlchemy model for proxy execution history.

    Attributes:
        id: Random UUID assigned at creation
        owner_id: Identifier of the authenticated user who sent the request
        method: HTTP method used
        url: Target URL as submitted (query params are stored separately)
        headers: Headers sent with the request
        query_params: Query parameters appended at send time
        body: Raw request body
        response_body: Decoded response payload (JSON value or text)
        response_headers: Headers received in the response
        status_code: HTTP response status, 0 when no response was received
        status_text: Reason phrase or failure description
        response_time_ms: Elapsed time of the outbound call in milliseconds
        created_at: Timestamp assigned when the row was persisted
    """
    __tablename__ = "history"
    __table_args__ = (
        Index("ix_history_owner_created", "owner_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(255))
    method: Mapped[str] = mapped_column(String(10))
    url: Mapped[str] = mapped_column(Text)
    headers: Mapped[dict] = mapped_column(JSON, default=dict)
    query_params: Mapped[dict] = mapped_column(JSON, default=dict)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    response_body: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    response_headers: Mapped[dict] = mapped_column(JSON, default=dict)
    status_code: Mapped[int] = mapped_column(Integer)
    status_text: Mapped[str] = mapped_column(Text)
    response_time_ms: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
