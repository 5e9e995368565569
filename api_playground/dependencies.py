"""
FastAPI dependencies exposing objects built at startup.

The history store and settings live on ``app.state``; routes reach them
through these functions so tests can swap them with
``app.dependency_overrides``.
"""

import httpx
from fastapi import Request

from .config import Settings
from .services.history_store import HistoryStore


def get_store(request: Request) -> HistoryStore:
    return request.app.state.history_store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_transport(request: Request) -> httpx.AsyncBaseTransport | None:
    """Outbound transport override; None means a real network transport."""
    return request.app.state.transport
