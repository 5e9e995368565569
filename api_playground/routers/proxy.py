"""
Proxy API routes.

Sends a client-described request to its target on the client's behalf,
avoiding browser cross-origin restrictions. Every execution, successful
or not, is saved to the caller's history.
"""

from typing import Any

import httpx
from fastapi import APIRouter, Body, Depends

from ..auth import get_owner_id
from ..config import Settings
from ..dependencies import get_settings, get_store, get_transport
from ..exceptions import ErrorResponse
from ..schemas.history import ProxyResponse
from ..services.history_store import HistoryStore
from ..services.http_executor import execute_proxy_request
from ..services.request_validator import validate_request_config


router = APIRouter(prefix="/api", tags=["proxy"])


@router.post(
    "/proxy",
    response_model=ProxyResponse,
    responses={
        401: {"model": ErrorResponse, "description": "No authenticated owner"},
        422: {"model": ErrorResponse, "description": "Malformed request configuration"},
    }
)
async def proxy_request(
    payload: Any = Body(...),
    owner_id: str = Depends(get_owner_id),
    store: HistoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_transport),
):
    """
    Execute a request through the proxy.

    The payload is a request configuration: ``method``, ``url`` and
    optional ``headers``, ``queryParams`` and ``body``. Timeouts and
    connection failures are reported in the envelope with status 0, not as
    HTTP errors.

    Returns:
        ProxyResponse with the history id, decoded body, status, headers and
        elapsed time

    Raises:
        ValidationError: 422 if the configuration is malformed
    """
    config = validate_request_config(payload)
    record = await execute_proxy_request(
        config,
        owner_id=owner_id,
        store=store,
        timeout=settings.proxy_timeout,
        follow_redirects=settings.follow_redirects,
        transport=transport,
    )
    return ProxyResponse.from_record(record)
