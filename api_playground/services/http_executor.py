"""
HTTP proxy execution service.

Sends the request described by a validated RequestConfig to its target
with httpx, measures it, and records the outcome in the history store.
Transport failures (timeouts, refused connections, unparseable bodies)
are not raised to the caller: they become status 0 history records so
the client always has something to render.
"""

import json
import logging
import time
from typing import Any

import httpx
from starlette.concurrency import run_in_threadpool

from ..config import DEFAULT_PROXY_TIMEOUT
from ..exceptions import (
    BodyParseError,
    ConnectionFailureError,
    RequestExecutionError,
    RequestTimeoutError,
)
from ..schemas.history import HistoryRecord, NewHistoryRecord
from ..schemas.request import RequestConfig
from .envelope import ResponseEnvelope, build_envelope, build_failure_envelope
from .history_store import HistoryStore


logger = logging.getLogger(__name__)


def build_target_url(config: RequestConfig) -> httpx.URL:
    """
    Final URL with the config's query params appended.

    Params with an empty value are skipped. Params already present in
    ``config.url`` are kept.

    Example:
        >>> str(build_target_url(RequestConfig(method="GET", url="https://x.com/a?p=1",
        ...                                    query_params={"q": "v", "e": ""})))
        'https://x.com/a?p=1&q=v'
    """
    url = httpx.URL(config.url)
    for key, value in config.query_params.items():
        if value:
            url = url.copy_add_param(key, value)
    return url


def parse_request_body(config: RequestConfig) -> Any | None:
    """
    Decode the JSON body to send, if the method carries one.

    Returns:
        The decoded JSON value, or None when there is nothing to send

    Raises:
        BodyParseError: If the body is not valid JSON
    """
    if not config.body or not config.allows_body:
        return None
    try:
        return json.loads(config.body)
    except json.JSONDecodeError as e:
        raise BodyParseError(f"Request body is not valid JSON: {e}") from e
    except RecursionError as e:
        raise BodyParseError("Request body is nested too deeply") from e


def _has_header(headers: dict[str, str], name: str) -> bool:
    return any(key.lower() == name.lower() for key in headers)


async def send_request(
    config: RequestConfig,
    timeout: float = DEFAULT_PROXY_TIMEOUT,
    follow_redirects: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """
    Perform the outbound call described by ``config``.

    Any status code is a successful result. Only the caller-supplied
    headers are sent.

    Raises:
        BodyParseError: If the body is not valid JSON
        RequestTimeoutError: If the target does not answer within ``timeout``
        ConnectionFailureError: If the target cannot be reached
        RequestExecutionError: For any other transport failure
    """
    payload = parse_request_body(config)
    headers = dict(config.headers)
    content: bytes | None = None

    if payload is not None:
        content = json.dumps(payload).encode("utf-8")
        if not _has_header(headers, "Content-Type"):
            headers["Content-Type"] = "application/json"

    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=follow_redirects,
            transport=transport,
        ) as client:
            return await client.request(
                method=config.method,
                url=build_target_url(config),
                headers=headers,
                content=content,
            )
    except httpx.TimeoutException as e:
        raise RequestTimeoutError(f"Request exceeded {timeout} seconds timeout") from e
    except httpx.ConnectError as e:
        raise ConnectionFailureError(f"Could not connect to the API endpoint: {e}") from e
    except httpx.InvalidURL as e:
        raise RequestExecutionError(f"Invalid URL: {e}") from e
    except httpx.HTTPError as e:
        raise RequestExecutionError(str(e) or type(e).__name__) from e
    except Exception as e:
        logger.exception("Unexpected error proxying %s %s", config.method, config.url)
        raise RequestExecutionError(str(e) or type(e).__name__) from e


async def execute_proxy_request(
    config: RequestConfig,
    owner_id: str,
    store: HistoryStore,
    timeout: float = DEFAULT_PROXY_TIMEOUT,
    follow_redirects: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HistoryRecord:
    """
    Execute a proxied request and persist the outcome.

    Args:
        config: The validated request to send
        owner_id: The authenticated user the history record belongs to
        store: History store receiving the record
        timeout: Outbound timeout in seconds
        follow_redirects: Whether redirects are followed
        transport: Optional httpx transport (tests use ``httpx.MockTransport``)

    Returns:
        The persisted history record. Failed calls produce a record with
        status code 0 rather than an exception.

    Raises:
        StorageError: If the record cannot be persisted
    """
    start_time = time.perf_counter()
    envelope: ResponseEnvelope
    try:
        response = await send_request(
            config,
            timeout=timeout,
            follow_redirects=follow_redirects,
            transport=transport,
        )
    except RequestExecutionError as e:
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.warning("Proxy %s %s failed: %s", config.method, config.url, e.message)
        envelope = build_failure_envelope(e, elapsed_ms)
    else:
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "Proxy %s %s -> %d in %dms",
            config.method, config.url, response.status_code, elapsed_ms,
        )
        envelope = build_envelope(response, elapsed_ms)

    return await run_in_threadpool(store.create, NewHistoryRecord(
        owner_id=owner_id,
        method=config.method,
        url=config.url,
        headers=config.headers,
        query_params=config.query_params,
        body=config.body,
        response_body=envelope.response_body,
        response_headers=envelope.response_headers,
        status_code=envelope.status_code,
        status_text=envelope.status_text,
        response_time_ms=envelope.response_time_ms,
    ))
