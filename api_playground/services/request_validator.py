"""
Validation of client-submitted request descriptions.

Turns an untyped payload into a RequestConfig, collecting every offending
field into a single ValidationError. Body content is deliberately left
alone: a body that is not JSON only fails later, at execution time.
"""

from collections.abc import Mapping
from typing import Any

import pydantic

from ..exceptions import ValidationError
from ..schemas.request import RequestConfig


def _format_error(error: dict[str, Any]) -> str:
    loc = ".".join(str(part) for part in error["loc"]) or "request"
    msg = error["msg"]
    # pydantic prefixes custom messages with "Value error, "
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{loc}: {msg}"


def validate_request_config(data: Any) -> RequestConfig:
    """
    Validate and normalize a request description.

    Args:
        data: Decoded JSON payload from the client

    Returns:
        The canonical RequestConfig with defaults applied

    Raises:
        ValidationError: If the payload is not an object, the method is not
            one of GET/POST/PUT/DELETE/PATCH, the URL is not absolute, or
            headers/query params are not string mappings

    Example:
        >>> validate_request_config({"method": "GET", "url": "https://x.com"}).headers
        {}
    """
    if isinstance(data, RequestConfig):
        return data
    if not isinstance(data, Mapping):
        raise ValidationError(["request: expected a JSON object"])

    try:
        return RequestConfig.model_validate(dict(data))
    except pydantic.ValidationError as e:
        raise ValidationError([_format_error(error) for error in e.errors()]) from e
