"""
Pydantic schemas for proxy request configurations.

Defines the canonical description of an outbound HTTP call with HTTP
method and URL validation.
"""

from typing import Literal

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# HTTP methods supported by the proxy
HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]

# Methods whose body is parsed and sent to the target
BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})

ALLOWED_SCHEMES = ("http", "https")


class RequestConfig(BaseModel):
    """
    Validated description of one outbound HTTP call.

    ``query_params`` is accepted as ``queryParams`` as well, matching what
    browser clients send. Header keys are kept exactly as provided.
    """
    method: HttpMethod
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    query_params: dict[str, str] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("query_params", "queryParams"),
    )
    body: str | None = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("method", mode="before")
    @classmethod
    def method_required(cls, value):
        if value is None:
            raise ValueError("method is required")
        return value

    @field_validator("url")
    @classmethod
    def url_must_be_absolute(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("URL must not be empty")
        try:
            parsed = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"invalid URL: {e}") from e
        if parsed.scheme not in ALLOWED_SCHEMES:
            raise ValueError("URL must use the http or https scheme")
        if not parsed.host:
            raise ValueError("URL must include a host")
        return value

    @field_validator("headers", "query_params", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return {} if value is None else value

    @property
    def allows_body(self) -> bool:
        """Whether a body on this request is parsed and sent."""
        return self.method in BODY_METHODS
