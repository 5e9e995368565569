"""
Runtime configuration for the API Playground.

Settings are read from ``API_PLAYGROUND_*`` environment variables so the
same build can run against a local SQLite file, an in-memory store for
tests, or a production database.
"""

import os
from dataclasses import dataclass, field
from typing import Literal


ENV_PREFIX = "API_PLAYGROUND_"

# SQLite database URL - file-based storage
DEFAULT_DATABASE_URL = "sqlite:///./api_playground.db"

# Outbound request timeout in seconds
DEFAULT_PROXY_TIMEOUT = 30.0

HistoryBackend = Literal["sql", "memory"]


def _env(name: str, default: str) -> str:
    return os.environ.get(ENV_PREFIX + name, default)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """
    Application settings.

    Attributes:
        database_url: SQLAlchemy URL used by the SQL history backend
        history_backend: "sql" for the relational store, "memory" for the
            in-process store
        proxy_timeout: Outbound request timeout in seconds
        follow_redirects: Whether the proxy follows redirects
        cors_origins: Allowed CORS origins for the browser UI
        log_level: Root log level name
    """
    database_url: str = DEFAULT_DATABASE_URL
    history_backend: HistoryBackend = "sql"
    proxy_timeout: float = DEFAULT_PROXY_TIMEOUT
    follow_redirects: bool = True
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        backend = _env("HISTORY_BACKEND", "sql").strip().lower()
        if backend not in ("sql", "memory"):
            raise ValueError(
                f"{ENV_PREFIX}HISTORY_BACKEND must be 'sql' or 'memory', got {backend!r}"
            )

        origins = [
            origin.strip()
            for origin in _env("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        return cls(
            database_url=_env("DATABASE_URL", DEFAULT_DATABASE_URL),
            history_backend=backend,
            proxy_timeout=float(_env("PROXY_TIMEOUT", str(DEFAULT_PROXY_TIMEOUT))),
            follow_redirects=_env_bool("FOLLOW_REDIRECTS", True),
            cors_origins=origins or ["*"],
            log_level=_env("LOG_LEVEL", "INFO").upper(),
        )
