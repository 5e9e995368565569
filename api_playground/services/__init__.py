# Services package

from .request_validator import validate_request_config
from .http_executor import execute_proxy_request
from .history_store import (
    HistoryStore,
    InMemoryHistoryStore,
    SqlAlchemyHistoryStore,
    create_history_store,
)
from .json_diff import diff, summarize
from .analyzer import analyze, analyze_record

__all__ = [
    "validate_request_config",
    "execute_proxy_request",
    "HistoryStore",
    "InMemoryHistoryStore",
    "SqlAlchemyHistoryStore",
    "create_history_store",
    "diff",
    "summarize",
    "analyze",
    "analyze_record",
]
