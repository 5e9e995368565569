"""
History record API routes.

Provides read access to the caller's proxy execution history. Records are
created by the proxy endpoint and are never modified.
"""

from fastapi import APIRouter, Depends, Query

from ..auth import get_owner_id
from ..dependencies import get_store
from ..exceptions import ResourceNotFoundError
from ..schemas.analysis import AnalysisResult
from ..schemas.history import HistoryRecord
from ..services.analyzer import analyze_record
from ..services.history_store import HistoryStore


router = APIRouter(prefix="/api/history", tags=["history"])


def get_owned_record(store: HistoryStore, record_id: str, owner_id: str) -> HistoryRecord:
    """
    Load a record belonging to ``owner_id``.

    Records of other owners are reported as missing rather than forbidden
    so ids cannot be probed.

    Raises:
        ResourceNotFoundError: 404 if the record does not exist for this owner
    """
    record = store.get_by_id(record_id)
    if record is None or record.owner_id != owner_id:
        raise ResourceNotFoundError("History record", record_id)
    return record


@router.get("", response_model=list[HistoryRecord])
def list_history(
    limit: int | None = Query(default=None, ge=1, le=1000),
    owner_id: str = Depends(get_owner_id),
    store: HistoryStore = Depends(get_store),
):
    """
    Get the caller's history records, most recent first.

    Args:
        limit: Maximum number of records to return
        owner_id: Authenticated owner
        store: History store
    """
    return store.list_by_owner(owner_id, limit=limit)


@router.get("/{record_id}", response_model=HistoryRecord)
def get_history(
    record_id: str,
    owner_id: str = Depends(get_owner_id),
    store: HistoryStore = Depends(get_store),
):
    """
    Get a single history record by ID.

    Raises:
        ResourceNotFoundError: 404 if history record not found
    """
    return get_owned_record(store, record_id, owner_id)


@router.get("/{record_id}/analysis", response_model=AnalysisResult)
def analyze_history(
    record_id: str,
    owner_id: str = Depends(get_owner_id),
    store: HistoryStore = Depends(get_store),
):
    """
    Score a stored request/response pair for security and performance and
    summarize the response body's structure.
    """
    return analyze_record(get_owned_record(store, record_id, owner_id))
