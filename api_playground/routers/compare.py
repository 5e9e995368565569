"""
Response comparison API routes.
"""

from fastapi import APIRouter, Depends

from ..auth import get_owner_id
from ..dependencies import get_store
from ..exceptions import ValidationError
from ..schemas.diff import CompareRequest, CompareResponse, DiffRequest, DiffResponse
from ..services.history_store import HistoryStore
from ..services.json_diff import diff, summarize
from ..services.json_values import MAX_JSON_DEPTH, json_depth
from .history import get_owned_record


router = APIRouter(prefix="/api", tags=["compare"])


@router.post("/compare", response_model=CompareResponse, response_model_exclude_unset=True)
def compare_history(
    request: CompareRequest,
    owner_id: str = Depends(get_owner_id),
    store: HistoryStore = Depends(get_store),
):
    """
    Diff the response bodies of two of the caller's history records.

    Raises:
        ResourceNotFoundError: 404 if either record is missing
    """
    previous = get_owned_record(store, request.previous_id, owner_id)
    current = get_owned_record(store, request.current_id, owner_id)
    items = diff(previous.response_body, current.response_body)
    return CompareResponse(
        previous_id=previous.id,
        current_id=current.id,
        items=items,
        summary=summarize(items),
    )


@router.post(
    "/diff",
    response_model=DiffResponse,
    response_model_exclude_unset=True,
    dependencies=[Depends(get_owner_id)],
)
def diff_values(request: DiffRequest):
    """
    Diff two arbitrary JSON values.

    Raises:
        ValidationError: 422 if either value is nested too deeply
    """
    errors = [
        f"{name}: JSON nested deeper than {MAX_JSON_DEPTH} levels"
        for name, value in (("previous", request.previous), ("current", request.current))
        if json_depth(value) > MAX_JSON_DEPTH
    ]
    if errors:
        raise ValidationError(errors)

    items = diff(request.previous, request.current)
    return DiffResponse(items=items, summary=summarize(items))
