"""
Pydantic schemas for response comparison.
"""

from typing import Any, Literal

from pydantic import BaseModel


DiffKind = Literal["added", "removed", "changed", "unchanged"]


class DiffItem(BaseModel):
    """
    One addressed difference between two JSON values.

    ``old_value``/``new_value`` are left unset (not ``None``) when they do
    not apply, so a JSON ``null`` stays distinguishable from "absent".
    Serialize with ``exclude_unset=True``.
    """
    path: str
    kind: DiffKind
    old_value: Any = None
    new_value: Any = None


class DiffRequest(BaseModel):
    """Two raw JSON values to compare."""
    previous: Any = None
    current: Any = None


class CompareRequest(BaseModel):
    """Two history records whose response bodies are compared."""
    previous_id: str
    current_id: str


class DiffResponse(BaseModel):
    items: list[DiffItem]
    summary: dict[DiffKind, int]


class CompareResponse(DiffResponse):
    previous_id: str
    current_id: str
