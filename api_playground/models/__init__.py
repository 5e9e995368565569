"""
Models package for the API Playground.

Exports all SQLAlchemy models for database operations.
"""

from .history import HistoryEntry

__all__ = [
    "HistoryEntry",
]
