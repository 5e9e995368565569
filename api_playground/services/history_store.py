"""
History store for persisting proxy executions.

One interface, two adapters: an ordered in-memory map for tests and local
runs, and a SQLAlchemy-backed store for real deployments. The adapter is
chosen from settings by ``create_history_store``; the resulting instance is
handed to the application at startup.
"""

import abc
import copy
import logging
import threading
import uuid
from datetime import datetime, timezone

from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..config import Settings
from ..database import create_db_engine, create_session_factory, init_db
from ..exceptions import StorageError
from ..models.history import HistoryEntry
from ..schemas.history import HistoryRecord, NewHistoryRecord


logger = logging.getLogger(__name__)


def new_record_id() -> str:
    """Collision-resistant identifier for a history record."""
    return str(uuid.uuid4())


class HistoryStore(abc.ABC):
    """Append-only storage of history records."""

    @abc.abstractmethod
    def create(self, record: NewHistoryRecord) -> HistoryRecord:
        """Persist ``record``, assigning its id and creation time."""

    @abc.abstractmethod
    def list_by_owner(self, owner_id: str, limit: int | None = None) -> list[HistoryRecord]:
        """All records of ``owner_id``, most recent first."""

    @abc.abstractmethod
    def get_by_id(self, record_id: str) -> HistoryRecord | None:
        """Point lookup; None when no record has that id."""

    def close(self) -> None:
        """Release backend resources."""


class InMemoryHistoryStore(HistoryStore):
    """History kept in an insertion-ordered dict. Contents die with the process."""

    def __init__(self):
        self._records: dict[str, HistoryRecord] = {}
        self._lock = threading.Lock()

    def create(self, record: NewHistoryRecord) -> HistoryRecord:
        stored = HistoryRecord(
            **copy.deepcopy(record.model_dump()),
            id=new_record_id(),
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._records[stored.id] = stored
        return stored

    def list_by_owner(self, owner_id: str, limit: int | None = None) -> list[HistoryRecord]:
        with self._lock:
            owned = [r for r in self._records.values() if r.owner_id == owner_id]
        # Insertion order breaks created_at ties, newest first
        owned.reverse()
        owned.sort(key=lambda r: r.created_at, reverse=True)
        return owned[:limit] if limit is not None else owned

    def get_by_id(self, record_id: str) -> HistoryRecord | None:
        with self._lock:
            return self._records.get(record_id)


class SqlAlchemyHistoryStore(HistoryStore):
    """History persisted through SQLAlchemy; one session per operation."""

    def __init__(self, engine: Engine, session_factory: sessionmaker | None = None):
        self.engine = engine
        self.session_factory = session_factory or create_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlAlchemyHistoryStore":
        """Create a store for ``database_url``, creating tables if needed."""
        engine = create_db_engine(database_url)
        init_db(engine)
        return cls(engine)

    @staticmethod
    def _to_record(entry: HistoryEntry) -> HistoryRecord:
        record = HistoryRecord.model_validate(entry)
        # SQLite drops tzinfo on the way back
        if record.created_at.tzinfo is None:
            record = record.model_copy(
                update={"created_at": record.created_at.replace(tzinfo=timezone.utc)}
            )
        return record

    def create(self, record: NewHistoryRecord) -> HistoryRecord:
        entry = HistoryEntry(
            id=new_record_id(),
            created_at=datetime.now(timezone.utc),
            **record.model_dump(),
        )
        try:
            with self.session_factory() as db:
                db.add(entry)
                db.commit()
                db.refresh(entry)
                return self._to_record(entry)
        except SQLAlchemyError as e:
            logger.error("Failed to persist history record: %s", e)
            raise StorageError("Failed to save history record") from e

    def list_by_owner(self, owner_id: str, limit: int | None = None) -> list[HistoryRecord]:
        query = (
            select(HistoryEntry)
            .where(HistoryEntry.owner_id == owner_id)
            .order_by(HistoryEntry.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        try:
            with self.session_factory() as db:
                return [self._to_record(entry) for entry in db.scalars(query).all()]
        except SQLAlchemyError as e:
            logger.error("Failed to list history for owner %s: %s", owner_id, e)
            raise StorageError("Failed to load history") from e

    def get_by_id(self, record_id: str) -> HistoryRecord | None:
        try:
            with self.session_factory() as db:
                entry = db.get(HistoryEntry, record_id)
                return self._to_record(entry) if entry is not None else None
        except SQLAlchemyError as e:
            logger.error("Failed to load history record %s: %s", record_id, e)
            raise StorageError("Failed to load history record") from e

    def close(self) -> None:
        self.engine.dispose()


def create_history_store(settings: Settings) -> HistoryStore:
    """Build the history store selected by ``settings.history_backend``."""
    if settings.history_backend == "memory":
        logger.info("Using in-memory history store")
        return InMemoryHistoryStore()

    logger.info("Using SQL history store at %s", settings.database_url)
    return SqlAlchemyHistoryStore.from_url(settings.database_url)
