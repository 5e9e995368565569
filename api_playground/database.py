"""
Database configuration for the API Playground.

Uses SQLAlchemy ORM; the URL comes from settings so SQLite, PostgreSQL or
any other SQLAlchemy-supported engine can back the history store.
"""

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given database URL.

    SQLite connections get ``check_same_thread`` disabled (FastAPI runs
    sync dependencies in a thread pool) and foreign keys switched on.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    engine = create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        echo=echo
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        """Enable foreign key constraints for SQLite connections."""
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """
    Initialize the database by creating all tables.

    Called at application startup; existing tables are left untouched.
    """
    # Import models so they register with Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
