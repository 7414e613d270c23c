"""
Database connection management for Katsuyou.

SQLite through SQLAlchemy. Engines are cached per database path.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from katsuyou.db.models import Base
from katsuyou.settings import DB_PATH

_engine_cache: Dict[str, Engine] = {}

MEMORY_DB = ":memory:"


def _set_sqlite_pragma(dbapi_connection: Any, _connection_record: Any) -> None:
    """Enable foreign keys for SQLite connections."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_db_path() -> Optional[str]:
    """Get the configured database path, or None if the database does not exist yet."""
    if DB_PATH.exists():
        return str(DB_PATH)
    return None


def get_engine(db_path: Union[str, Path, None] = None) -> Engine:
    """
    Get or create a SQLAlchemy engine for the given database path.

    Pass ":memory:" for a throwaway in-memory database (not cached).
    """
    if db_path is None:
        db_path = DB_PATH

    key = str(db_path)
    if key == MEMORY_DB:
        engine = create_engine("sqlite://", echo=False)
        event.listen(engine, "connect", _set_sqlite_pragma)
        return engine

    if key not in _engine_cache:
        engine = create_engine(f"sqlite:///{key}", echo=False)
        event.listen(engine, "connect", _set_sqlite_pragma)
        _engine_cache[key] = engine

    return _engine_cache[key]


def dispose_engine(db_path: Union[str, Path]) -> None:
    """Close the pooled connections of a cached engine and forget it."""
    engine = _engine_cache.pop(str(db_path), None)
    if engine is not None:
        engine.dispose()


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(engine)


def get_session(db_path: Union[str, Path, None] = None) -> Session:
    """Open a session on the given database, creating the schema if needed."""
    engine = get_engine(db_path)
    init_db(engine)
    return sessionmaker(bind=engine)()


@contextmanager
def session_scope(db_path: Union[str, Path, None] = None) -> Iterator[Session]:
    """
    Context manager for a database session.

    Commits on success, rolls back on exception.

    Example:
        with session_scope() as session:
            session.add(Entry(seq=1, pos="v1"))
    """
    session = get_session(db_path)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
