"""Database layer for Katsuyou: dictionary entries and their conjugated forms."""

from katsuyou.db.connection import (
    dispose_engine,
    get_db_path,
    get_engine,
    get_session,
    init_db,
    session_scope,
)
from katsuyou.db.models import Base, ConjugatedForm, Entry, Headword

__all__ = [
    "Base",
    "ConjugatedForm",
    "Entry",
    "Headword",
    "dispose_engine",
    "get_db_path",
    "get_engine",
    "get_session",
    "init_db",
    "session_scope",
]
