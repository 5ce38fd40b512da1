"""Database utilities - engine and session."""

from src.scrum.core.db.engine import dispose_engine, get_engine
from src.scrum.core.db.session import get_session, get_session_factory

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    "get_session_factory",
]
