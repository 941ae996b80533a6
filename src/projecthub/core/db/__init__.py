"""Database utilities - engine and session."""

from src.projecthub.core.db.engine import dispose_engine, get_engine
from src.projecthub.core.db.errors import violates_unique
from src.projecthub.core.db.session import get_session

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    # Errors
    "violates_unique",
]
