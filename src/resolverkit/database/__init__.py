"""
SQLAlchemy-backed persistence for resolverkit
"""

from .connection import create_engine_from_settings, create_session_factory, open_session
from .store import SQLAlchemyInstanceStore

__all__ = [
    "SQLAlchemyInstanceStore",
    "create_engine_from_settings",
    "create_session_factory",
    "open_session",
]
