"""
flyer_api.db
============

Database package for the flyer backend.

This module centralizes the public DB primitives so the rest of the
service can import them from a single place, e.g.:

    from flyer_api.db import Base, engine, SessionLocal, get_session
"""

from .models import Base
from .session import SessionLocal, engine, get_session, init_db

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_session",
    "init_db",
]
