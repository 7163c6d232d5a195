# flyer_api/db/session.py

from __future__ import annotations

from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from flyer_api.config import get_settings
from flyer_api.db.models import Base

# ---------------------------------------------------------------------------
# Engine / Session factory
# ---------------------------------------------------------------------------

config = get_settings()
DATABASE_URL = config.DATABASE_URL


def build_engine(url: str, *, echo: bool = False, **kwargs) -> Engine:
    """
    Create an engine for ``url``. SQLite needs a special flag when used in a
    multi-threaded web app.
    """
    connect_args: dict[str, object] = kwargs.pop("connect_args", {})
    if url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)

    return create_engine(url, echo=echo, future=True, connect_args=connect_args, **kwargs)


engine = build_engine(DATABASE_URL, echo=config.DEBUG)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    class_=Session,
)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create all tables that do not exist yet.
    """
    Base.metadata.create_all(bind=bind or engine)


# ---------------------------------------------------------------------------
# FastAPI dependency / helper
# ---------------------------------------------------------------------------


def get_session() -> Generator[Session, None, None]:
    """
    FastAPI-style dependency that yields a database session and ensures it
    is closed afterwards.

    Usage:

        from fastapi import Depends
        from flyer_api.db.session import get_session

        @router.get("/products")
        def list_products(db: Session = Depends(get_session)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


__all__ = [
    "engine",
    "SessionLocal",
    "build_engine",
    "init_db",
    "get_session",
]
