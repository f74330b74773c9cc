# File: backend/app/db/session.py
# Version: v0.2.0
"""
SQLAlchemy engine and session factory.

- Uses SQLite by default (URL from settings.DB_URL); relative SQLite paths are
  resolved against the repository root and their directory is created.
- Provides `get_db()` FastAPI dependency to manage session lifecycle.
- `init_db()` creates missing tables (primer runs only; no migrations).

This is intentionally synchronous: one row per primer search.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from backend.app.core.config import settings

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def _resolve_sqlite_url(url: str) -> str:
    prefix = "sqlite:///"
    if not url.startswith(prefix) or url == "sqlite:///:memory:":
        return url
    db_path = Path(url[len(prefix):])
    if not db_path.is_absolute():
        db_path = REPO_ROOT / db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return prefix + str(db_path)


DB_URL = _resolve_sqlite_url(settings.DB_URL)

engine = create_engine(DB_URL, future=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_db() -> None:
    """Create tables for all registered models (idempotent)."""
    from backend.app.db import models  # noqa: F401  (registers tables on Base.metadata)
    from backend.app.db.base import Base

    Base.metadata.create_all(bind=engine)
    logger.debug("Database schema ready at %s", engine.url)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and guarantee closing it after use."""
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
