# File: backend/app/api/v1/primers/deps.py
# Version: v1.0.0
"""
Dependency providers for primer endpoints.

Wires `db_session()` to the project's DB session provider.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.app.db.session import get_db


def db_session(db: Session = Depends(get_db)) -> Session:
    """Return an active SQLAlchemy session."""
    return db
