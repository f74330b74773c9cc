# File: backend/app/db/models.py
# Version: v1.0.0
"""
ORM models for PrimerPair.

Tables:
- PrimerRun: one primer pair search (target digest, search region, parameters
  and the ranked, serialized PrimerPair records it produced).

JSON payloads are stored as text so SQLite and PostgreSQL behave the same.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import String, Integer, DateTime, Enum, Text
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.db.base import Base


class RunStatus(str, PyEnum):
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class PrimerRun(Base):
    """A single primer pair search."""
    __tablename__ = "primer_runs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    status: Mapped[RunStatus] = mapped_column(Enum(RunStatus), default=RunStatus.RUNNING, nullable=False)

    # Input
    sequence_digest: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    sequence_len: Mapped[int] = mapped_column(Integer, nullable=False)
    region_begin: Mapped[int] = mapped_column(Integer, nullable=False)
    region_end: Mapped[int] = mapped_column(Integer, nullable=False)
    parameters_json: Mapped[str] = mapped_column(Text, nullable=False)     # PrimerSearchParameters serial object

    # Output
    pair_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    result_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # list of PrimerPair serial objects
    message: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def touch(self) -> None:
        """Update `updated_at` timestamp."""
        self.updated_at = datetime.utcnow()
