# File: backend/app/services/run_store.py
# Version: v1.0.0
"""
Primer run persistence helpers (service layer).

These functions encapsulate the DB logic so callers (routers, CLI) don't
need to import SQLAlchemy session management details. Results are stored as
serialized PrimerPair objects only (see `PrimerPair.to_serial_object`).
"""
from __future__ import annotations

import hashlib
import json
from typing import List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from backend.app.core.primer.parameters import PrimerSearchParameters
from backend.app.core.primer.primer import PrimerPair
from backend.app.db.models import PrimerRun, RunStatus


def digest_sequence(sequence: str) -> str:
    """SHA-256 hex digest of the upper-cased target sequence."""
    return hashlib.sha256(sequence.upper().encode("ascii")).hexdigest()


def record_run_start(
    db: Session,
    *,
    sequence: str,
    region_begin: int,
    region_end: int,
    params: PrimerSearchParameters,
) -> PrimerRun:
    """Create a RUNNING primer run row."""
    run = PrimerRun(
        sequence_digest=digest_sequence(sequence),
        sequence_len=len(sequence),
        region_begin=region_begin,
        region_end=region_end,
        parameters_json=json.dumps(params.to_serial_object()),
        status=RunStatus.RUNNING,
    )
    db.add(run)
    db.commit()
    db.refresh(run)
    return run


def record_run_completion(
    db: Session,
    *,
    run_id: str,
    pairs: List[PrimerPair],
    cancelled: bool = False,
    message: Optional[str] = None,
) -> PrimerRun | None:
    """Store serialized pairs and mark the run COMPLETED (or CANCELLED)."""
    run = db.get(PrimerRun, run_id)
    if run is None:
        return None
    run.status = RunStatus.CANCELLED if cancelled else RunStatus.COMPLETED
    run.pair_count = len(pairs)
    run.result_json = json.dumps([p.to_serial_object() for p in pairs])
    run.message = message
    run.touch()
    db.commit()
    db.refresh(run)
    return run


def record_run_failure(db: Session, *, run_id: str, message: str) -> PrimerRun | None:
    run = db.get(PrimerRun, run_id)
    if run is None:
        return None
    run.status = RunStatus.FAILED
    run.message = message[:255]
    run.touch()
    db.commit()
    db.refresh(run)
    return run


def list_runs(db: Session, *, limit: int = 50, offset: int = 0) -> tuple[int, list[PrimerRun]]:
    """Return (total, items), newest first."""
    stmt = select(PrimerRun).order_by(PrimerRun.created_at.desc()).limit(limit).offset(offset)
    total = db.execute(select(func.count()).select_from(PrimerRun)).scalar_one()
    items = list(db.execute(stmt).scalars())
    return total, items


def get_run(db: Session, run_id: str) -> PrimerRun | None:
    return db.get(PrimerRun, run_id)


def load_run_pairs(run: PrimerRun) -> List[PrimerPair]:
    """Deserialize the stored pairs of a run (empty when none were stored)."""
    if not run.result_json:
        return []
    return [PrimerPair.from_serial_object(obj) for obj in json.loads(run.result_json)]


def delete_run(db: Session, run_id: str) -> bool:
    res = db.execute(delete(PrimerRun).where(PrimerRun.id == run_id))
    db.commit()
    return res.rowcount > 0
