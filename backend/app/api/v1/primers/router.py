# File: backend/app/api/v1/primers/router.py
# Version: v1.0.0
"""
Primer endpoints:
- POST /design               ← ranked primer pairs for a search region (stores a run)
- POST /melting-temperature  ← nearest-neighbor Tm, GC, H/S of one primer
- POST /dimer-score          ← hydrogen-bond dimer score of two primers
- GET /runs
- GET /runs/{run_id}
- DELETE /runs/{run_id}
- GET /parameters            ← returns current primer search parameters
- PUT /parameters            ← validates & persists new parameters
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backend.app.core.primer.designer import PairSearchEngine
from backend.app.core.primer.dimer import DimerScorer
from backend.app.core.primer.parameters import PrimerSearchParameters
from backend.app.core.primer.schemas import (
    DimerScoreRequest,
    DimerScoreResponse,
    MeltingTemperatureRequest,
    MeltingTemperatureResponse,
    PrimerDesignRequest,
    PrimerDesignResponse,
    pair_info,
)
from backend.app.core.primer.sequence import ClosedIntRange, DnaSequence, require_acgt
from backend.app.core.primer.thermodynamics import (
    enthalpy,
    entropy,
    gc_percent,
    melting_temperature,
)
from backend.app.config.config_primers import ensure_current_exists, load_current_params, save_current_params
from backend.app.db.schemas.run import RunDetail, RunItem, RunListResponse
from backend.app.services import run_store

from .deps import db_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/primers", tags=["primers"])


@router.get("/parameters", response_model=PrimerSearchParameters)
def get_parameters():
    """
    Return the current editable primer search parameters.
    If not initialized, create primers_param.json from defaults and return it.
    """
    _, params = ensure_current_exists()
    return params


@router.put("/parameters", response_model=PrimerSearchParameters)
def update_parameters(payload: PrimerSearchParameters):
    """
    Validate and persist new primer search parameters into primers_param.json.
    """
    save_current_params(payload)
    return payload


@router.post("/design", response_model=PrimerDesignResponse)
def design_primers(
    payload: PrimerDesignRequest,
    db: Session = Depends(db_session),
):
    """
    Find ranked primer pairs inside the search region (1-based inclusive).
    If `parameters` is omitted, the server uses the stored parameters
    (primers_param.json with default fallback).
    """
    seq = payload.sequence
    begin = payload.regionBegin or 1
    end = payload.regionEnd or len(seq)
    params = payload.parameters or load_current_params()

    dna = DnaSequence(seq)
    region = ClosedIntRange(begin, end)
    if dna.is_empty() or not dna.is_valid_range(region):
        raise HTTPException(status_code=400, detail="Invalid search region coordinates.")

    # Inputs are validated; only real searches are stored
    run = None
    if payload.store:
        run = run_store.record_run_start(db, sequence=seq, region_begin=begin, region_end=end, params=params)

    try:
        result = PairSearchEngine().search(dna, region, params)
    except ValueError as ex:
        if run is not None:
            run_store.record_run_failure(db, run_id=run.id, message=str(ex))
        raise HTTPException(status_code=400, detail=str(ex))

    diag = result.diagnostics
    if run is not None:
        run_store.record_run_completion(
            db, run_id=run.id, pairs=result.pairs, cancelled=diag.cancelled, message=diag.message,
        )
    logger.info("Primer design on %d bp [%d, %d]: %d pair(s)", len(seq), begin, end, len(result.ranked))

    return PrimerDesignResponse(
        runId=run.id if run is not None else None,
        regionBegin=begin,
        regionEnd=end,
        pairCount=len(result.ranked),
        message=diag.message,
        pairs=[pair_info(i + 1, r) for i, r in enumerate(result.ranked)],
        serialized=[p.to_serial_object() for p in result.pairs],
        rejectionSummary=dict(diag.top_reasons(10)),
    )


@router.post("/melting-temperature", response_model=MeltingTemperatureResponse)
def primer_melting_temperature(payload: MeltingTemperatureRequest):
    """Nearest-neighbor Tm of a single primer (A/C/G/T only)."""
    seq = DnaSequence(payload.sequence)
    try:
        require_acgt(seq, "Primer sequence")
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))
    return MeltingTemperatureResponse(
        sequence=seq.sequence,
        tm=melting_temperature(seq, payload.sodiumConcentration, payload.primerDnaConcentration),
        gc=gc_percent(seq),
        enthalpy=enthalpy(seq),
        entropy=entropy(seq),
        palindrome=seq.is_palindrome(),
        homoDimerScore=DimerScorer().homo_dimer_score(seq),
    )


@router.post("/dimer-score", response_model=DimerScoreResponse)
def primer_dimer_score(payload: DimerScoreRequest):
    """Hydrogen-bond dimer score of two sequences (0 when either is empty)."""
    scorer = DimerScorer()
    return DimerScoreResponse(
        score=scorer.dimer_score(payload.sequence1, payload.sequence2),
        maximumHydrogenBonds=scorer.maximum_hydrogen_bonds(payload.sequence1, payload.sequence2),
    )


def _run_fields(run) -> dict:
    return dict(
        id=run.id,
        status=run.status.value,
        created_at=run.created_at,
        updated_at=run.updated_at,
        sequence_digest=run.sequence_digest,
        sequence_len=run.sequence_len,
        region_begin=run.region_begin,
        region_end=run.region_end,
        pair_count=run.pair_count,
        message=run.message,
    )


@router.get("/runs", response_model=RunListResponse)
def list_runs(limit: int = 50, offset: int = 0, db: Session = Depends(db_session)):
    """List recent primer design runs (lightweight view)."""
    total, items = run_store.list_runs(db, limit=limit, offset=offset)
    return RunListResponse(total=total, items=[RunItem(**_run_fields(r)) for r in items])


@router.get("/runs/{run_id}", response_model=RunDetail)
def get_run(run_id: str, db: Session = Depends(db_session)):
    """Return a full run, including its parameters and serialized pairs."""
    run = run_store.get_run(db, run_id)
    if not run:
        raise HTTPException(status_code=404, detail="Run not found.")
    return RunDetail(
        **_run_fields(run),
        parameters=json.loads(run.parameters_json),
        pairs=json.loads(run.result_json) if run.result_json else [],
    )


@router.delete("/runs/{run_id}", status_code=204)
def delete_run(run_id: str, db: Session = Depends(db_session)):
    if not run_store.delete_run(db, run_id):
        raise HTTPException(status_code=404, detail="Run not found.")
