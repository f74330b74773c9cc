# File: backend/app/core/primer/schemas.py
# Version: v1.0.0
"""
DTOs for requests and responses used by Primer endpoints and services.

- `PrimerDesignRequest.parameters` is optional. If omitted, the backend uses
  the currently stored parameters (backend/app/config/primers_param.json,
  with fallback to defaults).
- Search region coordinates are 1-based inclusive; omitted bounds default to
  the whole sequence.
- Responses carry both a readable view (positions, Tm, GC) and the serialized
  PrimerPair objects.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, confloat, conint, field_validator
from typing import Any, Dict, List, Optional

from .constants import DEFAULT_PRIMER_DNA_CONCENTRATION, DEFAULT_SODIUM_CONCENTRATION
from .designer import RankedPair
from .parameters import PrimerSearchParameters
from .primer import Primer
from .sequence import ClosedIntRange, DnaSequence
from .thermodynamics import gc_percent


def _clean_sequence(v: str) -> str:
    raw = "".join(str(v).split()).upper()
    return DnaSequence(raw).sequence


class PrimerDesignRequest(BaseModel):
    """Request to design primer pairs within a search region of the given sequence."""
    sequence: str = Field(..., description="Full target sequence (raw; whitespace is ignored).")
    regionBegin: Optional[conint(ge=1)] = Field(None, description="1-based inclusive; defaults to 1.")
    regionEnd: Optional[conint(ge=1)] = Field(None, description="1-based inclusive; defaults to the sequence length.")
    parameters: Optional[PrimerSearchParameters] = None
    store: bool = Field(True, description="Persist the run and its pairs.")

    @field_validator("sequence")
    @classmethod
    def _check_sequence(cls, v: str) -> str:
        return _clean_sequence(v)


class PrimerInfo(BaseModel):
    """Readable primer properties; positions are sense-strand, 1-based inclusive core bounds."""
    sequence: str
    coreSequence: str
    restrictionEnzyme: str = ""
    begin: int
    end: int
    length: int
    tm: float
    gc: float
    homoDimerScore: float


class PrimerPairInfo(BaseModel):
    rank: int
    forwardPrimer: PrimerInfo
    reversePrimer: PrimerInfo
    score: float
    deltaTm: float
    ampliconBegin: int
    ampliconEnd: int
    ampliconLength: int


class PrimerDesignResponse(BaseModel):
    """Result of a primer pair search."""
    runId: Optional[str] = None
    regionBegin: int
    regionEnd: int
    pairCount: int
    message: str = ""
    pairs: List[PrimerPairInfo] = Field(default_factory=list)
    serialized: List[Dict[str, Any]] = Field(default_factory=list, description="PrimerPair serial objects, same order.")
    rejectionSummary: Dict[str, int] = Field(default_factory=dict)


class MeltingTemperatureRequest(BaseModel):
    sequence: str = Field(..., description="A/C/G/T only, ungapped.")
    sodiumConcentration: confloat(gt=0) = DEFAULT_SODIUM_CONCENTRATION
    primerDnaConcentration: confloat(gt=0) = DEFAULT_PRIMER_DNA_CONCENTRATION

    @field_validator("sequence")
    @classmethod
    def _check_sequence(cls, v: str) -> str:
        return _clean_sequence(v)


class MeltingTemperatureResponse(BaseModel):
    sequence: str
    tm: float
    gc: float
    enthalpy: float
    entropy: float
    palindrome: bool
    homoDimerScore: float


class DimerScoreRequest(BaseModel):
    sequence1: str
    sequence2: str

    @field_validator("sequence1", "sequence2")
    @classmethod
    def _check_sequence(cls, v: str) -> str:
        return _clean_sequence(v)


class DimerScoreResponse(BaseModel):
    score: float
    maximumHydrogenBonds: int


def primer_info(primer: Primer, location: ClosedIntRange) -> PrimerInfo:
    return PrimerInfo(
        sequence=primer.sequence_string(),
        coreSequence=primer.core_sequence.sequence,
        restrictionEnzyme=primer.restriction_enzyme.name,
        begin=location.begin,
        end=location.end,
        length=len(primer.sequence),
        tm=primer.tm,
        gc=gc_percent(primer.sequence),
        homoDimerScore=primer.homo_dimer_score,
    )


def pair_info(rank: int, ranked: RankedPair) -> PrimerPairInfo:
    pair = ranked.pair
    return PrimerPairInfo(
        rank=rank,
        forwardPrimer=primer_info(pair.forward_primer, ranked.forward_location),
        reversePrimer=primer_info(pair.reverse_primer, ranked.reverse_location),
        score=pair.score,
        deltaTm=pair.delta_tm,
        ampliconBegin=ranked.forward_location.begin,
        ampliconEnd=ranked.reverse_location.end,
        ampliconLength=ranked.amplicon_length,
    )
