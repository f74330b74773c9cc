# File: backend/app/core/primer/primer.py
# Version: v0.1.0
"""
Primer and PrimerPair value objects.

- `Primer`: core template window + optional restriction-enzyme 5' tail, with
  its Tm and homodimer score. Built by `PrimerBuilder`; immutable afterwards.
- `PrimerPair`: forward + reverse primer and the composite score from
  `PairScorer` (lower is better).

Equality compares sequences/enzymes exactly and floats within a small
tolerance, so serialized round-trips compare equal. The search parameters a
primer was built under travel with it but do not take part in equality.

Serial shapes:
    Primer     {"_type": "Primer", "name", "coreSequence", "restrictionEnzyme",
                "tm", "homoDimerScore", "primerSearchParameters"}
    PrimerPair {"_type": "PrimerPair", "forwardPrimer", "reversePrimer", "score"}
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .enzyme import NO_ENZYME, RestrictionEnzyme
from .parameters import PrimerSearchParameters
from .sequence import ClosedIntRange, DnaSequence

SeqLike = Union[DnaSequence, str]

_REL_TOL = 1e-9
_ABS_TOL = 1e-9


def _nearly_equal(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=_REL_TOL, abs_tol=_ABS_TOL)


def _as_sequence(seq: SeqLike) -> DnaSequence:
    return seq if isinstance(seq, DnaSequence) else DnaSequence(seq)


def full_sequence(core: SeqLike, enzyme: Optional[RestrictionEnzyme]) -> DnaSequence:
    """Recognition site (if any) prepended 5' of the core window."""
    core_seq = _as_sequence(core)
    if enzyme is None or enzyme.is_empty():
        return core_seq
    return enzyme.recognition_site + core_seq


@dataclass(frozen=True, eq=False)
class Primer:
    core_sequence: DnaSequence = field(default_factory=DnaSequence)
    restriction_enzyme: RestrictionEnzyme = NO_ENZYME
    tm: float = 0.0
    homo_dimer_score: float = 0.0
    search_parameters: Optional[PrimerSearchParameters] = None
    name: str = ""

    def __post_init__(self) -> None:
        core = _as_sequence(self.core_sequence)
        if core.has_gaps():
            raise ValueError("Primer core sequence must not contain gaps")
        object.__setattr__(self, "core_sequence", core)
        if self.restriction_enzyme is None:
            object.__setattr__(self, "restriction_enzyme", NO_ENZYME)
        if self.homo_dimer_score < 0:
            raise ValueError("homo_dimer_score must be >= 0")

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Primer):
            return NotImplemented
        return (
            self.name == other.name
            and self.core_sequence == other.core_sequence
            and self.restriction_enzyme == other.restriction_enzyme
            and _nearly_equal(self.tm, other.tm)
            and _nearly_equal(self.homo_dimer_score, other.homo_dimer_score)
        )

    def __hash__(self) -> int:
        return hash((self.name, self.core_sequence, self.restriction_enzyme.recognitionSite))

    # --- Sequence -------------------------------------------------------------------------------

    @property
    def sequence(self) -> DnaSequence:
        return full_sequence(self.core_sequence, self.restriction_enzyme)

    def sequence_string(self) -> str:
        return self.sequence.sequence

    def is_null(self) -> bool:
        return self.core_sequence.is_empty()

    # --- Location helpers (1-based; -1 / None when absent) --------------------------------------

    def locate_core_sequence_start_in(self, dna: SeqLike) -> int:
        return _as_sequence(dna).index_of(self.core_sequence)

    def locate_core_sequence_stop_in(self, dna: SeqLike) -> int:
        start = self.locate_core_sequence_start_in(dna)
        if start == -1:
            return -1
        return start + len(self.core_sequence) - 1

    def locate_core_sequence_in(self, dna: SeqLike) -> Optional[ClosedIntRange]:
        start = self.locate_core_sequence_start_in(dna)
        if start == -1:
            return None
        return ClosedIntRange(start, start + len(self.core_sequence) - 1)

    def locate_core_sequence_start_in_cognate_strand(self, dna: SeqLike) -> int:
        """Start (sense coordinates) of the right-most match of the reverse-complemented core."""
        return _as_sequence(dna).last_index_of(self.core_sequence.reverse_complement())

    def locate_core_sequence_stop_in_cognate_strand(self, dna: SeqLike) -> int:
        start = self.locate_core_sequence_start_in_cognate_strand(dna)
        if start == -1:
            return -1
        return start + len(self.core_sequence) - 1

    def locate_core_sequence_in_cognate_strand(self, dna: SeqLike) -> Optional[ClosedIntRange]:
        start = self.locate_core_sequence_start_in_cognate_strand(dna)
        if start == -1:
            return None
        return ClosedIntRange(start, start + len(self.core_sequence) - 1)

    def core_sequence_forward_locations_in(self, dna: SeqLike) -> List[ClosedIntRange]:
        return _as_sequence(dna).find_locations_of(self.core_sequence)

    def core_sequence_reverse_locations_in(self, dna: SeqLike) -> List[ClosedIntRange]:
        return _as_sequence(dna).find_locations_of(self.core_sequence.reverse_complement())

    def count_core_sequence_forward_matches_in(self, dna: SeqLike) -> int:
        return _as_sequence(dna).count(self.core_sequence)

    def count_core_sequence_reverse_matches_in(self, dna: SeqLike) -> int:
        return _as_sequence(dna).reverse_complement().count(self.core_sequence)

    def count_core_sequence_matches_in(self, dna: SeqLike) -> int:
        return self.count_core_sequence_forward_matches_in(dna) + self.count_core_sequence_reverse_matches_in(dna)

    # --- Serialization --------------------------------------------------------------------------

    def to_serial_object(self) -> dict:
        params = self.search_parameters or PrimerSearchParameters()
        return {
            "_type": "Primer",
            "name": self.name,
            "coreSequence": self.core_sequence.to_serial_object(),
            "restrictionEnzyme": self.restriction_enzyme.to_serial_object(),
            "tm": self.tm,
            "homoDimerScore": self.homo_dimer_score,
            "primerSearchParameters": params.to_serial_object(),
        }

    @classmethod
    def from_serial_object(cls, obj: dict) -> "Primer":
        raw_params = obj.get("primerSearchParameters")
        return cls(
            core_sequence=DnaSequence.from_serial_object(obj.get("coreSequence") or {}),
            restriction_enzyme=RestrictionEnzyme.from_serial_object(obj.get("restrictionEnzyme") or {}),
            tm=float(obj.get("tm") or 0.0),
            homo_dimer_score=float(obj.get("homoDimerScore") or 0.0),
            search_parameters=PrimerSearchParameters.from_serial_object(raw_params) if raw_params else None,
            name=obj.get("name") or "",
        )


@dataclass(frozen=True, eq=False)
class PrimerPair:
    forward_primer: Primer = field(default_factory=Primer)
    reverse_primer: Primer = field(default_factory=Primer)
    score: float = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrimerPair):
            return NotImplemented
        return (
            self.forward_primer == other.forward_primer
            and self.reverse_primer == other.reverse_primer
            and _nearly_equal(self.score, other.score)
        )

    def __hash__(self) -> int:
        return hash((self.forward_primer, self.reverse_primer))

    @staticmethod
    def delta_tm_between(primer1: Primer, primer2: Primer) -> float:
        return abs(primer1.tm - primer2.tm)

    @property
    def delta_tm(self) -> float:
        return self.delta_tm_between(self.forward_primer, self.reverse_primer)

    def amplicon_location(self, dna: SeqLike) -> Optional[ClosedIntRange]:
        """Forward core start .. reverse core end (cognate strand), or None if unlocatable."""
        begin = self.forward_primer.locate_core_sequence_start_in(dna)
        if begin == -1:
            return None
        end = self.reverse_primer.locate_core_sequence_stop_in_cognate_strand(dna)
        if end == -1 or end < begin:
            return None
        return ClosedIntRange(begin, end)

    def amplicon_length(self, dna: SeqLike) -> int:
        loc = self.amplicon_location(dna)
        return loc.length if loc else 0

    def to_serial_object(self) -> dict:
        return {
            "_type": "PrimerPair",
            "forwardPrimer": self.forward_primer.to_serial_object(),
            "reversePrimer": self.reverse_primer.to_serial_object(),
            "score": self.score,
        }

    @classmethod
    def from_serial_object(cls, obj: dict) -> "PrimerPair":
        return cls(
            forward_primer=Primer.from_serial_object(obj["forwardPrimer"]),
            reverse_primer=Primer.from_serial_object(obj["reversePrimer"]),
            score=float(obj.get("score") or 0.0),
        )
