# File: backend/app/core/primer/constraints.py
# Version: v0.2.0
"""
Acceptance constraints for primer candidates and pairs.

Window-level (hard, evaluated while enumerating):
- 3' terminal pattern on the full primer (tail + core)
- Tm of the full primer within the individual Tm range
- core sequence occurs exactly once across both strands of the target

Pair-level (evaluated per combination):
- |Tm_f - Tm_r| <= maximum delta Tm
- amplicon length within range, primers do not overlap

Soft (evaluated after scoring):
- homodimer score of each primer <= maximumHomoDimerScore
"""

from __future__ import annotations

from typing import Optional, Tuple

from .enzyme import RestrictionEnzyme
from .parameters import PrimerSearchParameters
from .pattern import DnaPattern
from .primer import PrimerPair
from .sequence import ClosedIntRange, DnaSequence
from .thermodynamics import melting_temperature


def count_overlapping(haystack: str, needle: str) -> int:
    if not needle:
        return 0
    n = 0
    pos = haystack.find(needle)
    while pos != -1:
        n += 1
        pos = haystack.find(needle, pos + 1)
    return n


class WindowFilter:
    """Evaluate candidate core windows for one primer side."""

    def __init__(
        self,
        target: DnaSequence,
        params: PrimerSearchParameters,
        enzyme: Optional[RestrictionEnzyme],
        terminal_pattern: Optional[DnaPattern],
    ) -> None:
        self._sense = target.sequence
        self._antisense = target.reverse_complement().sequence
        self._tail = "" if enzyme is None else enzyme.recognitionSite
        self._pattern = terminal_pattern if terminal_pattern is not None and not terminal_pattern.is_empty() else None
        self._tm_range = params.individualPrimerTmRange
        self._na = params.sodiumConcentration
        self._dna = params.primerDnaConcentration
        self._unique = params.requireUniqueCore

    def evaluate(self, core: str) -> Tuple[bool, float, str]:
        """Return (ok, tm, reason); tm is 0.0 when rejected before it was computed."""
        full = self._tail + core
        if self._pattern is not None and not self._pattern.matches_at_end(full):
            return False, 0.0, f"3' end does not match {self._pattern.pattern!r}"

        tm = melting_temperature(full, self._na, self._dna)
        if not self._tm_range.contains(tm):
            return False, tm, f"Tm {tm:.1f} not in [{self._tm_range.begin:.1f},{self._tm_range.end:.1f}]"

        if self._unique:
            hits = count_overlapping(self._sense, core) + count_overlapping(self._antisense, core)
            if hits != 1:
                return False, tm, f"core occurs {hits}x on target strands"

        return True, tm, ""


def pair_tm_compatible(forward_tm: float, reverse_tm: float, params: PrimerSearchParameters) -> bool:
    return abs(forward_tm - reverse_tm) <= params.maximumPrimerPairDeltaTm


def amplicon_length(forward: ClosedIntRange, reverse_sense: ClosedIntRange) -> int:
    return reverse_sense.end - forward.begin + 1


def primers_overlap(forward: ClosedIntRange, reverse_sense: ClosedIntRange) -> bool:
    return forward.end >= reverse_sense.begin


def passes_soft_thresholds(pair: PrimerPair, params: PrimerSearchParameters) -> Tuple[bool, str]:
    limit = params.maximumHomoDimerScore
    if limit is not None:
        worst = max(pair.forward_primer.homo_dimer_score, pair.reverse_primer.homo_dimer_score)
        if worst > limit:
            return False, f"homodimer score {worst:.2f} > {limit:.2f}"
    return True, ""
