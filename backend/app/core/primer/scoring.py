# File: backend/app/core/primer/scoring.py
# Version: v0.2.0
"""
Composite scoring for primer pairs.

Lower score is better. Components (unweighted, each readable on its own):
- |Tm_f - Tm_r|                 melting temperatures should match
- homodimer score of forward    self-annealing risk
- homodimer score of reverse    self-annealing risk
- dimer score(forward, reverse) cross-annealing risk (on full sequences)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .dimer import DimerScorer
from .primer import Primer, PrimerPair


@dataclass(frozen=True)
class ScoreBreakdown:
    delta_tm: float
    forward_homo_dimer: float
    reverse_homo_dimer: float
    hetero_dimer: float

    @property
    def total(self) -> float:
        return self.delta_tm + self.forward_homo_dimer + self.reverse_homo_dimer + self.hetero_dimer


class PairScorer:
    def __init__(self, dimer_scorer: Optional[DimerScorer] = None) -> None:
        self._dimer_scorer = dimer_scorer or DimerScorer()

    def breakdown(self, forward: Primer, reverse: Primer) -> ScoreBreakdown:
        return ScoreBreakdown(
            delta_tm=PrimerPair.delta_tm_between(forward, reverse),
            forward_homo_dimer=forward.homo_dimer_score,
            reverse_homo_dimer=reverse.homo_dimer_score,
            hetero_dimer=self._dimer_scorer.dimer_score(forward.sequence, reverse.sequence),
        )

    def make_primer_pair(self, forward: Primer, reverse: Primer) -> PrimerPair:
        if not isinstance(forward, Primer) or not isinstance(reverse, Primer):
            raise ValueError("make_primer_pair() expects two Primer instances")
        return PrimerPair(forward, reverse, self.breakdown(forward, reverse).total)
