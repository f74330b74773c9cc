# File: backend/app/core/primer/dimer.py
# Version: v0.1.0
"""
Sliding-window hydrogen-bond dimer scoring (self- and hetero-dimer risk).

Given a:  5' ATATG 3'
      b:  5' ATATG 3'   (homodimer test; any b works the same way)

b is read 3' -> 5' and slid past the fixed a, starting with a single
overlapping column and ending with a single overlapping column:

        ATATG          offset 1
    GTATA

        ATATG          offset 2
     GTATA
     ...
        ATATG          offset lenA + lenB - 1
            GTATA

At every offset the hydrogen bonds of all Watson-Crick pairs in the overlap
are summed (A-T = 2, G-C = 3, anything else 0) and the maximum over offsets
is kept. The score normalizes that maximum to a 10-mer:

    score = max_bonds * 10 / min(lenA, lenB)

This is an ungapped approximation (no bulges, loops or folding) and is
O(lenA * lenB).
"""

from __future__ import annotations

from typing import Union

from .constants import COMPLEMENTARY_NUCLEOTIDES, NUCLEOTIDE_HYDROGEN_BONDS, STANDARD_PRIMER_LENGTH
from .sequence import DnaSequence

SeqLike = Union[DnaSequence, str]


def hydrogen_bonds_between(n1: str, n2: str) -> int:
    """Bonds formed by the pair (n1, n2); 0 unless Watson-Crick complementary."""
    if COMPLEMENTARY_NUCLEOTIDES.get(n2) == n1:
        return NUCLEOTIDE_HYDROGEN_BONDS[n1]
    return 0


class DimerScorer:
    """Stateless calculator; one instance may be shared freely."""

    def dimer_score(self, a: SeqLike, b: SeqLike) -> float:
        sa = str(a).upper()
        sb = str(b).upper()
        if not sa or not sb:
            return 0.0
        bonds = self.maximum_hydrogen_bonds(sa, sb)
        return self._score_from_hydrogen_bonds(bonds, min(len(sa), len(sb)))

    def homo_dimer_score(self, seq: SeqLike) -> float:
        return self.dimer_score(seq, seq)

    def maximum_hydrogen_bonds(self, a: SeqLike, b: SeqLike) -> int:
        sa = str(a).upper()
        sb = str(b).upper()
        a_len = len(sa)
        b_len = len(sb)
        # b is accessed as though reversed (3' -> 5')
        rb = sb[::-1]

        best = 0
        for offset in range(1, a_len + b_len):
            # column of rb[0] relative to a[0]
            shift = offset - b_len
            lo = max(0, shift)
            hi = min(a_len, shift + b_len)
            bonds = 0
            for i in range(lo, hi):
                bonds += hydrogen_bonds_between(sa[i], rb[i - shift])
            if bonds > best:
                best = bonds
        return best

    @staticmethod
    def _score_from_hydrogen_bonds(bonds: int, shorter_length: int) -> float:
        if bonds < 0 or shorter_length <= 0:
            raise ValueError("bonds must be >= 0 and shorter_length > 0")
        return bonds * STANDARD_PRIMER_LENGTH / shorter_length


def dimer_score(a: SeqLike, b: SeqLike) -> float:
    return _DEFAULT.dimer_score(a, b)


def homo_dimer_score(seq: SeqLike) -> float:
    return _DEFAULT.homo_dimer_score(seq)


_DEFAULT = DimerScorer()
