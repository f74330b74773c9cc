# File: backend/app/core/primer/generator.py
# Version: v0.2.0
"""
Candidate primer window generator.

- ACGT runs: the search region is split into maximal runs of A/C/G/T; gaps
  and ambiguity codes break runs. Runs shorter than the minimum primer length
  are dropped.
- Forward windows: every start (by `step`) and every length of the primer
  length band inside a run, 1-based on the sense strand.
- Reverse windows: the same enumeration on the reverse complement over the
  mirrored run; locations are antisense coordinates until mapped back with
  `to_sense`.

Window starts are capped so that a minimum-length amplicon still fits inside
the search region.
"""

from __future__ import annotations

from typing import List

from .parameters import IntRange
from .sequence import ACGT, ClosedIntRange, DnaSequence


def find_acgt_ranges(target: DnaSequence, region: ClosedIntRange) -> List[ClosedIntRange]:
    s = target.sequence
    out: List[ClosedIntRange] = []
    run_start = None
    for pos in range(region.begin, region.end + 1):
        if s[pos - 1] in ACGT:
            if run_start is None:
                run_start = pos
        elif run_start is not None:
            out.append(ClosedIntRange(run_start, pos - 1))
            run_start = None
    if run_start is not None:
        out.append(ClosedIntRange(run_start, region.end))
    return out


def ranges_at_least(ranges: List[ClosedIntRange], min_length: int) -> List[ClosedIntRange]:
    return [r for r in ranges if r.length >= min_length]


def mirror(rng: ClosedIntRange, strand_length: int) -> ClosedIntRange:
    """Map a range between the sense strand and the reverse complement (self-inverse)."""
    return ClosedIntRange(strand_length - rng.end + 1, strand_length - rng.begin + 1)


def to_sense(antisense: ClosedIntRange, strand_length: int) -> ClosedIntRange:
    return mirror(antisense, strand_length)


def max_primer_start(region: ClosedIntRange, min_amplicon_length: int) -> int:
    """Right-most start (same strand as `region`) that still leaves room for a minimum amplicon."""
    return region.end - min_amplicon_length + 1


def window_starts(run: ClosedIntRange, length: int, max_start: int, step: int = 1) -> range:
    last = min(max_start, run.end - length + 1)
    return range(run.begin, last + 1, step)


def count_windows(runs: List[ClosedIntRange], lengths: IntRange, max_start: int, step: int = 1) -> int:
    return sum(
        len(window_starts(run, length, max_start, step))
        for run in runs
        for length in range(lengths.begin, lengths.end + 1)
    )
