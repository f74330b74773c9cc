# File: backend/app/core/primer/designer.py
# Version: v2.0.0
"""
Primer pair search & ranking.

What this file does
-------------------
- `PairSearchEngine.find_primer_pairs(target, region, params)` enumerates
  forward windows on the sense strand and reverse windows on the antisense
  strand inside `region`, keeps windows passing the window constraints
  (3' pattern, Tm band, uniqueness), combines them subject to ΔTm, amplicon
  length and non-overlap, builds primers (`PrimerBuilder`) and scores pairs
  (`PairScorer`), drops pairs failing the soft homodimer threshold and returns
  them ranked.
- Ranking: ascending score, then ascending amplicon length, then forward
  start (then reverse start), so output is deterministic.
- `search(...)` returns the same ranking with primer coordinates and
  diagnostics (rejection reasons, counters) for the CLI and API.

Edge policy
-----------
- Empty target, a region outside the target or an amplicon range that cannot
  fit in the region give an empty result, never an error.
- Invalid parameters never reach this module: `PrimerSearchParameters`
  rejects them at construction.
- The target is read-only.

Progress & cancellation
-----------------------
- Optional `progress` callback receives fractions in [0, 1] at coarse
  granularity (window enumeration 0-50 %, pairing 50-100 %).
- `cancel()` (or `SearchCancelled` raised from the callback) stops the search
  at the next checkpoint (per window length, per forward window); the pairs
  found so far are returned, ranked.

Coordinates
-----------
- `region` and all reported locations are 1-based, inclusive, sense strand.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from .builder import PrimerBuilder
from .constraints import (
    WindowFilter,
    amplicon_length,
    pair_tm_compatible,
    passes_soft_thresholds,
    primers_overlap,
)
from .enzyme import RestrictionEnzyme
from .generator import (
    count_windows,
    find_acgt_ranges,
    max_primer_start,
    mirror,
    ranges_at_least,
    to_sense,
    window_starts,
)
from .parameters import PrimerSearchParameters
from .pattern import DnaPattern
from .primer import Primer, PrimerPair
from .progress import ProgressCallback, ProgressTicker, SearchCancelled
from .scoring import PairScorer
from .sequence import ClosedIntRange, DnaSequence

logger = logging.getLogger(__name__)


# --- Diagnostics / DTOs --------------------------------------------------------------------------

@dataclass
class CandidateRow:
    side: str                # 'F' or 'R'
    pos: int                 # sense-strand start of the core window
    length: int
    seq: str                 # core, 5'->3' as synthesized
    tm: float
    rejected: bool
    reason: str


@dataclass
class SearchDiagnostics:
    forward_candidates: List[CandidateRow] = field(default_factory=list)
    reverse_candidates: List[CandidateRow] = field(default_factory=list)
    forward_windows_tested: int = 0
    reverse_windows_tested: int = 0
    forward_windows_ok: int = 0
    reverse_windows_ok: int = 0
    rejection_counts: Dict[str, int] = field(default_factory=dict)
    pairs_checked: int = 0
    pairs_kept: int = 0
    cancelled: bool = False
    message: str = ""

    def reject(self, reason: str) -> None:
        # Tm values differ per window; bucket them under one key
        key = "Tm out of range" if reason.startswith("Tm ") else reason
        self.rejection_counts[key] = self.rejection_counts.get(key, 0) + 1

    def top_reasons(self, n: int = 5) -> List[Tuple[str, int]]:
        return sorted(self.rejection_counts.items(), key=lambda x: x[1], reverse=True)[:n]


@dataclass(frozen=True)
class RankedPair:
    pair: PrimerPair
    forward_location: ClosedIntRange
    reverse_location: ClosedIntRange     # sense strand

    @property
    def amplicon_length(self) -> int:
        return amplicon_length(self.forward_location, self.reverse_location)

    def sort_key(self) -> Tuple[float, int, int, int]:
        return (self.pair.score, self.amplicon_length, self.forward_location.begin, self.reverse_location.begin)


@dataclass
class SearchResult:
    ranked: List[RankedPair] = field(default_factory=list)
    diagnostics: SearchDiagnostics = field(default_factory=SearchDiagnostics)

    @property
    def pairs(self) -> List[PrimerPair]:
        return [r.pair for r in self.ranked]


@dataclass(frozen=True)
class _Window:
    location: ClosedIntRange     # strand-local coordinates
    tm: float


# --- Engine --------------------------------------------------------------------------------------

class PairSearchEngine:
    """
    Synchronous primer pair search. One engine may run many searches; each
    search owns its working set and discards it on return.
    """

    def __init__(self, collect_candidates: bool = False, ticks: int = 100) -> None:
        self.collect_candidates = collect_candidates
        self._ticks = ticks
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def find_primer_pairs(
        self,
        target: Union[DnaSequence, str],
        region: ClosedIntRange,
        params: PrimerSearchParameters,
        progress: Optional[ProgressCallback] = None,
    ) -> List[PrimerPair]:
        return self.search(target, region, params, progress=progress).pairs

    def search(
        self,
        target: Union[DnaSequence, str],
        region: ClosedIntRange,
        params: PrimerSearchParameters,
        progress: Optional[ProgressCallback] = None,
    ) -> SearchResult:
        if not isinstance(params, PrimerSearchParameters):
            raise ValueError("params must be a PrimerSearchParameters instance")
        dna = target if isinstance(target, DnaSequence) else DnaSequence(target)
        self._cancelled = False
        result = SearchResult()
        diag = result.diagnostics
        ticker = ProgressTicker(progress, self._ticks)

        try:
            self._run(dna, region, params, ticker, result)
        except SearchCancelled:
            self._cancelled = True

        if self._cancelled:
            diag.cancelled = True
            diag.message = "Cancelled"
            logger.info("Primer search cancelled; returning %d pair(s) found so far", len(result.ranked))

        result.ranked.sort(key=RankedPair.sort_key)
        if params.maxResults is not None:
            del result.ranked[params.maxResults:]
        diag.pairs_kept = len(result.ranked)
        if not diag.message:
            diag.message = "OK" if result.ranked else "No compatible primer pairs"
        return result

    # --- Phases -----------------------------------------------------------------------------------

    def _run(
        self,
        dna: DnaSequence,
        region: ClosedIntRange,
        params: PrimerSearchParameters,
        ticker: ProgressTicker,
        result: SearchResult,
    ) -> None:
        diag = result.diagnostics
        n = len(dna)
        if n == 0:
            logger.debug("Empty target; nothing to search")
            diag.message = "Empty target"
            return
        if not region.is_normal() or not dna.is_valid_range(region):
            logger.debug("Region [%d, %d] outside target 1..%d", region.begin, region.end, n)
            diag.message = "Search region outside target"
            return
        if params.ampliconLengthRange.begin > region.length:
            logger.debug("Minimum amplicon %d exceeds region length %d", params.ampliconLengthRange.begin, region.length)
            diag.message = "Amplicon length range cannot fit in search region"
            return

        lengths = params.primerLengthRange
        step = params.primerStartStep
        runs = ranges_at_least(find_acgt_ranges(dna, region), lengths.begin)
        antisense = dna.reverse_complement()
        anti_region = mirror(region, n)
        fwd_max = max_primer_start(region, params.ampliconLengthRange.begin)
        rev_max = max_primer_start(anti_region, params.ampliconLengthRange.begin)
        anti_runs = [mirror(r, n) for r in runs]

        phase1 = count_windows(runs, lengths, fwd_max, step) + count_windows(anti_runs, lengths, rev_max, step)
        if phase1 == 0:
            diag.message = "No candidate windows"
            ticker.end()
            return
        ticker.set_value_and_end_value(0, 2 * phase1)

        forward = self._collect_windows(
            "F", dna, runs, fwd_max, params, params.forwardRestrictionEnzyme,
            params.forwardTerminalPattern, dna, ticker, diag,
        )
        reverse = self._collect_windows(
            "R", antisense, anti_runs, rev_max, params, params.reverseRestrictionEnzyme,
            params.reverseTerminalPattern, dna, ticker, diag,
        )
        logger.info(
            "Primer windows: forward %d/%d ok, reverse %d/%d ok",
            diag.forward_windows_ok, diag.forward_windows_tested,
            diag.reverse_windows_ok, diag.reverse_windows_tested,
        )
        if self._cancelled:
            return

        phase2 = len(forward) * len(reverse)
        if phase2:
            ticker.set_value_and_end_value(phase2, 2 * phase2)
            self._pair_windows(dna, antisense, forward, reverse, params, ticker, result)
        ticker.end()

    def _collect_windows(
        self,
        side: str,
        strand: DnaSequence,
        runs: List[ClosedIntRange],
        max_start: int,
        params: PrimerSearchParameters,
        enzyme: Optional[RestrictionEnzyme],
        pattern: Optional[DnaPattern],
        target: DnaSequence,
        ticker: ProgressTicker,
        diag: SearchDiagnostics,
    ) -> List[_Window]:
        window_filter = WindowFilter(target, params, enzyme, pattern)
        s = strand.sequence
        n = len(s)
        rows = diag.forward_candidates if side == "F" else diag.reverse_candidates
        out: List[_Window] = []
        tested = ok = 0
        for run in runs:
            for length in range(params.primerLengthRange.begin, params.primerLengthRange.end + 1):
                if self._cancelled:
                    break
                starts = window_starts(run, length, max_start, params.primerStartStep)
                for start in starts:
                    core = s[start - 1 : start - 1 + length]
                    passed, tm, reason = window_filter.evaluate(core)
                    tested += 1
                    location = ClosedIntRange(start, start + length - 1)
                    if passed:
                        ok += 1
                        out.append(_Window(location, tm))
                    else:
                        diag.reject(reason)
                    if self.collect_candidates:
                        sense_pos = location.begin if side == "F" else to_sense(location, n).begin
                        rows.append(CandidateRow(side, sense_pos, length, core, tm, not passed, reason))
                ticker.update(len(starts))
        if side == "F":
            diag.forward_windows_tested, diag.forward_windows_ok = tested, ok
        else:
            diag.reverse_windows_tested, diag.reverse_windows_ok = tested, ok
        return out

    def _pair_windows(
        self,
        dna: DnaSequence,
        antisense: DnaSequence,
        forward: List[_Window],
        reverse: List[_Window],
        params: PrimerSearchParameters,
        ticker: ProgressTicker,
        result: SearchResult,
    ) -> None:
        diag = result.diagnostics
        n = len(dna)
        amp = params.ampliconLengthRange
        builder = PrimerBuilder.for_parameters(params)
        scorer = PairScorer()

        # Reverse windows in sense coordinates, ordered by their 3'-most sense position
        rev_sense: List[Tuple[ClosedIntRange, _Window]] = sorted(
            ((to_sense(w.location, n), w) for w in reverse),
            key=lambda x: (x[0].end, x[0].begin),
        )
        rev_ends = [loc.end for loc, _ in rev_sense]

        forward_cache: Dict[ClosedIntRange, Primer] = {}
        reverse_cache: Dict[ClosedIntRange, Primer] = {}

        for fw in forward:
            if self._cancelled:
                return
            floc = fw.location
            lo = bisect.bisect_left(rev_ends, floc.begin + amp.begin - 1)
            hi = bisect.bisect_right(rev_ends, floc.begin + amp.end - 1)
            for rloc, rw in rev_sense[lo:hi]:
                diag.pairs_checked += 1
                if not pair_tm_compatible(fw.tm, rw.tm, params):
                    continue
                if primers_overlap(floc, rloc) or not amp.contains(amplicon_length(floc, rloc)):
                    continue

                fprimer = forward_cache.get(floc)
                if fprimer is None:
                    fprimer = builder.make_primer(dna.mid(floc), params.forwardRestrictionEnzyme, fw.tm)
                    forward_cache[floc] = fprimer
                rprimer = reverse_cache.get(rw.location)
                if rprimer is None:
                    rprimer = builder.make_primer(antisense.mid(rw.location), params.reverseRestrictionEnzyme, rw.tm)
                    reverse_cache[rw.location] = rprimer

                pair = scorer.make_primer_pair(fprimer, rprimer)
                keep, reason = passes_soft_thresholds(pair, params)
                if not keep:
                    diag.reject(reason)
                    continue
                result.ranked.append(RankedPair(pair, floc, rloc))
            ticker.update(len(reverse))


def find_primer_pairs(
    target: Union[DnaSequence, str],
    region: ClosedIntRange,
    params: PrimerSearchParameters,
    progress: Optional[ProgressCallback] = None,
) -> List[PrimerPair]:
    """Convenience wrapper around a fresh `PairSearchEngine`."""
    return PairSearchEngine().find_primer_pairs(target, region, params, progress=progress)
