# File: backend/app/core/export/csv_exporter.py
# Version: v1.0.0
"""
CSV exporters for primer search results and per-window diagnostics.

- pairs.csv:       one row per ranked pair
- candidates.csv:  one row per tested window (forward and reverse), with the
                   rejection reason when the window failed a constraint
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Sequence

from backend.app.core.primer.designer import RankedPair, SearchDiagnostics

CANDIDATE_HEADERS = ["side", "pos", "length", "tm", "rejected", "reason", "seq"]


def _pair_row(rank: int, r: RankedPair) -> Dict[str, str]:
    f = r.pair.forward_primer
    v = r.pair.reverse_primer
    return {
        "rank": str(rank),
        "score": f"{r.pair.score:.3f}",
        "amplicon_begin": str(r.forward_location.begin),
        "amplicon_end": str(r.reverse_location.end),
        "amplicon_length": str(r.amplicon_length),
        "delta_tm": f"{r.pair.delta_tm:.3f}",
        "forward_sequence": f.sequence_string(),
        "forward_tm": f"{f.tm:.3f}",
        "forward_homo_dimer": f"{f.homo_dimer_score:.3f}",
        "reverse_sequence": v.sequence_string(),
        "reverse_tm": f"{v.tm:.3f}",
        "reverse_homo_dimer": f"{v.homo_dimer_score:.3f}",
    }


def export_pairs_csv(ranked: Sequence[RankedPair], csv_path: Path) -> Path:
    rows: List[Dict[str, str]] = [_pair_row(i, r) for i, r in enumerate(ranked, start=1)]
    headers = list(_pair_row(1, ranked[0]).keys()) if ranked else ["rank", "score"]
    with csv_path.open("w", newline="", encoding="utf-8") as fh:
        w = csv.DictWriter(fh, fieldnames=headers)
        w.writeheader()
        w.writerows(rows)
    return csv_path


def export_candidates_csv(diag: SearchDiagnostics, csv_path: Path) -> Path:
    """Per-window filters and reasons (requires a search run with candidate collection)."""
    with csv_path.open("w", newline="", encoding="utf-8") as fh:
        w = csv.writer(fh)
        w.writerow(CANDIDATE_HEADERS)
        for row in diag.forward_candidates + diag.reverse_candidates:
            w.writerow([row.side, row.pos, row.length, f"{row.tm:.2f}", row.rejected, row.reason, row.seq])
    return csv_path
