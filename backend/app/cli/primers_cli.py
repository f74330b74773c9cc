# File: backend/app/cli/primers_cli.py
# Version: v2.0.0
"""
CLI for PrimerPair primer pair design.

- Reads exactly one FASTA record (Biopython SeqIO).
- Search region is 1-based inclusive; omitted bounds mean the whole record.
- Parameters JSON uses the PrimerSearchParameters schema (camelCase); without
  --params-json the stored parameters (primers_param.json, then defaults) are used.
- Writes primers.json (ranked pairs, serialized) and primers.fasta; with --debug
  also writes candidates.csv + pairs.csv + README.txt.

Usage:
    python -m backend.app.cli.primers_cli \
        --fasta backend/data/input/region.fasta \
        --start 150 --end 1420 \
        --outdir backend/data/out/primers \
        [--params-json backend/app/config/primers_param.json] \
        [--max-results 20] [--debug] [--log-level INFO]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Tuple

from Bio import SeqIO

from backend.app.config.config_primers import load_current_params, load_params_file
from backend.app.core.export.csv_exporter import export_candidates_csv, export_pairs_csv
from backend.app.core.export.fasta_exporter import export_pairs_to_fasta
from backend.app.core.export.json_exporter import export_pairs_to_json
from backend.app.core.primer.designer import PairSearchEngine, SearchDiagnostics
from backend.app.core.primer.sequence import ClosedIntRange, DnaSequence

log = logging.getLogger("primers_cli")

# ---------- IO helpers ----------

def read_single_fasta(path: Path) -> Tuple[str, str]:
    """Return (name, sequence). Enforces exactly one FASTA record."""
    records = list(SeqIO.parse(str(path), "fasta"))
    if not records:
        raise ValueError(f"No FASTA record found in {path}.")
    if len(records) > 1:
        raise ValueError(f"Multiple FASTA records found in {path}. Provide a single-sequence FASTA.")
    rec = records[0]
    return rec.id or "sequence", str(rec.seq).upper()


def write_readme(outdir: Path, diag: SearchDiagnostics) -> None:
    lines = [
        "Diagnostics files:",
        "- candidates.csv: per-window filters and reasons",
        "- pairs.csv: ranked pairs, one row each",
        f"- windows: forward {diag.forward_windows_ok}/{diag.forward_windows_tested} ok, "
        f"reverse {diag.reverse_windows_ok}/{diag.reverse_windows_tested} ok",
        f"- pairs_checked: {diag.pairs_checked}",
        f"- pairs_kept: {diag.pairs_kept}",
        f"- message: {diag.message}",
    ]
    for reason, count in diag.top_reasons():
        lines.append(f"- rejected ({count}): {reason}")
    (outdir / "README.txt").write_text("\n".join(lines) + "\n", encoding="utf-8")


# ---------- Main ----------

def main(argv=None) -> None:
    p = argparse.ArgumentParser(description="Primer pair design CLI")
    p.add_argument("--fasta", required=True, type=Path, help="Single-record FASTA with the target sequence")
    p.add_argument("--start", type=int, default=None, help="Search region start (1-based, inclusive); default 1")
    p.add_argument("--end", type=int, default=None, help="Search region end (1-based, inclusive); default = length")
    p.add_argument("--outdir", required=True, type=Path)
    p.add_argument("--params-json", type=Path, default=None, help="Path to JSON with PrimerSearchParameters (camelCase)")
    p.add_argument("--max-results", type=int, default=None, help="Keep only the best N pairs (overrides JSON)")
    p.add_argument("--debug", action="store_true", help="Write diagnostics CSV files")
    p.add_argument("--log-level", dest="log_level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging level (default: WARNING)")
    args = p.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        # FASTA
        name, seq = read_single_fasta(args.fasta)
        dna = DnaSequence(seq)

        # Coordinates
        start = args.start if args.start is not None else 1
        end = args.end if args.end is not None else len(dna)
        if not (1 <= start <= end <= len(dna)):
            raise ValueError(f"Coordinates out of bounds for {name}: start={start}, end={end}, len={len(dna)} (1-based)")
        region = ClosedIntRange(start, end)

        # Parameters
        params = load_params_file(args.params_json) if args.params_json else load_current_params()
        if args.max_results is not None:
            if args.max_results < 1:
                raise ValueError("--max-results must be >= 1")
            params = params.model_copy(update={"maxResults": args.max_results})

        args.outdir.mkdir(parents=True, exist_ok=True)
        log.info("FASTA=%s (%d bp) | REGION=[%d, %d] | OUTDIR=%s", args.fasta, len(dna), start, end, args.outdir)

        engine = PairSearchEngine(collect_candidates=args.debug)
        result = engine.search(dna, region, params)
        diag = result.diagnostics

        # Outputs
        out_fa = args.outdir / "primers.fasta"
        export_pairs_to_fasta(result.ranked, out_fa)
        export_pairs_to_json(
            result.ranked,
            args.outdir / "primers.json",
            sequence_name=name,
            sequence_length=len(dna),
            region=region,
            message=diag.message,
            extra={
                "params_source": str(args.params_json) if args.params_json else "stored",
                "parameters": params.to_serial_object(),
            },
        )

        if args.debug:
            export_candidates_csv(diag, args.outdir / "candidates.csv")
            export_pairs_csv(result.ranked, args.outdir / "pairs.csv")
            write_readme(args.outdir, diag)

        if result.ranked:
            best = result.ranked[0]
            print(f"[OK] Wrote {out_fa} ({len(result.ranked)} pair(s); best score {best.pair.score:.2f}, "
                  f"product {best.amplicon_length} bp)")
        else:
            print(f"[OK] Wrote {out_fa} (no pairs: {diag.message})")

    except Exception as ex:
        print(f"[ERROR] {ex}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
