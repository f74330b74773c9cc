# File: backend/app/core/export/fasta_exporter.py
# Version: v1.0.0

"""
FASTA export of ranked primer pairs.

Each pair contributes two records, both written 5'->3' as synthesized
(reverse primer already on the antisense strand):
    >pair<rank>_F_<begin>_<end> tm=<tm> gc=<gc> len=<len>
    >pair<rank>_R_<begin>_<end> tm=<tm> gc=<gc> len=<len>
Positions are sense-strand, 1-based inclusive core bounds.
"""

from pathlib import Path
from typing import List, Sequence
from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from backend.app.core.primer.designer import RankedPair
from backend.app.core.primer.primer import Primer
from backend.app.core.primer.sequence import ClosedIntRange
from backend.app.core.primer.thermodynamics import gc_percent


def _record(primer: Primer, rid: str, location: ClosedIntRange) -> SeqRecord:
    seq = primer.sequence_string()
    desc = f"tm={primer.tm:.1f} gc={gc_percent(seq):.1f} len={len(seq)}"
    return SeqRecord(Seq(seq), id=f"{rid}_{location.begin}_{location.end}", description=desc)


def export_pairs_to_fasta(ranked: Sequence[RankedPair], fasta_path: Path) -> int:
    """Write forward + reverse records for every pair; returns the record count."""
    records: List[SeqRecord] = []
    for rank, r in enumerate(ranked, start=1):
        records.append(_record(r.pair.forward_primer, f"pair{rank}_F", r.forward_location))
        records.append(_record(r.pair.reverse_primer, f"pair{rank}_R", r.reverse_location))
    return SeqIO.write(records, fasta_path, "fasta")
