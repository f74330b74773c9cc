# File: backend/app/core/export/json_exporter.py
# Version: v1.0.0

"""
Export ranked primer pairs to a JSON file.

Top-level object:
    {
      "sequence_name": ..., "sequence_length": ..., "region": [begin, end],
      "pair_count": ..., "message": ...,
      "pairs": [ {rank, amplicon, forward, reverse, score, serialized}, ... ]
    }
`serialized` is the PrimerPair serial object, reloadable with
`PrimerPair.from_serial_object`.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from backend.app.core.primer.designer import RankedPair
from backend.app.core.primer.sequence import ClosedIntRange


def pair_to_dict(rank: int, r: RankedPair) -> Dict[str, Any]:
    f = r.pair.forward_primer
    v = r.pair.reverse_primer
    return {
        "rank": rank,
        "score": r.pair.score,
        "delta_tm": r.pair.delta_tm,
        "amplicon": {"begin": r.forward_location.begin, "end": r.reverse_location.end, "length": r.amplicon_length},
        "forward": {"pos": r.forward_location.begin, "len": len(f.sequence), "seq": f.sequence_string(), "tm": f.tm},
        "reverse": {"pos": r.reverse_location.begin, "len": len(v.sequence), "seq": v.sequence_string(), "tm": v.tm},
        "serialized": r.pair.to_serial_object(),
    }


def export_pairs_to_json(
    ranked: Sequence[RankedPair],
    json_path: Path,
    *,
    sequence_name: str,
    sequence_length: int,
    region: ClosedIntRange,
    message: str = "",
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Write the JSON document and return it."""
    data: Dict[str, Any] = {
        "sequence_name": sequence_name,
        "sequence_length": sequence_length,
        "region": region.to_serial_object(),
        "pair_count": len(ranked),
        "message": message,
        "pairs": [pair_to_dict(i, r) for i, r in enumerate(ranked, start=1)],
    }
    if extra:
        data.update(extra)
    json_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return data
