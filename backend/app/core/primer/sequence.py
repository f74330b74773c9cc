# File: backend/app/core/primer/sequence.py
# Version: v0.2.0
"""
Immutable DNA sequence view used throughout the primer subsystem.

What this file does
-------------------
- `DnaSequence`: upper-cased, validated DNA string with 1-based accessors,
  gap detection, complement / reverse complement and substring search.
- `ClosedIntRange`: 1-based inclusive (begin, end) pair with the serial
  form `[begin, end]`.
- `revcomp`: plain-string reverse complement (IUPAC aware).

Grammar
-------
Accepted symbols are A, C, G, T, the IUPAC ambiguity codes
(N R Y M K S W H B V D) and the gap characters '-' and '.'. Anything else
raises ValueError at construction. Primer code additionally requires
ACGT-only, ungapped windows (see `require_acgt`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Union

GRAMMAR_DNA = "DNA"

ACGT = frozenset("ACGT")
GAP_CHARACTERS = frozenset("-.")
DNA_ALPHABET = ACGT | frozenset("NRYMKSWHBVD") | GAP_CHARACTERS

_COMPLEMENT = str.maketrans("ACGTRYMKSWHBVDN-.", "TGCAYRKMSWDVBHN-.")


def revcomp(seq: str) -> str:
    """Reverse-complement (IUPAC codes and gaps preserved)."""
    return seq.upper().translate(_COMPLEMENT)[::-1]


@dataclass(frozen=True)
class ClosedIntRange:
    """1-based closed interval [begin, end]."""
    begin: int = 0
    end: int = -1

    @property
    def length(self) -> int:
        return self.end - self.begin + 1

    def contains(self, value: int) -> bool:
        return self.begin <= value <= self.end

    def is_normal(self) -> bool:
        return self.begin <= self.end

    def to_serial_object(self) -> List[int]:
        return [self.begin, self.end]

    @classmethod
    def from_serial_object(cls, arr) -> "ClosedIntRange":
        return cls(int(arr[0]), int(arr[1]))


@dataclass(frozen=True)
class DnaSequence:
    """
    Copy-free immutable DNA string.

    Positions are 1-based. Lowercase input is upper-cased; characters outside
    the DNA grammar raise ValueError.
    """
    sequence: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.sequence, DnaSequence):
            object.__setattr__(self, "sequence", self.sequence.sequence)
        if not isinstance(self.sequence, str):
            raise ValueError(f"DnaSequence expects a string, got {type(self.sequence).__name__}")
        s = self.sequence.upper()
        bad = sorted(set(s) - DNA_ALPHABET)
        if bad:
            raise ValueError(f"Invalid DNA character(s): {''.join(bad)!r}")
        object.__setattr__(self, "sequence", s)

    # --- Python protocol ------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.sequence)

    def __str__(self) -> str:
        return self.sequence

    def __iter__(self) -> Iterator[str]:
        return iter(self.sequence)

    def __add__(self, other: Union["DnaSequence", str]) -> "DnaSequence":
        return DnaSequence(self.sequence + str(other))

    # --- Queries --------------------------------------------------------------------------------

    @property
    def grammar(self) -> str:
        return GRAMMAR_DNA

    def is_empty(self) -> bool:
        return not self.sequence

    def at(self, position: int) -> str:
        if not self.is_valid_position(position):
            raise ValueError(f"Position {position} out of range 1..{len(self)}")
        return self.sequence[position - 1]

    def mid(self, rng: ClosedIntRange) -> "DnaSequence":
        if not self.is_valid_range(rng):
            raise ValueError(f"Range [{rng.begin}, {rng.end}] out of range 1..{len(self)}")
        return DnaSequence(self.sequence[rng.begin - 1 : rng.end])

    def is_valid_position(self, position: int) -> bool:
        return 1 <= position <= len(self.sequence)

    def is_valid_range(self, rng: ClosedIntRange) -> bool:
        return rng.is_normal() and self.is_valid_position(rng.begin) and self.is_valid_position(rng.end)

    def has_gaps(self) -> bool:
        return any(c in GAP_CHARACTERS for c in self.sequence)

    def only_contains_acgt(self) -> bool:
        return bool(self.sequence) and all(c in ACGT for c in self.sequence)

    def is_palindrome(self) -> bool:
        """True for even-length, ungapped sequences equal to their reverse complement."""
        n = len(self.sequence)
        return n > 0 and n % 2 == 0 and not self.has_gaps() and self.sequence == revcomp(self.sequence)

    def complement(self) -> "DnaSequence":
        return DnaSequence(self.sequence.translate(_COMPLEMENT))

    def reverse_complement(self) -> "DnaSequence":
        return DnaSequence(revcomp(self.sequence))

    def index_of(self, sub: Union["DnaSequence", str], start: int = 1) -> int:
        """1-based position of the first occurrence at or after `start`; -1 if absent."""
        needle = str(sub).upper()
        if not needle or not self.sequence:
            return -1
        return self.sequence.find(needle, max(0, start - 1)) + 1 or -1

    def last_index_of(self, sub: Union["DnaSequence", str]) -> int:
        """1-based position of the last occurrence; -1 if absent."""
        needle = str(sub).upper()
        if not needle or not self.sequence:
            return -1
        return self.sequence.rfind(needle) + 1 or -1

    def count(self, sub: Union["DnaSequence", str]) -> int:
        """Number of (possibly overlapping) occurrences of `sub`."""
        n = 0
        pos = self.index_of(sub)
        while pos != -1:
            n += 1
            pos = self.index_of(sub, pos + 1)
        return n

    def find_locations_of(self, sub: Union["DnaSequence", str]) -> List[ClosedIntRange]:
        width = len(str(sub))
        out: List[ClosedIntRange] = []
        pos = self.index_of(sub)
        while pos != -1:
            out.append(ClosedIntRange(pos, pos + width - 1))
            pos = self.index_of(sub, pos + 1)
        return out

    # --- Serialization --------------------------------------------------------------------------

    def to_serial_object(self) -> dict:
        return {"_type": "BioString", "sequence": self.sequence, "grammar": GRAMMAR_DNA}

    @classmethod
    def from_serial_object(cls, obj: dict) -> "DnaSequence":
        grammar = obj.get("grammar", GRAMMAR_DNA)
        if grammar != GRAMMAR_DNA:
            raise ValueError(f"Unsupported sequence grammar: {grammar!r}")
        return cls(obj.get("sequence") or "")


def require_acgt(seq: DnaSequence, what: str = "sequence", allow_empty: bool = False) -> None:
    """Raise ValueError unless `seq` is ungapped and ACGT-only."""
    if seq.is_empty():
        if allow_empty:
            return
        raise ValueError(f"{what} must not be empty")
    if seq.has_gaps():
        raise ValueError(f"{what} must not contain gaps")
    if not seq.only_contains_acgt():
        raise ValueError(f"{what} may only contain A, C, G and T")
