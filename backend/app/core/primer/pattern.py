# File: backend/app/core/primer/pattern.py
# Version: v0.1.0
"""
IUPAC DNA pattern used to constrain the 3' terminus of candidate primers.

Pattern symbols:
- A C G T and the IUPAC ambiguity codes R Y M K S W H B V D N
- ' ' matches any single character
- '-' matches a gap character
"""

from __future__ import annotations

from types import MappingProxyType
from typing import FrozenSet, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .sequence import GAP_CHARACTERS, DnaSequence

IUPAC_MATCHES: Mapping[str, FrozenSet[str]] = MappingProxyType({
    "A": frozenset("A"),
    "C": frozenset("C"),
    "G": frozenset("G"),
    "T": frozenset("T"),
    "R": frozenset("AG"),
    "Y": frozenset("CT"),
    "M": frozenset("AC"),
    "K": frozenset("GT"),
    "S": frozenset("CG"),
    "W": frozenset("AT"),
    "H": frozenset("ACT"),
    "B": frozenset("CGT"),
    "V": frozenset("ACG"),
    "D": frozenset("AGT"),
    "N": frozenset("ACGT"),
})

_DISPLAY = MappingProxyType({
    "R": "[A/G]", "Y": "[C/T]", "M": "[A/C]", "K": "[G/T]", "S": "[C/G]",
    "W": "[A/T]", "H": "[A/C/T]", "B": "[C/G/T]", "V": "[A/C/G]", "D": "[A/G/T]",
    "N": "*",
})


def _symbol_matches(symbol: str, ch: str) -> bool:
    if symbol == " ":
        return True
    if symbol == "-":
        return ch in GAP_CHARACTERS
    return ch in IUPAC_MATCHES[symbol]


class DnaPattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    pattern: str = Field("", description="IUPAC pattern; ' ' = any, '-' = gap")

    @field_validator("pattern", mode="before")
    @classmethod
    def _check_pattern(cls, v):
        p = (v or "").upper()
        bad = sorted({c for c in p if c not in IUPAC_MATCHES and c not in (" ", "-")})
        if bad:
            raise ValueError(f"Invalid pattern character(s): {''.join(bad)!r}")
        return p

    def __len__(self) -> int:
        return len(self.pattern)

    def is_empty(self) -> bool:
        return not self.pattern

    def matches_at(self, seq: Union[DnaSequence, str], offset: int) -> bool:
        """True if the pattern matches `seq` starting at 1-based `offset`."""
        s = str(seq).upper()
        n = len(self.pattern)
        if not s or n == 0:
            return False
        if offset < 1 or offset > len(s):
            raise ValueError(f"offset {offset} out of range 1..{len(s)}")
        if offset + n - 1 > len(s):
            return False
        return all(_symbol_matches(sym, s[offset - 1 + i]) for i, sym in enumerate(self.pattern))

    def matches_at_beginning(self, seq: Union[DnaSequence, str]) -> bool:
        return self.matches_at(seq, 1)

    def matches_at_end(self, seq: Union[DnaSequence, str]) -> bool:
        s = str(seq)
        if not s:
            return False
        return self.matches_at(s, max(1, len(s) - len(self.pattern) + 1))

    def index_in(self, seq: Union[DnaSequence, str], offset: int = 1) -> int:
        s = str(seq)
        if not s:
            return -1
        for i in range(offset, len(s) - len(self.pattern) + 2):
            if self.matches_at(s, i):
                return i
        return -1

    def display_text(self) -> str:
        return "".join(_DISPLAY.get(c, c) for c in self.pattern)

    def to_serial_object(self) -> dict:
        return {"_type": "DnaPattern", "pattern": self.pattern}

    @classmethod
    def from_serial_object(cls, obj: dict) -> "DnaPattern":
        return cls(pattern=(obj or {}).get("pattern") or "")
