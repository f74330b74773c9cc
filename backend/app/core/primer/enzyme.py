# File: backend/app/core/primer/enzyme.py
# Version: v0.1.0
"""
Restriction enzyme value object (used only as an optional 5' primer tail).

The model is a frozen Pydantic model so it can be embedded directly in
`PrimerSearchParameters` and in API payloads:

    {
      "name": "EcoRI",
      "recognitionSite": "GAATTC",
      "forwardCuts": [1],
      "reverseCuts": [5]
    }

An empty recognition site means "no enzyme". Sites are ungapped A/C/G/T only.
"""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .sequence import DnaSequence, require_acgt


class RestrictionEnzyme(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field("", description="Enzyme name, e.g. 'EcoRI'")
    recognitionSite: str = Field("", description="Ungapped DNA recognition site (prepended 5' of the primer core)")
    forwardCuts: Tuple[int, ...] = Field((), description="Forward-strand cut offsets relative to the site (non-zero)")
    reverseCuts: Tuple[int, ...] = Field((), description="Reverse-strand cut offsets relative to the site (non-zero)")

    @field_validator("recognitionSite", mode="before")
    @classmethod
    def _check_site(cls, v):
        if v is None:
            return ""
        site = DnaSequence(str(v))
        require_acgt(site, "recognitionSite", allow_empty=True)
        return site.sequence

    @field_validator("forwardCuts", "reverseCuts")
    @classmethod
    def _check_cuts(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        if any(c == 0 for c in v):
            raise ValueError("cut offsets must be non-zero")
        return v

    # --- Derived ----------------------------------------------------------------------------------

    @property
    def recognition_site(self) -> DnaSequence:
        return DnaSequence(self.recognitionSite)

    def is_empty(self) -> bool:
        return not self.recognitionSite

    def is_blunt(self) -> bool:
        return len(self.forwardCuts) > 0 and self.forwardCuts == self.reverseCuts

    def is_sticky(self) -> bool:
        return len(self.forwardCuts) > 0 and len(self.reverseCuts) > 0 and self.forwardCuts != self.reverseCuts

    def cuts_only_one_strand(self) -> bool:
        return bool(self.forwardCuts) != bool(self.reverseCuts)

    def num_cuts(self) -> int:
        return len(self.forwardCuts) + len(self.reverseCuts)

    # --- Serialization ----------------------------------------------------------------------------

    def to_serial_object(self) -> dict:
        return {
            "_type": "RestrictionEnzyme",
            "name": self.name,
            "recognitionSite": self.recognition_site.to_serial_object(),
            "forwardCuts": list(self.forwardCuts),
            "reverseCuts": list(self.reverseCuts),
        }

    @classmethod
    def from_serial_object(cls, obj: dict) -> "RestrictionEnzyme":
        site = DnaSequence.from_serial_object(obj.get("recognitionSite") or {})
        return cls(
            name=obj.get("name") or "",
            recognitionSite=site.sequence,
            forwardCuts=tuple(obj.get("forwardCuts") or ()),
            reverseCuts=tuple(obj.get("reverseCuts") or ()),
        )


NO_ENZYME = RestrictionEnzyme()
