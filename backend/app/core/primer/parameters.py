# File: backend/app/core/primer/parameters.py
# Version: v2.0.0
"""
Pydantic model for primer pair search parameters.

JSON shape (camelCase, ranges as {begin, end}):

    {
      "ampliconLengthRange": {"begin": 100, "end": 1000},
      "primerLengthRange": {"begin": 20, "end": 25},
      "individualPrimerTmRange": {"begin": 55.0, "end": 65.0},
      "sodiumConcentration": 0.2,
      "primerDnaConcentration": 1e-6,
      "maximumPrimerPairDeltaTm": 5.0,
      "forwardRestrictionEnzyme": {"name": "EcoRI", "recognitionSite": "GAATTC", "forwardCuts": [1], "reverseCuts": [5]},
      "reverseRestrictionEnzyme": null,
      "forwardTerminalPattern": {"pattern": "S"},
      "reverseTerminalPattern": null,
      "maximumHomoDimerScore": null,
      "requireUniqueCore": true,
      "primerStartStep": 1,
      "maxResults": null
    }

The model is frozen; use `model_copy(update=...)` to derive variants.
Concentration defaults are shared with `PrimerBuilder`.

The compact serial form (`to_serial_object`) uses short labels and stores
ranges as `[begin, end]` arrays so it can be embedded in serialized primers.

Usage:
    from backend.app.core.primer.parameters import PrimerSearchParameters
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, confloat, conint, model_validator

from .constants import (
    DEFAULT_AMPLICON_LENGTH_MAX,
    DEFAULT_AMPLICON_LENGTH_MIN,
    DEFAULT_MAX_DELTA_TM,
    DEFAULT_PRIMER_DNA_CONCENTRATION,
    DEFAULT_PRIMER_LENGTH_MAX,
    DEFAULT_PRIMER_LENGTH_MIN,
    DEFAULT_SODIUM_CONCENTRATION,
    DEFAULT_START_STEP,
    DEFAULT_TM_MAX,
    DEFAULT_TM_MIN,
)
from .enzyme import RestrictionEnzyme
from .pattern import DnaPattern
from .sequence import ClosedIntRange


class IntRange(BaseModel):
    """Closed integer interval [begin, end]."""
    model_config = ConfigDict(frozen=True)

    begin: int
    end: int

    @model_validator(mode="after")
    def _normal(self) -> "IntRange":
        if self.end < self.begin:
            raise ValueError(f"Invalid range [{self.begin}, {self.end}]: begin must be <= end")
        return self

    @property
    def length(self) -> int:
        return self.end - self.begin + 1

    def contains(self, value: int) -> bool:
        return self.begin <= value <= self.end

    def to_closed(self) -> ClosedIntRange:
        return ClosedIntRange(self.begin, self.end)


class RealRange(BaseModel):
    """Closed real interval [begin, end]."""
    model_config = ConfigDict(frozen=True)

    begin: float
    end: float

    @model_validator(mode="after")
    def _normal(self) -> "RealRange":
        if self.end < self.begin:
            raise ValueError(f"Invalid range [{self.begin}, {self.end}]: begin must be <= end")
        return self

    def contains(self, value: float) -> bool:
        return self.begin <= value <= self.end


class SerialLabels:
    ampliconLengthRange = "a"
    primerLengthRange = "p"
    forwardRestrictionEnzyme = "fe"
    reverseRestrictionEnzyme = "re"
    forwardTerminalPattern = "fp"
    reverseTerminalPattern = "rp"
    individualPrimerTmRange = "r"
    sodiumConcentration = "na"
    primerDnaConcentration = "pd"
    maximumPrimerPairDeltaTm = "d"
    maximumHomoDimerScore = "h"
    requireUniqueCore = "u"
    primerStartStep = "s"
    maxResults = "m"


class PrimerSearchParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Lengths
    ampliconLengthRange: IntRange = Field(
        default_factory=lambda: IntRange(begin=DEFAULT_AMPLICON_LENGTH_MIN, end=DEFAULT_AMPLICON_LENGTH_MAX),
        description="Acceptable amplicon lengths (bp, inclusive)",
    )
    primerLengthRange: IntRange = Field(
        default_factory=lambda: IntRange(begin=DEFAULT_PRIMER_LENGTH_MIN, end=DEFAULT_PRIMER_LENGTH_MAX),
        description="Allowed core primer lengths (bp, inclusive)",
    )

    # 5' tails and 3' terminal constraints
    forwardRestrictionEnzyme: Optional[RestrictionEnzyme] = Field(None, description="Forward primer 5' tail")
    reverseRestrictionEnzyme: Optional[RestrictionEnzyme] = Field(None, description="Reverse primer 5' tail")
    forwardTerminalPattern: Optional[DnaPattern] = Field(None, description="Required forward primer 3' terminus")
    reverseTerminalPattern: Optional[DnaPattern] = Field(None, description="Required reverse primer 3' terminus")

    # Thermodynamics
    individualPrimerTmRange: RealRange = Field(
        default_factory=lambda: RealRange(begin=DEFAULT_TM_MIN, end=DEFAULT_TM_MAX),
        description="Acceptable Tm of each primer (°C)",
    )
    sodiumConcentration: confloat(gt=0) = Field(DEFAULT_SODIUM_CONCENTRATION, description="Na+ (mol/L)")
    primerDnaConcentration: confloat(gt=0) = Field(DEFAULT_PRIMER_DNA_CONCENTRATION, description="Primer DNA (mol/L)")
    maximumPrimerPairDeltaTm: confloat(ge=0) = Field(DEFAULT_MAX_DELTA_TM, description="Max |Tm_f - Tm_r| (°C)")

    # Soft acceptance thresholds (evaluated after scoring)
    maximumHomoDimerScore: Optional[confloat(ge=0)] = Field(None, description="Drop pairs whose primers exceed this homodimer score")

    # Enumeration
    requireUniqueCore: bool = Field(True, description="Core sequence must occur exactly once on both target strands")
    primerStartStep: conint(ge=1) = Field(DEFAULT_START_STEP, description="Step between candidate window starts")
    maxResults: Optional[conint(ge=1)] = Field(None, description="Keep only the best N pairs")

    @model_validator(mode="after")
    def _check_bounds(self) -> "PrimerSearchParameters":
        if self.ampliconLengthRange.begin < 1:
            raise ValueError("The amplicon length minimum must be greater than or equal to 1.")
        if self.primerLengthRange.begin < 1:
            raise ValueError("The minimum primer length must be greater than or equal to 1.")
        if self.primerLengthRange.begin * 2 > self.ampliconLengthRange.end:
            raise ValueError(
                "The amplicon size that you have selected is too small. The maximum amplicon size must be "
                "at least 2 times longer than the minimum primer length."
            )
        return self

    # --- Convenience --------------------------------------------------------------------------------

    @property
    def milli_molar_sodium_concentration(self) -> float:
        return self.sodiumConcentration * 1000.0

    @property
    def micro_molar_dna_concentration(self) -> float:
        return self.primerDnaConcentration * 1_000_000.0

    @classmethod
    def from_lab_units(cls, sodium_mM: float, primer_uM: float, **kwargs) -> "PrimerSearchParameters":
        """Build from milli-molar Na+ and micro-molar primer concentrations."""
        return cls(sodiumConcentration=sodium_mM / 1000.0, primerDnaConcentration=primer_uM / 1_000_000.0, **kwargs)

    # --- Serialization ------------------------------------------------------------------------------

    def to_serial_object(self) -> dict:
        L = SerialLabels
        fe = self.forwardRestrictionEnzyme or RestrictionEnzyme()
        re_ = self.reverseRestrictionEnzyme or RestrictionEnzyme()
        fp = self.forwardTerminalPattern or DnaPattern()
        rp = self.reverseTerminalPattern or DnaPattern()
        return {
            L.ampliconLengthRange: [self.ampliconLengthRange.begin, self.ampliconLengthRange.end],
            L.primerLengthRange: [self.primerLengthRange.begin, self.primerLengthRange.end],
            L.forwardRestrictionEnzyme: fe.to_serial_object(),
            L.reverseRestrictionEnzyme: re_.to_serial_object(),
            L.forwardTerminalPattern: fp.to_serial_object(),
            L.reverseTerminalPattern: rp.to_serial_object(),
            L.individualPrimerTmRange: [self.individualPrimerTmRange.begin, self.individualPrimerTmRange.end],
            L.sodiumConcentration: self.sodiumConcentration,
            L.primerDnaConcentration: self.primerDnaConcentration,
            L.maximumPrimerPairDeltaTm: self.maximumPrimerPairDeltaTm,
            L.maximumHomoDimerScore: self.maximumHomoDimerScore,
            L.requireUniqueCore: self.requireUniqueCore,
            L.primerStartStep: self.primerStartStep,
            L.maxResults: self.maxResults,
        }

    @classmethod
    def from_serial_object(cls, obj: dict) -> "PrimerSearchParameters":
        L = SerialLabels

        def _enzyme(key: str) -> Optional[RestrictionEnzyme]:
            raw = obj.get(key)
            if not raw:
                return None
            enzyme = RestrictionEnzyme.from_serial_object(raw)
            return None if enzyme.is_empty() else enzyme

        def _pattern(key: str) -> Optional[DnaPattern]:
            raw = obj.get(key)
            if not raw:
                return None
            pattern = DnaPattern.from_serial_object(raw)
            return None if pattern.is_empty() else pattern

        data = {
            "forwardRestrictionEnzyme": _enzyme(L.forwardRestrictionEnzyme),
            "reverseRestrictionEnzyme": _enzyme(L.reverseRestrictionEnzyme),
            "forwardTerminalPattern": _pattern(L.forwardTerminalPattern),
            "reverseTerminalPattern": _pattern(L.reverseTerminalPattern),
        }
        if L.ampliconLengthRange in obj:
            b, e = obj[L.ampliconLengthRange]
            data["ampliconLengthRange"] = IntRange(begin=b, end=e)
        if L.primerLengthRange in obj:
            b, e = obj[L.primerLengthRange]
            data["primerLengthRange"] = IntRange(begin=b, end=e)
        if L.individualPrimerTmRange in obj:
            b, e = obj[L.individualPrimerTmRange]
            data["individualPrimerTmRange"] = RealRange(begin=b, end=e)
        for name in ("sodiumConcentration", "primerDnaConcentration", "maximumPrimerPairDeltaTm",
                     "maximumHomoDimerScore", "requireUniqueCore", "primerStartStep", "maxResults"):
            label = getattr(L, name)
            if label in obj:
                data[name] = obj[label]
        return cls(**data)
