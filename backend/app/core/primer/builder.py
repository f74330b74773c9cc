# File: backend/app/core/primer/builder.py
# Version: v0.1.0
"""
PrimerBuilder: assemble a Primer from a template window and an optional tail.

- Full primer sequence = enzyme recognition site (if any) + template window.
- Tm is computed on the *full* sequence from the builder's concentrations,
  unless an explicit Tm is supplied.
- The homodimer score is always computed on the full sequence.

Concentration defaults match `PrimerSearchParameters` (0.2 M Na+, 1 µM primer).
"""

from __future__ import annotations

from typing import Optional, Union

from .constants import DEFAULT_PRIMER_DNA_CONCENTRATION, DEFAULT_SODIUM_CONCENTRATION
from .dimer import DimerScorer
from .enzyme import RestrictionEnzyme
from .parameters import PrimerSearchParameters
from .primer import Primer, full_sequence
from .sequence import DnaSequence, require_acgt
from .thermodynamics import melting_temperature


class PrimerBuilder:
    def __init__(
        self,
        sodium_concentration: float = DEFAULT_SODIUM_CONCENTRATION,
        primer_dna_concentration: float = DEFAULT_PRIMER_DNA_CONCENTRATION,
        dimer_scorer: Optional[DimerScorer] = None,
    ) -> None:
        self._sodium_concentration = DEFAULT_SODIUM_CONCENTRATION
        self._primer_dna_concentration = DEFAULT_PRIMER_DNA_CONCENTRATION
        self.sodium_concentration = sodium_concentration
        self.primer_dna_concentration = primer_dna_concentration
        self._search_parameters: Optional[PrimerSearchParameters] = None
        self._dimer_scorer = dimer_scorer or DimerScorer()

    @classmethod
    def for_parameters(cls, params: PrimerSearchParameters) -> "PrimerBuilder":
        """Builder using the parameters' concentrations and stamping them on every primer."""
        builder = cls(params.sodiumConcentration, params.primerDnaConcentration)
        builder.set_search_parameters(params)
        return builder

    # --- Configuration --------------------------------------------------------------------------

    @property
    def sodium_concentration(self) -> float:
        return self._sodium_concentration

    @sodium_concentration.setter
    def sodium_concentration(self, value: float) -> None:
        if value <= 0.0:
            raise ValueError(f"sodium_concentration must be > 0 (got {value})")
        self._sodium_concentration = float(value)

    @property
    def primer_dna_concentration(self) -> float:
        return self._primer_dna_concentration

    @primer_dna_concentration.setter
    def primer_dna_concentration(self, value: float) -> None:
        if value <= 0.0:
            raise ValueError(f"primer_dna_concentration must be > 0 (got {value})")
        self._primer_dna_concentration = float(value)

    @property
    def search_parameters(self) -> Optional[PrimerSearchParameters]:
        return self._search_parameters

    def set_search_parameters(self, params: Optional[PrimerSearchParameters]) -> None:
        self._search_parameters = params

    def reset(self) -> None:
        """Restore default concentrations and detach any search parameters."""
        self._sodium_concentration = DEFAULT_SODIUM_CONCENTRATION
        self._primer_dna_concentration = DEFAULT_PRIMER_DNA_CONCENTRATION
        self._search_parameters = None

    # --- Construction ---------------------------------------------------------------------------

    def make_primer(
        self,
        window: Union[DnaSequence, str],
        enzyme: Optional[RestrictionEnzyme] = None,
        tm: Optional[float] = None,
    ) -> Primer:
        core = window if isinstance(window, DnaSequence) else DnaSequence(window)
        require_acgt(core, "Primer template window", allow_empty=True)

        full = full_sequence(core, enzyme)
        if tm is None:
            tm = melting_temperature(full, self._sodium_concentration, self._primer_dna_concentration)

        return Primer(
            core_sequence=core,
            restriction_enzyme=enzyme,
            tm=float(tm),
            homo_dimer_score=self._dimer_scorer.homo_dimer_score(full),
            search_parameters=self._search_parameters,
        )
