# File: backend/app/core/primer/thermodynamics.py
# Version: v0.2.0
"""
Nearest-neighbor thermodynamics for primer melting temperature.

Implements:
- Enthalpy / entropy sums (terminal initiation + stacking + symmetry correction)
- Sodium-corrected entropy:  S[x M Na+] = S[1 M Na+] + 0.368 * (N - 1) * ln[Na+]
- Tm (°C) = 1000 * H / (A + S + R * ln(C / x)) - 273.15
  with x = 2 for non-self-complementary duplexes and x = 1 for palindromes
- GC percentage (reported alongside Tm by the API)

Constraints:
- Input must be ungapped A/C/G/T. Degenerate codes are rejected.
- Concentrations are molar and must be > 0.

Degenerate inputs:
- Empty sequence -> 0.0 for H, S and Tm.
- Single base -> terminal initiation only (no stacking term).
- A vanishing denominator or non-finite result is clamped to 0.0.
"""

from __future__ import annotations

import logging
import math
from typing import Union

from .constants import (
    ENTHALPY_DIMER_KCAL_PER_MOLE,
    ENTHALPY_MONOMER_KCAL_PER_MOLE,
    ENTHALPY_SYMMETRY_CORRECTION,
    ENTROPY_DIMER_CAL_PER_K_PER_MOLE,
    ENTROPY_MONOMER_CAL_PER_K_PER_MOLE,
    ENTROPY_OFFSET,
    ENTROPY_SYMMETRY_CORRECTION,
    KELVIN_OFFSET,
    R,
    SALT_ENTROPY_FACTOR,
)
from .sequence import DnaSequence, require_acgt

logger = logging.getLogger(__name__)

SeqLike = Union[DnaSequence, str]


def _as_acgt(seq: SeqLike, what: str) -> DnaSequence:
    s = seq if isinstance(seq, DnaSequence) else DnaSequence(seq)
    require_acgt(s, what, allow_empty=True)
    return s


def gc_percent(seq: SeqLike) -> float:
    s = str(seq).upper()
    if not s:
        return 0.0
    gc = sum(1 for c in s if c in ("G", "C"))
    return 100.0 * gc / len(s)


def _nearest_neighbor_sum(s: str, monomer, dimer, symmetry: float, palindrome: bool) -> float:
    total = monomer[s[0]]
    if len(s) == 1:
        return total
    for a, b in zip(s, s[1:]):
        total += dimer[a][b]
    total += monomer[s[-1]]
    if palindrome:
        total += symmetry
    return total


def enthalpy(seq: SeqLike) -> float:
    """Total ΔH (kcal/mol) at 1 M Na+."""
    s = _as_acgt(seq, "enthalpy() sequence")
    if s.is_empty():
        return 0.0
    return _nearest_neighbor_sum(
        s.sequence,
        ENTHALPY_MONOMER_KCAL_PER_MOLE,
        ENTHALPY_DIMER_KCAL_PER_MOLE,
        ENTHALPY_SYMMETRY_CORRECTION,
        s.is_palindrome(),
    )


def entropy(seq: SeqLike) -> float:
    """Total ΔS (cal/K/mol) at 1 M Na+."""
    s = _as_acgt(seq, "entropy() sequence")
    if s.is_empty():
        return 0.0
    return _nearest_neighbor_sum(
        s.sequence,
        ENTROPY_MONOMER_CAL_PER_K_PER_MOLE,
        ENTROPY_DIMER_CAL_PER_K_PER_MOLE,
        ENTROPY_SYMMETRY_CORRECTION,
        s.is_palindrome(),
    )


def sodium_corrected_entropy(entropy_value: float, sequence_length: int, sodium_concentration: float) -> float:
    if sequence_length <= 0:
        raise ValueError("sequence_length must be > 0")
    if sodium_concentration <= 0.0:
        raise ValueError("sodium_concentration must be > 0")
    return entropy_value + SALT_ENTROPY_FACTOR * (sequence_length - 1) * math.log(sodium_concentration)


def melting_temperature_from_enthalpy(
    enthalpy_value: float,
    sodium_corrected_entropy_value: float,
    primer_dna_concentration: float,
    is_palindrome: bool,
) -> float:
    if primer_dna_concentration <= 0.0:
        raise ValueError("primer_dna_concentration must be > 0")
    adjusted = primer_dna_concentration if is_palindrome else primer_dna_concentration / 2.0
    denominator = ENTROPY_OFFSET + sodium_corrected_entropy_value + R * math.log(adjusted)
    if denominator == 0.0:
        logger.debug("Tm denominator vanished (H=%.3f); clamping to 0.0", enthalpy_value)
        return 0.0
    tm = 1000.0 * enthalpy_value / denominator - KELVIN_OFFSET
    if not math.isfinite(tm):
        return 0.0
    return tm


def melting_temperature(
    seq: SeqLike,
    sodium_concentration: float,
    primer_dna_concentration: float,
) -> float:
    """
    Salt-adjusted nearest-neighbor Tm (°C).

    Args:
        seq: full primer sequence (A/C/G/T only, ungapped)
        sodium_concentration: monovalent cation concentration (mol/L)
        primer_dna_concentration: total primer strand concentration (mol/L)
    """
    if sodium_concentration <= 0.0:
        raise ValueError("sodium_concentration must be > 0")
    if primer_dna_concentration <= 0.0:
        raise ValueError("primer_dna_concentration must be > 0")

    s = _as_acgt(seq, "melting_temperature() sequence")
    if s.is_empty():
        return 0.0

    h = enthalpy(s)
    corrected = sodium_corrected_entropy(entropy(s), len(s), sodium_concentration)
    return melting_temperature_from_enthalpy(h, corrected, primer_dna_concentration, s.is_palindrome())
