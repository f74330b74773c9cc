# File: backend/tests/test_thermodynamics.py
# Version: v0.1.0
"""
Unit tests for nearest-neighbor thermodynamics:
- agreement with Biopython's Tm_NN (DNA_NN3, Allawi & SantaLucia 1997; salt correction 5)
- palindromes use the full strand concentration
- degenerate inputs (empty, single base) and contract violations
"""

from __future__ import annotations

import math

import pytest
from Bio.SeqUtils import MeltingTemp as mt

from backend.app.core.primer.constants import R, KELVIN_OFFSET
from backend.app.core.primer.thermodynamics import (
    enthalpy,
    entropy,
    gc_percent,
    melting_temperature,
    melting_temperature_from_enthalpy,
    sodium_corrected_entropy,
)


def _biopython_tm(seq: str, na_molar: float, primer_molar: float, palindrome: bool = False) -> float:
    # Biopython takes mM for salt and nM for strands; with dnac1 == dnac2 the
    # effective concentration is dnac1 / 2 (non self-complementary).
    nM = primer_molar * 1e9
    return mt.Tm_NN(
        seq,
        nn_table=mt.DNA_NN3,
        Na=na_molar * 1000.0,
        dnac1=nM,
        dnac2=nM,
        selfcomp=palindrome,
        saltcorr=5,
    )


@pytest.mark.parametrize("seq", [
    "ATGCGTACGTTAGCCATGCA",
    "GGGCCCAAATTTGGGCCCTA",
    "ACGTTGCAAGGCTTAACGGA",
    "TTTTTTTTTTAAAAAAAAAG",
    "CGCGATATCGCGTATA",
])
def test_tm_matches_biopython_allawi_santalucia(seq):
    assert melting_temperature(seq, 0.2, 1e-6) == pytest.approx(_biopython_tm(seq, 0.2, 1e-6), abs=1e-6)
    assert melting_temperature(seq, 0.05, 2.5e-7) == pytest.approx(_biopython_tm(seq, 0.05, 2.5e-7), abs=1e-6)


def test_palindrome_uses_full_concentration_and_symmetry():
    seq = "GAATTC"  # EcoRI site, its own reverse complement
    assert melting_temperature(seq, 0.2, 1e-6) == pytest.approx(
        _biopython_tm(seq, 0.2, 1e-6, palindrome=True), abs=1e-6
    )
    # symmetry correction applies to entropy only
    assert entropy("GAATTC") == pytest.approx(-2.8 - 22.2 - 22.2 - 20.4 - 22.2 - 22.2 - 2.8 - 1.4)
    assert enthalpy("GAATTC") == pytest.approx(0.1 - 8.2 - 7.9 - 7.2 - 7.9 - 8.2 + 0.1)


def test_tm_by_hand():
    seq = "ACGT"
    h = 2.3 - 8.4 - 10.6 - 8.4 + 2.3
    s = 4.1 - 22.4 - 27.2 - 22.4 + 4.1 - 1.4  # ACGT is palindromic
    assert enthalpy(seq) == pytest.approx(h)
    assert entropy(seq) == pytest.approx(s)
    s_na = s + 0.368 * 3 * math.log(0.2)
    expected = 1000.0 * h / (s_na + R * math.log(1e-6)) - KELVIN_OFFSET
    assert melting_temperature(seq, 0.2, 1e-6) == pytest.approx(expected)


def test_degenerate_inputs():
    assert melting_temperature("", 0.2, 1e-6) == 0.0
    assert enthalpy("") == 0.0
    assert entropy("") == 0.0

    # single base: initiation terms only, still a finite number
    assert enthalpy("A") == pytest.approx(2.3)
    assert entropy("G") == pytest.approx(-2.8)
    tm = melting_temperature("A", 0.2, 1e-6)
    assert math.isfinite(tm)
    assert tm == pytest.approx(2300.0 / (4.1 + R * math.log(5e-7)) - KELVIN_OFFSET)


def test_zero_denominator_clamps_to_zero():
    # entropy chosen so that S + R ln(C/2) == 0
    s = -R * math.log(1e-6 / 2.0)
    assert melting_temperature_from_enthalpy(-100.0, s, 1e-6, False) == 0.0


def test_contract_violations():
    with pytest.raises(ValueError):
        melting_temperature("ACGN", 0.2, 1e-6)
    with pytest.raises(ValueError):
        melting_temperature("AC-GT", 0.2, 1e-6)
    with pytest.raises(ValueError):
        melting_temperature("ACGT", 0.0, 1e-6)
    with pytest.raises(ValueError):
        melting_temperature("ACGT", 0.2, -1.0)
    with pytest.raises(ValueError):
        sodium_corrected_entropy(-10.0, 0, 0.2)


def test_salt_raises_tm():
    seq = "ATGCGTACGTTAGCCATGCA"
    assert melting_temperature(seq, 1.0, 1e-6) > melting_temperature(seq, 0.05, 1e-6)
    assert sodium_corrected_entropy(-100.0, 20, 1.0) == pytest.approx(-100.0)


def test_gc_percent():
    assert math.isclose(gc_percent("ATGC"), 50.0)
    assert gc_percent("") == 0.0
    assert gc_percent("GGCC") == 100.0
