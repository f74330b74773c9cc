# File: backend/tests/test_dimer.py
# Version: v0.1.0
"""
Sliding-window hydrogen-bond dimer scoring.
"""

from __future__ import annotations

import pytest

from backend.app.core.primer.dimer import DimerScorer, dimer_score, homo_dimer_score, hydrogen_bonds_between


def test_hydrogen_bonds_between():
    assert hydrogen_bonds_between("A", "T") == 2
    assert hydrogen_bonds_between("T", "A") == 2
    assert hydrogen_bonds_between("G", "C") == 3
    assert hydrogen_bonds_between("C", "G") == 3
    assert hydrogen_bonds_between("A", "A") == 0
    assert hydrogen_bonds_between("G", "T") == 0


def test_perfect_complement_full_overlap():
    scorer = DimerScorer()
    # CATAT is the reverse complement of ATATG: every column pairs at zero shift
    assert scorer.maximum_hydrogen_bonds("ATATG", "CATAT") == 11
    assert scorer.dimer_score("ATATG", "CATAT") == pytest.approx(22.0)


def test_homo_dimer_equals_self_dimer():
    scorer = DimerScorer()
    assert scorer.maximum_hydrogen_bonds("ATATG", "ATATG") == 8
    assert scorer.homo_dimer_score("ATATG") == pytest.approx(16.0)
    for seq in ("ATATG", "GAATTCACGT", "CCCCAAAA", "ACGTTGCAAGGCTTAACGGA"):
        assert homo_dimer_score(seq) == dimer_score(seq, seq)


def test_empty_inputs_score_zero():
    assert dimer_score("", "ACGT") == 0.0
    assert dimer_score("ACGT", "") == 0.0
    assert homo_dimer_score("") == 0.0


def test_last_offset_is_scored():
    # Only the final offset (last base of a against first base of b) pairs C-G
    scorer = DimerScorer()
    assert scorer.maximum_hydrogen_bonds("AC", "G") == 3
    assert scorer.dimer_score("AC", "G") == pytest.approx(30.0)
    # and the first offset (5' bases of a and b)
    assert scorer.maximum_hydrogen_bonds("GA", "CAA") == 3


def test_score_is_normalized_to_shorter_primer():
    long_a = "ATATG" + "C" * 15
    # same best column set as the 5-mer case, normalized by the shorter length
    assert dimer_score(long_a, "CATAT") == pytest.approx(11 * 10 / 5)


def test_case_insensitive():
    assert dimer_score("atatg", "catat") == dimer_score("ATATG", "CATAT")
