# File: backend/tests/test_sequence_model.py
# Version: v0.1.0
"""
Value objects of the primer subsystem:
- DnaSequence / ClosedIntRange (1-based accessors, search, serial form)
- DnaPattern (IUPAC 3' terminal patterns)
- RestrictionEnzyme (5' tails, cut classification, serial form)
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from backend.app.core.primer.enzyme import NO_ENZYME, RestrictionEnzyme
from backend.app.core.primer.pattern import IUPAC_MATCHES, DnaPattern
from backend.app.core.primer.sequence import ClosedIntRange, DnaSequence, require_acgt, revcomp


# ---------- DnaSequence ----------

def test_sequence_normalizes_and_validates():
    s = DnaSequence("acgtn")
    assert s.sequence == "ACGTN"
    assert len(s) == 5
    assert s.grammar == "DNA"
    with pytest.raises(ValueError):
        DnaSequence("ACGU")
    with pytest.raises(ValueError):
        DnaSequence("AC GT")


def test_revcomp_and_palindrome():
    assert revcomp("ATGC") == "GCAT"
    assert DnaSequence("AACG").reverse_complement().sequence == "CGTT"
    assert DnaSequence("AACG").complement().sequence == "TTGC"
    assert DnaSequence("GAATTC").is_palindrome()
    assert not DnaSequence("GAATTA").is_palindrome()
    assert not DnaSequence("A").is_palindrome()
    assert not DnaSequence("").is_palindrome()


def test_one_based_accessors():
    s = DnaSequence("ACGTACGT")
    assert s.at(1) == "A"
    assert s.at(8) == "T"
    assert s.mid(ClosedIntRange(2, 4)).sequence == "CGT"
    with pytest.raises(ValueError):
        s.at(0)
    with pytest.raises(ValueError):
        s.mid(ClosedIntRange(5, 9))
    assert s.is_valid_range(ClosedIntRange(1, 8))
    assert not s.is_valid_range(ClosedIntRange(4, 3))


def test_search_helpers():
    s = DnaSequence("AAAACGTAAA")
    assert s.index_of("AAA") == 1
    assert s.index_of("AAA", 2) == 2
    assert s.last_index_of("AAA") == 8
    assert s.index_of("GGG") == -1
    assert s.index_of("") == -1
    assert s.count("AA") == 5
    assert s.find_locations_of("CG") == [ClosedIntRange(5, 6)]


def test_gap_and_acgt_checks():
    assert DnaSequence("AC-GT").has_gaps()
    assert DnaSequence("AC.GT").has_gaps()
    assert DnaSequence("ACGT").only_contains_acgt()
    assert not DnaSequence("ACNT").only_contains_acgt()
    require_acgt(DnaSequence(""), allow_empty=True)
    with pytest.raises(ValueError):
        require_acgt(DnaSequence(""))
    with pytest.raises(ValueError):
        require_acgt(DnaSequence("AC-T"))
    with pytest.raises(ValueError):
        require_acgt(DnaSequence("ACRT"))


def test_sequence_and_range_serial_forms():
    s = DnaSequence("GAATTC")
    obj = s.to_serial_object()
    assert obj == {"_type": "BioString", "sequence": "GAATTC", "grammar": "DNA"}
    assert DnaSequence.from_serial_object(obj) == s
    with pytest.raises(ValueError):
        DnaSequence.from_serial_object({"_type": "BioString", "sequence": "ACDE", "grammar": "AMINO"})

    r = ClosedIntRange(3, 9)
    assert r.to_serial_object() == [3, 9]
    assert ClosedIntRange.from_serial_object([3, 9]) == r
    assert r.length == 7
    assert r.contains(3) and r.contains(9) and not r.contains(10)


# ---------- DnaPattern ----------

def test_pattern_matching():
    p = DnaPattern(pattern="S")
    assert p.matches_at_end("ACGTG")
    assert p.matches_at_end("ACGTC")
    assert not p.matches_at_end("ACGTA")

    p2 = DnaPattern(pattern="gn")
    assert p2.pattern == "GN"
    assert p2.matches_at_beginning("GTTT")
    assert not p2.matches_at_beginning("CTTT")
    assert p2.index_in("AAGCT") == 3
    assert DnaPattern(pattern="RY").display_text() == "[A/G][C/T]"


def test_pattern_wildcards_and_bounds():
    assert DnaPattern(pattern="A C").matches_at("AGC", 1)
    assert DnaPattern(pattern="A-C").matches_at("A-C", 1)
    assert not DnaPattern(pattern="A-C").matches_at("AGC", 1)
    # longer than the sequence never matches
    assert not DnaPattern(pattern="ACGT").matches_at_end("GT")
    assert not DnaPattern(pattern="A").matches_at_end("")
    with pytest.raises(ValueError):
        DnaPattern(pattern="A").matches_at("AAA", 4)
    with pytest.raises(ValidationError):
        DnaPattern(pattern="AXG")


def test_pattern_serial_form():
    p = DnaPattern(pattern="WS")
    obj = p.to_serial_object()
    assert obj == {"_type": "DnaPattern", "pattern": "WS"}
    assert DnaPattern.from_serial_object(obj) == p


def test_pattern_tables_are_read_only():
    assert IUPAC_MATCHES["N"] == frozenset("ACGT")
    with pytest.raises(TypeError):
        IUPAC_MATCHES["X"] = frozenset("A")


# ---------- RestrictionEnzyme ----------

def test_enzyme_classification():
    eco = RestrictionEnzyme(name="EcoRI", recognitionSite="gaattc", forwardCuts=(1,), reverseCuts=(5,))
    assert eco.recognitionSite == "GAATTC"
    assert eco.is_sticky() and not eco.is_blunt()
    assert eco.num_cuts() == 2
    assert not eco.cuts_only_one_strand()

    eco_v = RestrictionEnzyme(name="EcoRV", recognitionSite="GATATC", forwardCuts=(3,), reverseCuts=(3,))
    assert eco_v.is_blunt() and not eco_v.is_sticky()

    nick = RestrictionEnzyme(name="Nt.Test", recognitionSite="GCTCTTC", forwardCuts=(8,))
    assert nick.cuts_only_one_strand()

    assert NO_ENZYME.is_empty()
    assert NO_ENZYME.num_cuts() == 0


def test_enzyme_validation():
    with pytest.raises(ValidationError):
        RestrictionEnzyme(name="bad", recognitionSite="GA-TTC")
    with pytest.raises(ValidationError):
        RestrictionEnzyme(name="bad", recognitionSite="GAATTC", forwardCuts=(0,))
    with pytest.raises(ValidationError):
        RestrictionEnzyme(name="bad", recognitionSite="GAAXTC")
    # ambiguity codes
    with pytest.raises(ValidationError):
        RestrictionEnzyme(name="HinfI", recognitionSite="GANTC", forwardCuts=(1,), reverseCuts=(4,))
    with pytest.raises(ValidationError):
        RestrictionEnzyme.from_serial_object({"name": "HinfI", "recognitionSite": {"sequence": "GANTC"}})


def test_enzyme_serial_form():
    eco = RestrictionEnzyme(name="EcoRI", recognitionSite="GAATTC", forwardCuts=(1,), reverseCuts=(5,))
    obj = eco.to_serial_object()
    assert obj == {
        "_type": "RestrictionEnzyme",
        "name": "EcoRI",
        "recognitionSite": {"_type": "BioString", "sequence": "GAATTC", "grammar": "DNA"},
        "forwardCuts": [1],
        "reverseCuts": [5],
    }
    assert RestrictionEnzyme.from_serial_object(obj) == eco
