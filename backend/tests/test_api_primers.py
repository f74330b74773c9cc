# File: backend/tests/test_api_primers.py
# Version: v0.1.0
"""
Primer API: design, Tm / dimer helpers, stored parameters and runs.
"""

from __future__ import annotations

import random

import pytest
from fastapi.testclient import TestClient

from backend.app.main import app
from backend.app.core.primer.primer import PrimerPair
from backend.app.core.primer.thermodynamics import melting_temperature

client = TestClient(app)

_rng = random.Random(11)
TARGET = "".join(_rng.choice("ACGT") for _ in range(220))

PARAMS = {
    "ampliconLengthRange": {"begin": 80, "end": 120},
    "primerLengthRange": {"begin": 18, "end": 19},
    "individualPrimerTmRange": {"begin": 50.0, "end": 70.0},
    "maximumPrimerPairDeltaTm": 3.0,
    "maxResults": 5,
}


def test_design_returns_ranked_pairs_and_stores_run():
    r = client.post("/api/v1/primers/design", json={"sequence": TARGET.lower(), "parameters": PARAMS})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["regionBegin"] == 1 and data["regionEnd"] == len(TARGET)
    assert 1 <= data["pairCount"] <= 5
    assert len(data["pairs"]) == len(data["serialized"]) == data["pairCount"]

    scores = [p["score"] for p in data["pairs"]]
    assert scores == sorted(scores)
    first = data["pairs"][0]
    assert first["rank"] == 1
    assert 80 <= first["ampliconLength"] <= 120
    fwd = first["forwardPrimer"]
    assert TARGET[fwd["begin"] - 1:fwd["end"]] == fwd["coreSequence"]
    assert fwd["tm"] == pytest.approx(melting_temperature(fwd["sequence"], 0.2, 1e-6))

    pair = PrimerPair.from_serial_object(data["serialized"][0])
    assert pair.score == pytest.approx(first["score"])

    run_id = data["runId"]
    assert run_id
    detail = client.get(f"/api/v1/primers/runs/{run_id}")
    assert detail.status_code == 200
    d = detail.json()
    assert d["status"] == "completed"
    assert d["pair_count"] == data["pairCount"]
    assert d["region_end"] == len(TARGET)
    assert d["parameters"]["a"] == [80, 120]
    assert [PrimerPair.from_serial_object(o) for o in d["pairs"]] == [
        PrimerPair.from_serial_object(o) for o in data["serialized"]
    ]

    listing = client.get("/api/v1/primers/runs")
    assert listing.status_code == 200
    assert any(item["id"] == run_id for item in listing.json()["items"])


def test_design_without_store_and_with_region():
    r = client.post("/api/v1/primers/design", json={
        "sequence": TARGET, "regionBegin": 21, "regionEnd": 200, "parameters": PARAMS, "store": False,
    })
    assert r.status_code == 200
    data = r.json()
    assert data["runId"] is None
    for p in data["pairs"]:
        assert p["ampliconBegin"] >= 21 and p["ampliconEnd"] <= 200


def test_design_no_solution_is_not_an_error():
    r = client.post("/api/v1/primers/design", json={"sequence": "ACGT" * 10, "parameters": PARAMS, "store": False})
    assert r.status_code == 200
    assert r.json()["pairCount"] == 0


def test_design_rejects_bad_input():
    assert client.post("/api/v1/primers/design", json={"sequence": "ACGTXX"}).status_code == 422
    assert client.post("/api/v1/primers/design", json={
        "sequence": TARGET, "regionBegin": 10, "regionEnd": 500, "store": False,
    }).status_code == 400
    bad_params = dict(PARAMS, sodiumConcentration=0)
    assert client.post("/api/v1/primers/design", json={"sequence": TARGET, "parameters": bad_params}).status_code == 422


def test_rejected_design_requests_are_not_stored():
    before = client.get("/api/v1/primers/runs").json()["total"]
    out_of_bounds = client.post("/api/v1/primers/design", json={
        "sequence": TARGET, "regionBegin": 10, "regionEnd": 500, "parameters": PARAMS,
    })
    assert out_of_bounds.status_code == 400
    hinf_tail = dict(PARAMS, forwardRestrictionEnzyme={"name": "HinfI", "recognitionSite": "GANTC", "forwardCuts": [1]})
    assert client.post("/api/v1/primers/design", json={"sequence": TARGET, "parameters": hinf_tail}).status_code == 422
    assert client.get("/api/v1/primers/runs").json()["total"] == before


def test_melting_temperature_endpoint():
    r = client.post("/api/v1/primers/melting-temperature", json={"sequence": "ACGGTCAACCTTGACGTA"})
    assert r.status_code == 200
    data = r.json()
    assert data["tm"] == pytest.approx(melting_temperature("ACGGTCAACCTTGACGTA", 0.2, 1e-6))
    assert data["palindrome"] is False
    assert 0.0 <= data["gc"] <= 100.0

    r2 = client.post("/api/v1/primers/melting-temperature", json={"sequence": "ACGNT"})
    assert r2.status_code == 400


def test_dimer_score_endpoint():
    r = client.post("/api/v1/primers/dimer-score", json={"sequence1": "ATATG", "sequence2": "CATAT"})
    assert r.status_code == 200
    assert r.json() == {"score": pytest.approx(22.0), "maximumHydrogenBonds": 11}


def test_parameters_get_put():
    r = client.get("/api/v1/primers/parameters")
    assert r.status_code == 200
    assert r.json()["primerLengthRange"] == {"begin": 20, "end": 25}

    payload = dict(r.json(), maxResults=4, forwardTerminalPattern={"pattern": "S"})
    r2 = client.put("/api/v1/primers/parameters", json=payload)
    assert r2.status_code == 200
    assert client.get("/api/v1/primers/parameters").json()["maxResults"] == 4

    bad = dict(payload, primerLengthRange={"begin": 30, "end": 20})
    assert client.put("/api/v1/primers/parameters", json=bad).status_code == 422


def test_run_not_found_and_delete():
    assert client.get("/api/v1/primers/runs/does-not-exist").status_code == 404
    r = client.post("/api/v1/primers/design", json={"sequence": "ACGT" * 10, "parameters": PARAMS})
    run_id = r.json()["runId"]
    assert client.delete(f"/api/v1/primers/runs/{run_id}").status_code == 204
    assert client.get(f"/api/v1/primers/runs/{run_id}").status_code == 404
