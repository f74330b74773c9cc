# File: backend/tests/test_config_primers.py
# Version: v0.1.0
"""
Stored primer parameters: defaults fallback, atomic save, reload.
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from backend.app.config import config_primers
from backend.app.core.primer.parameters import IntRange, PrimerSearchParameters


@pytest.fixture
def tmp_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config_primers, "CURRENT_FILE", tmp_path / "primers_param.json")
    monkeypatch.setattr(config_primers, "DEFAULT_FILE", tmp_path / "primers_param_default.json")
    return tmp_path


def test_missing_files_fall_back_to_model_defaults(tmp_config):
    assert config_primers.load_default_params() == PrimerSearchParameters()
    assert config_primers.load_current_params() == PrimerSearchParameters()


def test_current_falls_back_to_defaults_file(tmp_config):
    (tmp_config / "primers_param_default.json").write_text(
        json.dumps({"ampliconLengthRange": {"begin": 150, "end": 500}}), encoding="utf-8"
    )
    params = config_primers.load_current_params()
    assert params.ampliconLengthRange == IntRange(begin=150, end=500)


def test_save_and_reload(tmp_config):
    params = PrimerSearchParameters(maxResults=7, primerLengthRange=IntRange(begin=18, end=22))
    config_primers.save_current_params(params)
    path = tmp_config / "primers_param.json"
    assert path.exists()
    assert not (tmp_config / "primers_param.json.tmp").exists()
    assert json.loads(path.read_text(encoding="utf-8"))["maxResults"] == 7
    assert config_primers.load_current_params() == params


def test_ensure_current_exists(tmp_config):
    created, params = config_primers.ensure_current_exists()
    assert created
    assert params == PrimerSearchParameters()
    created_again, _ = config_primers.ensure_current_exists()
    assert not created_again


def test_invalid_file_raises(tmp_config):
    (tmp_config / "primers_param.json").write_text(json.dumps({"sodiumConcentration": -1}), encoding="utf-8")
    with pytest.raises(ValidationError):
        config_primers.load_current_params()


def test_shipped_defaults_file_is_valid():
    path = config_primers.REPO_ROOT / "backend" / "app" / "config" / "primers_param_default.json"
    params = config_primers.load_params_file(path)
    assert params == PrimerSearchParameters()
