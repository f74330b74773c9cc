# File: backend/app/config/config_primers.py
# Version: v1.0.0
"""
Primer search parameters configuration loader/saver.

- Reads defaults from: settings.PRIMER_PARAMS_DEFAULT_PATH
  (backend/app/config/primers_param_default.json)
- Reads/writes current from: settings.PRIMER_PARAMS_PATH
  (backend/app/config/primers_param.json)
- Validates payloads with PrimerSearchParameters (Pydantic) from core/primer/parameters.py

Usage:
    from backend.app.config.config_primers import load_current_params, save_current_params

Notes
-----
- JSON uses the camelCase field names of PrimerSearchParameters, ranges as
  {"begin", "end"} objects, optional enzymes / terminal patterns as objects or null:

  {
    "ampliconLengthRange": {"begin": 100, "end": 1000},
    "primerLengthRange": {"begin": 20, "end": 25},
    "individualPrimerTmRange": {"begin": 55.0, "end": 65.0},
    "sodiumConcentration": 0.2,
    "primerDnaConcentration": 1e-06,
    "maximumPrimerPairDeltaTm": 5.0,
    "forwardRestrictionEnzyme": null,
    "reverseRestrictionEnzyme": null,
    "forwardTerminalPattern": null,
    "reverseTerminalPattern": null
  }

- Missing keys take model defaults; a missing defaults file means model defaults.
- Relative paths are resolved against the repository root, not the CWD.

Thread-safety:
- Uses atomic writes (tmp + replace) to avoid partial/dirty writes.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Tuple

from backend.app.core.config import settings
from backend.app.core.primer.parameters import PrimerSearchParameters

logger = logging.getLogger(__name__)

# Repository root: backend/app/config/ -> ../../..
REPO_ROOT = Path(__file__).resolve().parents[3]


def _resolve(path: Path) -> Path:
    path = Path(path)
    return path if path.is_absolute() else REPO_ROOT / path


DEFAULT_FILE = _resolve(settings.PRIMER_PARAMS_DEFAULT_PATH)
CURRENT_FILE = _resolve(settings.PRIMER_PARAMS_PATH)


def _read_json(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _atomic_write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")
    os.replace(tmp, path)


def params_to_json(params: PrimerSearchParameters) -> dict:
    """camelCase JSON payload (the shape accepted by `PrimerSearchParameters.model_validate`)."""
    return params.model_dump(mode="json")


def load_params_file(path: Path) -> PrimerSearchParameters:
    """Load and validate a parameters JSON file (missing keys take model defaults)."""
    return PrimerSearchParameters.model_validate(_read_json(Path(path)) or {})


def load_default_params() -> PrimerSearchParameters:
    """Load default primer search parameters from the defaults file."""
    payload = _read_json(DEFAULT_FILE)
    if not payload:
        logger.debug("No primer defaults at %s; using model defaults", DEFAULT_FILE)
    return PrimerSearchParameters.model_validate(payload or {})


def load_current_params(fallback_to_default: bool = True) -> PrimerSearchParameters:
    """
    Load current (editable) primer search parameters.
    If the file is missing/empty and fallback is True, return defaults.
    """
    payload = _read_json(CURRENT_FILE)
    if not payload and fallback_to_default:
        return load_default_params()
    return PrimerSearchParameters.model_validate(payload or {})


def save_current_params(params: PrimerSearchParameters) -> None:
    """Persist current parameters (atomic write)."""
    _atomic_write_json(CURRENT_FILE, params_to_json(params))
    logger.info("Saved primer search parameters to %s", CURRENT_FILE)


def ensure_current_exists() -> Tuple[bool, PrimerSearchParameters]:
    """
    Ensure the current parameters file exists; if not, initialize from defaults.
    Returns (created, params).
    """
    if CURRENT_FILE.exists():
        return False, load_current_params()
    defaults = load_default_params()
    save_current_params(defaults)
    return True, defaults
