# File: backend/tests/conftest.py
# Version: v0.2.0
"""
Test bootstrap:
- ensure project root is on sys.path so 'backend.*' imports work
- point the SQLite DB and the stored primer parameters at a throwaway
  directory before any app module reads its settings

This avoids requiring editable installs or extra plugins. It keeps tests hermetic
to the repo layout (works in CI and locally).
"""
import os
import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]  # repo root (../.. from this file)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

_TMP = Path(tempfile.mkdtemp(prefix="primerpair-tests-"))
os.environ.setdefault("DB_URL", f"sqlite:///{_TMP / 'test.db'}")
os.environ.setdefault("PRIMER_PARAMS_PATH", str(_TMP / "primers_param.json"))
