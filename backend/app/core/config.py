# File: backend/app/core/config.py
# Version: v1.0.0
"""
Centralized application settings using Pydantic Settings.

Controls:
- App metadata and API prefix
- CORS origins
- Paths to the stored / default primer search parameters JSON
- Database URL (SQLAlchemy) for primer runs
- Log level used by the server and CLI entry points
"""
from __future__ import annotations

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- App ---
    API_PREFIX: str = "/api"
    APP_NAME: str = "PrimerPair"
    APP_VERSION: str = "1.0.0"

    # --- CORS ---
    CORS_ORIGINS: str = "*"  # comma-separated or '*' for all

    # --- Primer search parameters ---
    PRIMER_PARAMS_PATH: Path = Path("backend/app/config/primers_param.json")
    PRIMER_PARAMS_DEFAULT_PATH: Path = Path("backend/app/config/primers_param_default.json")

    # --- DB ---
    DB_URL: str = "sqlite:///backend/app/data/primerpair.db"

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "info"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def cors_origins_list(self) -> list[str]:
        raw = self.CORS_ORIGINS.strip()
        if raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]

settings = Settings()
