# File: backend/app/main.py
# Version: v1.0.0
"""
FastAPI app entry.

- Mounts /api/* via `api_router` (health, version).
- Mounts the primer endpoints at /api/v1/primers.
- Creates missing DB tables at import (primer runs only).
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.v1.api import api_router
from backend.app.api.v1.primers.router import router as primers_router
from backend.app.core.config import settings
from backend.app.db.session import init_db

logging.basicConfig(level=settings.LOG_LEVEL.upper())

init_db()

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    version=settings.APP_VERSION,
    openapi_url="/api/openapi.json",
    docs_url="/api/docs",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Primer endpoints
app.include_router(primers_router)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


# APIs under /api
app.include_router(api_router, prefix=settings.API_PREFIX)
