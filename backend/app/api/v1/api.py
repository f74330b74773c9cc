# File: backend/app/api/v1/api.py
# Version: v1.0.0
"""
v1 API aggregator.

Routers included under /api:
- health

The primer router carries its own absolute prefix (/api/v1/primers) and is
mounted by main.py.
"""
from __future__ import annotations

from fastapi import APIRouter

from . import health as health_router

api_router = APIRouter()
api_router.include_router(health_router.router)
