# File: backend/app/db/schemas/run.py
# Version: v1.0.0
"""
Pydantic schemas for primer run resources.
"""
from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional

class RunBase(BaseModel):
    id: str = Field(..., description="Run identifier (UUID).")
    status: Literal["running", "completed", "cancelled", "failed"]
    created_at: datetime
    updated_at: datetime
    sequence_digest: str
    sequence_len: int
    region_begin: int
    region_end: int
    pair_count: int = 0
    message: Optional[str] = None

class RunItem(RunBase):
    """Compact list item representation."""
    pass

class RunDetail(RunBase):
    """Detailed representation; includes parameters and serialized pairs."""
    parameters: Dict[str, Any] = Field(default_factory=dict)
    pairs: List[Dict[str, Any]] = Field(default_factory=list)

class RunListResponse(BaseModel):
    total: int
    items: list[RunItem]
