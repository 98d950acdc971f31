"""
Update records produced by newsletter message/update fetches.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class ReactionRecord(BaseModel):
    count: int = Field(default=0, ge=0)
    code: Optional[str] = None


class UpdateRecord(BaseModel):
    server_id: Optional[str] = None
    views: int = Field(default=0, ge=0)
    reactions: list[ReactionRecord] = []
    message: Optional[Any] = None
    error: Optional[str] = None  # only set under DecryptFailurePolicy.PARTIAL
