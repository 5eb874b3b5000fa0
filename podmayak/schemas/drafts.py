"""
Pydantic schemas for the per-user draft snapshot
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from podmayak.schemas.renovation import RenovationConfig


class DraftUpdate(BaseModel):
    image: Optional[str] = None
    config: RenovationConfig


class DraftResponse(BaseModel):
    image: Optional[str] = None
    config: RenovationConfig
    updated_at: Optional[datetime] = None
    image_dropped: bool = False  # image was too large to keep

    class Config:
        from_attributes = True
