"""
Pydantic schemas for saved renovation projects
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from podmayak.schemas.renovation import RenovationAnalysis, RenovationConfig


# Request schemas
class ProjectCreate(BaseModel):
    """Schema for saving a project; images may be data URLs or already stored URLs"""

    original_image: str = Field(..., min_length=1)
    generated_image: str = Field(..., min_length=1)
    config: RenovationConfig
    analysis: Optional[RenovationAnalysis] = None


# Response schemas
class ProjectResponse(BaseModel):
    """Schema for a saved project"""

    id: str
    user_id: str
    user_email: Optional[str] = None
    original_image: str
    generated_image: str
    original_image_id: Optional[str] = None
    generated_image_id: Optional[str] = None
    config: RenovationConfig
    analysis: Optional[RenovationAnalysis] = None
    timestamp: int  # ms since epoch
    created_at: datetime

    class Config:
        from_attributes = True


class ProjectsListResponse(BaseModel):
    """Schema for list of projects"""

    projects: List[ProjectResponse]
    total: int
