"""
Pydantic schemas for the admin dashboard
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from podmayak.schemas.auth import UserResponse


class AdminStatsResponse(BaseModel):
    total_users: int
    pro_users: int  # pro and enterprise
    total_generations: int
    total_revenue: int  # monthly, from plan prices


class UserField(str, Enum):
    ROLE = "role"
    PLAN = "plan"


class UserFieldUpdate(BaseModel):
    """Cycle a user's role (user <-> admin) or plan (free -> pro -> enterprise -> free)"""

    field: UserField


class UsersListResponse(BaseModel):
    users: List[UserResponse]
    total: int


class SystemConfigUpdate(BaseModel):
    key: str = Field("apiKey", min_length=1, max_length=100)
    value: str


class SystemConfigResponse(BaseModel):
    key: str
    updated: bool = True


class SeedContentResponse(BaseModel):
    seeded: bool
    counts: dict
