"""
Pydantic schemas for authentication
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from podmayak.database.models import SubscriptionPlan, UserRole


# Request schemas
class UserRegister(BaseModel):
    """Schema for user registration"""

    email: EmailStr
    # Length policy is enforced by the auth service so it can answer with auth/weak-password
    password: str = Field(..., max_length=100)
    display_name: Optional[str] = Field(None, max_length=200)


class UserLogin(BaseModel):
    """Schema for user login"""

    email: EmailStr
    password: str


# Response schemas
class UserResponse(BaseModel):
    """Schema for user response"""

    id: str
    email: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    role: UserRole
    plan: SubscriptionPlan
    tokens: int
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Schema for token response"""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class AuthStatusResponse(BaseModel):
    """Schema for checking auth status"""

    authenticated: bool
    user: Optional[UserResponse] = None


class AuthErrorResponse(BaseModel):
    """Body returned for sign-up / sign-in failures"""

    code: str
    message: str
