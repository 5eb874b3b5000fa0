"""
Authentication API routes
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.auth import get_current_user, get_optional_user
from podmayak.core.database import get_db
from podmayak.database.models import User
from podmayak.schemas.auth import AuthErrorResponse, AuthStatusResponse, TokenResponse, UserLogin, UserRegister, UserResponse
from podmayak.services.auth_service import auth_service

logger = logging.getLogger(__name__)
router = APIRouter()

AUTH_ERROR_RESPONSES = {
    400: {"model": AuthErrorResponse},
    401: {"model": AuthErrorResponse},
    409: {"model": AuthErrorResponse},
}


@router.post("/register", response_model=TokenResponse, responses=AUTH_ERROR_RESPONSES)
async def register(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user with email and password.
    New accounts start on the free plan with the free token grant.
    """
    user = await auth_service.register_user(
        db,
        email=user_data.email,
        password=user_data.password,
        display_name=user_data.display_name,
    )

    access_token = auth_service.create_access_token(data={"sub": user.id})

    return TokenResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse, responses=AUTH_ERROR_RESPONSES)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db),
):
    """
    Login with email and password.
    Returns access token on success.
    """
    user = await auth_service.authenticate_user(db, credentials.email, credentials.password)

    access_token = auth_service.create_access_token(data={"sub": user.id})
    logger.info(f"User logged in: {user.email}")

    return TokenResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    """
    Get the current authenticated user's profile, including the token balance.
    """
    return UserResponse.model_validate(current_user)


@router.get("/status", response_model=AuthStatusResponse)
async def get_auth_status(
    current_user: User = Depends(get_optional_user),
):
    """
    Check authentication status.
    Returns authenticated=true with user info if logged in,
    or authenticated=false if not.
    """
    if current_user:
        return AuthStatusResponse(
            authenticated=True,
            user=UserResponse.model_validate(current_user),
        )
    return AuthStatusResponse(authenticated=False)


@router.post("/logout")
async def logout():
    """
    Logout the current user.
    Note: Since we use JWT tokens, actual logout is handled client-side
    by removing the token. This endpoint is provided for API completeness.
    """
    return {"message": "Logged out successfully"}
