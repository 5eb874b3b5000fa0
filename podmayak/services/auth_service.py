"""
Authentication service for user management and JWT tokens
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.config import settings
from podmayak.core.errors import AuthError, AuthErrorCode
from podmayak.database.models import SubscriptionPlan, User, UserRole

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations"""

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt"""
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token"""
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

    def decode_token(self, token: str) -> Optional[dict]:
        """Decode and validate a JWT token"""
        try:
            return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        except JWTError as e:
            logger.warning(f"JWT decode error: {e}")
            return None

    async def get_user_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Get a user by email"""
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def get_user_by_id(self, db: AsyncSession, user_id: str) -> Optional[User]:
        """Get a user by ID"""
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def create_user(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        display_name: Optional[str] = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create a new user on the free plan with the starting token grant"""
        user = User(
            email=email.lower(),
            hashed_password=self.hash_password(password),
            display_name=display_name or email.split("@")[0],
            role=role,
            plan=SubscriptionPlan.FREE,
            tokens=settings.free_tokens,
            last_login=datetime.utcnow(),
        )

        db.add(user)
        await db.commit()
        await db.refresh(user)

        logger.info(f"Created new user: {user.email} ({settings.free_tokens} free tokens)")
        return user

    async def register_user(
        self, db: AsyncSession, email: str, password: str, display_name: Optional[str] = None
    ) -> User:
        """Sign up; raises AuthError with auth/weak-password or auth/email-already-in-use"""
        if len(password) < settings.min_password_length:
            raise AuthError(AuthErrorCode.WEAK_PASSWORD, is_login=False)

        if await self.get_user_by_email(db, email):
            raise AuthError(AuthErrorCode.EMAIL_ALREADY_IN_USE, is_login=False)

        return await self.create_user(db, email=email, password=password, display_name=display_name)

    async def authenticate_user(self, db: AsyncSession, email: str, password: str) -> User:
        """Sign in; raises AuthError with auth/invalid-credential on any mismatch"""
        user = await self.get_user_by_email(db, email)
        if not user or not user.hashed_password or not user.is_active:
            raise AuthError(AuthErrorCode.INVALID_CREDENTIAL)
        if not self.verify_password(password, user.hashed_password):
            raise AuthError(AuthErrorCode.INVALID_CREDENTIAL)

        # Update last_login timestamp
        user.last_login = datetime.utcnow()
        await db.commit()
        await db.refresh(user)

        return user


# Global service instance
auth_service = AuthService()
