"""
Token balance operations.

Balances change only through conditional UPDATE statements so concurrent
requests cannot drive a balance below zero.
"""
import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.config import settings
from podmayak.core.errors import InsufficientTokensError
from podmayak.database.models import User

logger = logging.getLogger(__name__)


class TokenService:
    """Service for reading and changing token balances"""

    async def get_balance(self, db: AsyncSession, user_id: str) -> Optional[int]:
        result = await db.execute(select(User.tokens).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def ensure_can_spend(self, db: AsyncSession, user_id: str, amount: Optional[int] = None):
        """Raise InsufficientTokensError unless the balance covers `amount`"""
        amount = settings.generation_cost if amount is None else amount
        balance = await self.get_balance(db, user_id)
        if balance is None or balance < amount:
            logger.info(f"User {user_id} has {balance} tokens, {amount} required")
            raise InsufficientTokensError()

    async def deduct_token(self, db: AsyncSession, user_id: str, amount: Optional[int] = None) -> bool:
        """Atomically take `amount` tokens; returns False and changes nothing when the balance is too low"""
        amount = settings.generation_cost if amount is None else amount
        result = await db.execute(
            update(User)
            .where(User.id == user_id, User.tokens >= amount)
            .values(tokens=User.tokens - amount)
            .execution_options(synchronize_session=False)
        )
        deducted = result.rowcount > 0
        if deducted:
            logger.info(f"Deducted {amount} token(s) from user {user_id}")
        else:
            logger.warning(f"Token deduction refused for user {user_id}: balance too low")
        return deducted

    async def add_tokens(self, db: AsyncSession, user_id: str, amount: int) -> Optional[int]:
        """Credit `amount` tokens and return the new balance"""
        if amount <= 0:
            raise ValueError("Token amount must be positive")
        await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(tokens=User.tokens + amount)
            .execution_options(synchronize_session=False)
        )
        balance = await self.get_balance(db, user_id)
        logger.info(f"Added {amount} tokens to user {user_id}, balance is now {balance}")
        return balance


# Global service instance
token_service = TokenService()
