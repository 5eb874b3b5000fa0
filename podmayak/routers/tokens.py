"""
Token balance and the simulated token purchase
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.auth import get_current_user
from podmayak.core.config import settings
from podmayak.core.database import get_db
from podmayak.database.models import User
from podmayak.schemas.tokens import TokenBalanceResponse, TokenPurchaseResponse
from podmayak.services.token_service import token_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=TokenBalanceResponse)
async def get_balance(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Current token balance"""
    balance = await token_service.get_balance(db, current_user.id)
    return TokenBalanceResponse(tokens=balance or 0)


@router.post("/purchase", response_model=TokenPurchaseResponse)
async def purchase_tokens(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Simulated payment: always succeeds and credits one token pack.
    There is no payment processor behind this endpoint.
    """
    balance = await token_service.add_tokens(db, current_user.id, settings.token_pack_size)
    logger.info(f"Simulated purchase of {settings.token_pack_size} tokens by {current_user.email}")
    return TokenPurchaseResponse(
        tokens=balance or 0,
        added=settings.token_pack_size,
        message=f"Balansınıza {settings.token_pack_size} token əlavə olundu.",
    )
