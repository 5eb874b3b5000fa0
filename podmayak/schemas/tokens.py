"""
Pydantic schemas for the token balance
"""
from pydantic import BaseModel


class TokenBalanceResponse(BaseModel):
    tokens: int


class TokenPurchaseResponse(BaseModel):
    """Result of the simulated payment flow"""

    tokens: int
    added: int
    message: str
