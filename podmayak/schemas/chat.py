"""
Pydantic schemas for the design assistant chat
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"


class ChatMessage(BaseModel):
    role: ChatRole
    text: str


class ChatRequest(BaseModel):
    """A new user message plus the conversation so far"""

    message: str = Field(..., min_length=1, max_length=4000)
    history: List[ChatMessage] = Field(default_factory=list)
