"""
Database module for PodmayakAI
"""
from .models import (
    Base,
    ContentColor,
    ContentFlooring,
    ContentFurniture,
    ContentPreset,
    ContentRoom,
    ContentStyle,
    Draft,
    Renovation,
    SubscriptionPlan,
    SystemSetting,
    User,
    UserRole,
)

__all__ = [
    "Base",
    "ContentColor",
    "ContentFlooring",
    "ContentFurniture",
    "ContentPreset",
    "ContentRoom",
    "ContentStyle",
    "Draft",
    "Renovation",
    "SubscriptionPlan",
    "SystemSetting",
    "User",
    "UserRole",
]
