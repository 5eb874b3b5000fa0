"""
Design catalogue routes
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.database import get_db
from podmayak.schemas.content import AppContentResponse, FurnitureOption
from podmayak.services.content_service import content_service, furniture_for_room

router = APIRouter()


@router.get("", response_model=AppContentResponse)
async def get_app_content(db: AsyncSession = Depends(get_db)):
    """
    Styles, rooms, colours, flooring, furniture and presets.
    The catalogue is seeded automatically the first time it is read.
    """
    return await content_service.fetch_app_content(db)


@router.get("/furniture", response_model=List[FurnitureOption])
async def get_furniture(
    room_type: Optional[str] = Query(None, description="Room type value, e.g. 'Living Room'"),
    db: AsyncSession = Depends(get_db),
):
    """Furniture offered for a room type: items tagged for that room plus the ones for every room"""
    content = await content_service.fetch_app_content(db)
    return furniture_for_room(content.furniture, room_type)
