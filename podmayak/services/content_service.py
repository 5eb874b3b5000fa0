"""
Design catalogue stored in the content tables, seeded on first read
"""
import logging
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.config.catalogue import (
    ALL_ROOMS,
    INITIAL_COLORS,
    INITIAL_FLOORING,
    INITIAL_FURNITURE,
    INITIAL_PRESETS,
    INITIAL_ROOMS,
    INITIAL_STYLES,
)
from podmayak.database.models import (
    ContentColor,
    ContentFlooring,
    ContentFurniture,
    ContentPreset,
    ContentRoom,
    ContentStyle,
)
from podmayak.schemas.content import (
    AppContentResponse,
    ColorOption,
    FlooringOption,
    FurnitureOption,
    PresetOption,
    RoomOption,
    StyleOption,
)

logger = logging.getLogger(__name__)

# (response key, table, seed rows, option schema)
CATALOGUE = [
    ("styles", ContentStyle, INITIAL_STYLES, StyleOption),
    ("rooms", ContentRoom, INITIAL_ROOMS, RoomOption),
    ("flooring", ContentFlooring, INITIAL_FLOORING, FlooringOption),
    ("colors", ContentColor, INITIAL_COLORS, ColorOption),
    ("furniture", ContentFurniture, INITIAL_FURNITURE, FurnitureOption),
    ("presets", ContentPreset, INITIAL_PRESETS, PresetOption),
]


def initial_content() -> AppContentResponse:
    """The built-in catalogue, independent of the database"""
    return AppContentResponse(
        **{key: [schema.model_validate(row) for row in rows] for key, _, rows, schema in CATALOGUE}
    )


def furniture_for_room(furniture: List[FurnitureOption], room_type: Optional[str]) -> List[FurnitureOption]:
    """Items tagged for `room_type` or for every room; no room type returns everything"""
    if not room_type:
        return furniture
    return [item for item in furniture if ALL_ROOMS in item.room_types or room_type in item.room_types]


class ContentService:
    """Service for reading and seeding the design catalogue"""

    async def is_empty(self, db: AsyncSession) -> bool:
        result = await db.execute(select(func.count()).select_from(ContentStyle))
        return result.scalar_one() == 0

    async def seed(self, db: AsyncSession) -> Dict[str, int]:
        """Write the initial catalogue, overwriting rows with the same id"""
        counts = {}
        for key, model, rows, _ in CATALOGUE:
            for position, row in enumerate(rows):
                await db.merge(model(**row, sort_order=position))
            counts[key] = len(rows)
        await db.commit()
        logger.info(f"Seeded content catalogue: {counts}")
        return counts

    async def fetch_app_content(self, db: AsyncSession) -> AppContentResponse:
        """
        Full catalogue for the renovator UI.

        An empty store is seeded first. If the database cannot be read the
        built-in catalogue is returned so the UI keeps working.
        """
        try:
            if await self.is_empty(db):
                logger.info("Content store is empty, auto-seeding initial content")
                await self.seed(db)
                return initial_content()

            content = {}
            for key, model, _, schema in CATALOGUE:
                result = await db.execute(select(model).order_by(model.sort_order))
                content[key] = [schema.model_validate(row) for row in result.scalars().all()]
            return AppContentResponse(**content)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching app content, serving built-in catalogue: {e}")
            await db.rollback()
            return initial_content()


# Global service instance
content_service = ContentService()
