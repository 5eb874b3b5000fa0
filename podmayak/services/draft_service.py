"""
Per-user draft snapshot of the renovator state
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.config import settings
from podmayak.database.models import Draft
from podmayak.schemas.drafts import DraftResponse, DraftUpdate

logger = logging.getLogger(__name__)


class DraftService:
    """
    Best-effort snapshot of {image, config}. An image longer than
    `draft_max_image_chars` is dropped rather than truncated, so a stored
    draft image is always decodable.
    """

    async def get(self, db: AsyncSession, user_id: str) -> Optional[Draft]:
        return await db.get(Draft, user_id)

    async def save(self, db: AsyncSession, user_id: str, update: DraftUpdate) -> DraftResponse:
        image = update.image
        image_dropped = False
        if image and len(image) > settings.draft_max_image_chars:
            logger.info(f"Draft image for user {user_id} is {len(image)} chars, storing config only")
            image = None
            image_dropped = True

        draft = await db.merge(Draft(user_id=user_id, image=image, config=update.config.model_dump(mode="json")))
        await db.commit()
        await db.refresh(draft)

        return DraftResponse(image=draft.image, config=draft.config, updated_at=draft.updated_at, image_dropped=image_dropped)

    async def delete(self, db: AsyncSession, user_id: str) -> bool:
        draft = await db.get(Draft, user_id)
        if not draft:
            return False
        await db.delete(draft)
        await db.commit()
        return True


# Global service instance
draft_service = DraftService()
