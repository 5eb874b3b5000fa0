"""
Saved renovation projects: image upload to the blob store plus the metadata record
"""
import logging
import re
import time
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.errors import BlobNotFoundError, ImageDecodeError, StorageError
from podmayak.database.models import Renovation, User
from podmayak.schemas.renovation import RenovationAnalysis, RenovationConfig
from podmayak.services import images
from podmayak.services.storage import BlobStore

logger = logging.getLogger(__name__)


def room_prefix(config: RenovationConfig) -> str:
    """Room type with whitespace removed, e.g. 'Living Room' -> 'LivingRoom'"""
    return re.sub(r"\s+", "", config.room_type.value)


class ProjectService:
    """Service for saving, listing and deleting projects"""

    def __init__(self, blob_store: BlobStore):
        self.blob_store = blob_store

    async def _store_image(self, source: str, filename: str) -> Tuple[str, Optional[str]]:
        """
        Persist one image and return (view_url, blob_id).

        Data URLs are uploaded. URLs produced by this store are copied under
        the new name so each project owns its blobs. Any other URL is kept
        as a reference without a blob.
        """
        if images.is_data_url(source):
            encoded = images.split_data_url(source)
            stored = await self.blob_store.put(encoded.to_bytes(), filename, content_type=encoded.mime_type)
            return stored.url, stored.id

        existing_id = self.blob_store.id_for_url(source)
        if existing_id:
            data = await self.blob_store.read(existing_id)
            stored = await self.blob_store.put(data, filename)
            return stored.url, stored.id

        if images.is_remote_url(source):
            return source, None

        # Bare base64 payload
        encoded = images.split_data_url(source)
        stored = await self.blob_store.put(encoded.to_bytes(), filename, content_type=encoded.mime_type)
        return stored.url, stored.id

    async def load_image(self, source: str) -> str:
        """
        Image input as a data URL. Project URLs handed out by this store are
        read back from it, so saved projects can be edited or analysed again.
        """
        if images.is_data_url(source):
            return source

        blob_id = self.blob_store.id_for_url(source)
        if blob_id:
            data = await self.blob_store.read(blob_id)
            return images.encode_bytes(data, images.sniff_mime_type(data)).data_url

        if images.is_remote_url(source):
            raise ImageDecodeError(f"Image URL is not served by this API: {source[:100]}")

        # Bare base64 payload
        return source

    async def save(
        self,
        db: AsyncSession,
        user: User,
        original_image: str,
        generated_image: str,
        config: RenovationConfig,
        analysis: Optional[RenovationAnalysis] = None,
    ) -> Renovation:
        """Upload both images and write the project record"""
        timestamp = int(time.time() * 1000)
        prefix = room_prefix(config)

        stored_ids: List[str] = []
        try:
            original_url, original_id = await self._store_image(original_image, f"{prefix}_original_{timestamp}.png")
            if original_id:
                stored_ids.append(original_id)
            generated_url, generated_id = await self._store_image(generated_image, f"{prefix}_generated_{timestamp}.png")
            if generated_id:
                stored_ids.append(generated_id)

            project = Renovation(
                user_id=user.id,
                user_email=user.email,
                original_image=original_url,
                generated_image=generated_url,
                original_image_id=original_id,
                generated_image_id=generated_id,
                config=config.model_dump(mode="json"),
                analysis=analysis.model_dump(mode="json") if analysis else None,
                timestamp=timestamp,
            )
            db.add(project)
            await db.commit()
            await db.refresh(project)
        except Exception:
            logger.error(f"Saving project for user {user.id} failed, removing {len(stored_ids)} uploaded image(s)")
            for blob_id in stored_ids:
                await self._delete_blob(blob_id, "uploaded")
            raise

        logger.info(f"Saved project {project.id} for user {user.id}")
        return project

    async def get(self, db: AsyncSession, project_id: str) -> Optional[Renovation]:
        result = await db.execute(select(Renovation).where(Renovation.id == project_id))
        return result.scalar_one_or_none()

    async def list_for_user(self, db: AsyncSession, user_id: str) -> List[Renovation]:
        """A user's projects, newest first"""
        result = await db.execute(
            select(Renovation).where(Renovation.user_id == user_id).order_by(Renovation.timestamp.desc())
        )
        return list(result.scalars().all())

    async def list_all(self, db: AsyncSession) -> List[Renovation]:
        result = await db.execute(select(Renovation).order_by(Renovation.timestamp.desc()))
        return list(result.scalars().all())

    async def _delete_blob(self, blob_id: Optional[str], label: str):
        if not blob_id:
            return
        try:
            await self.blob_store.delete(blob_id)
        except (BlobNotFoundError, StorageError) as e:
            logger.warning(f"Could not delete {label} image from storage: {e}")

    async def delete(self, db: AsyncSession, project: Renovation):
        """Best-effort blob deletion, then the record itself"""
        await self._delete_blob(project.original_image_id, "original")
        await self._delete_blob(project.generated_image_id, "generated")

        await db.delete(project)
        await db.commit()
        logger.info(f"Deleted project {project.id}")
