"""
Draft snapshot routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.auth import get_current_user
from podmayak.core.database import get_db
from podmayak.database.models import User
from podmayak.schemas.drafts import DraftResponse, DraftUpdate
from podmayak.services.draft_service import draft_service

router = APIRouter()


@router.get("", response_model=DraftResponse)
async def get_draft(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    draft = await draft_service.get(db, current_user.id)
    if not draft:
        raise HTTPException(status_code=404, detail="No draft saved")
    return DraftResponse.model_validate(draft)


@router.put("", response_model=DraftResponse)
async def save_draft(
    draft: DraftUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Replace the draft; oversized images are dropped and flagged with image_dropped"""
    return await draft_service.save(db, current_user.id, draft)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_draft(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await draft_service.delete(db, current_user.id)
