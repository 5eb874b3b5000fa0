"""
Admin dashboard routes (admin role only)
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.auth import require_admin
from podmayak.core.database import get_db
from podmayak.core.dependencies import get_project_service
from podmayak.database.models import User
from podmayak.schemas.admin import (
    AdminStatsResponse,
    SeedContentResponse,
    SystemConfigResponse,
    SystemConfigUpdate,
    UserFieldUpdate,
    UsersListResponse,
)
from podmayak.schemas.auth import UserResponse
from podmayak.schemas.projects import ProjectResponse, ProjectsListResponse
from podmayak.services.admin_service import admin_service
from podmayak.services.auth_service import auth_service
from podmayak.services.content_service import content_service
from podmayak.services.project_service import ProjectService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """User, generation and revenue totals"""
    return await admin_service.get_stats(db)


@router.get("/users", response_model=UsersListResponse)
async def list_users(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    users = await admin_service.list_users(db)
    return UsersListResponse(users=[UserResponse.model_validate(u) for u in users], total=len(users))


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    update: UserFieldUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Toggle a user's role or advance their plan"""
    user = await auth_service.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    user = await admin_service.cycle_user_field(db, user, update.field)
    return UserResponse.model_validate(user)


@router.get("/projects", response_model=ProjectsListResponse)
async def list_all_projects(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    project_service: ProjectService = Depends(get_project_service),
):
    """Every saved project, newest first"""
    projects = await project_service.list_all(db)
    return ProjectsListResponse(projects=[ProjectResponse.model_validate(p) for p in projects], total=len(projects))


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_any_project(
    project_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    project_service: ProjectService = Depends(get_project_service),
):
    project = await project_service.get(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    await project_service.delete(db, project)
    logger.info(f"Admin {admin.email} deleted project {project_id}")


@router.put("/system-config", response_model=SystemConfigResponse)
async def set_system_config(
    update: SystemConfigUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Set a system setting; key 'apiKey' overrides the generation API key from the environment"""
    await admin_service.set_system_setting(db, update.key, update.value, updated_by=admin.id)
    return SystemConfigResponse(key=update.key)


@router.post("/content/seed", response_model=SeedContentResponse)
async def seed_content(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Rewrite the design catalogue from the built-in data"""
    counts = await content_service.seed(db)
    return SeedContentResponse(seeded=True, counts=counts)
