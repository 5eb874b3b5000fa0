"""
Saved project history routes
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.auth import get_current_user
from podmayak.core.database import get_db
from podmayak.core.dependencies import get_project_service
from podmayak.database.models import Renovation, User, UserRole
from podmayak.schemas.projects import ProjectCreate, ProjectResponse, ProjectsListResponse
from podmayak.services.project_service import ProjectService

logger = logging.getLogger(__name__)
router = APIRouter()


async def _get_owned_project(db: AsyncSession, project_service: ProjectService, project_id: str, user: User) -> Renovation:
    project = await project_service.get(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    if project.user_id != user.id and user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Access denied")
    return project


@router.get("", response_model=ProjectsListResponse)
async def list_projects(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    project_service: ProjectService = Depends(get_project_service),
):
    """The current user's saved projects, newest first"""
    projects = await project_service.list_for_user(db, current_user.id)
    return ProjectsListResponse(
        projects=[ProjectResponse.model_validate(p) for p in projects],
        total=len(projects),
    )


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    project_service: ProjectService = Depends(get_project_service),
):
    """
    Save a before/after pair with its config and optional analysis.
    Images may be data URLs or URLs of previously saved projects.
    """
    project = await project_service.save(
        db,
        current_user,
        original_image=project_data.original_image,
        generated_image=project_data.generated_image,
        config=project_data.config,
        analysis=project_data.analysis,
    )
    return ProjectResponse.model_validate(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    project_service: ProjectService = Depends(get_project_service),
):
    """Get a saved project"""
    project = await _get_owned_project(db, project_service, project_id, current_user)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    project_service: ProjectService = Depends(get_project_service),
):
    """Delete a project and, best effort, its stored images"""
    project = await _get_owned_project(db, project_service, project_id, current_user)
    await project_service.delete(db, project)
