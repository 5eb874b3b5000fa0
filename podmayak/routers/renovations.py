"""
Renovation generation, magic edit, analysis and job status routes
"""
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from podmayak.core.auth import get_current_user
from podmayak.core.dependencies import get_ai_service, get_job_registry, get_project_service, get_renovation_service
from podmayak.database.models import User
from podmayak.schemas.renovation import (
    AnalyzeRenovationRequest,
    AspectRatioRequest,
    AspectRatioResponse,
    GenerateRenovationRequest,
    GenerationJobResponse,
    MagicEditRequest,
    RenovationAnalysis,
)
from podmayak.services import images
from podmayak.services.google_ai_service import RenovationAIService
from podmayak.services.jobs import GenerationJobRegistry
from podmayak.services.project_service import ProjectService
from podmayak.services.renovation_service import RenovationService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/generate", response_model=GenerationJobResponse, status_code=status.HTTP_202_ACCEPTED)
async def generate_renovation(
    request: GenerateRenovationRequest,
    current_user: User = Depends(get_current_user),
    renovation_service: RenovationService = Depends(get_renovation_service),
):
    """
    Start renovating a room photo.

    Responds 402 (payment_required) when the token balance is zero. Otherwise
    returns a job to poll at /renovations/jobs/{id}; one token is charged once
    the image is generated.
    """
    job = await renovation_service.start_renovation(current_user, request.image, request.config)
    return job.to_response()


@router.post("/edit", response_model=GenerationJobResponse, status_code=status.HTTP_202_ACCEPTED)
async def magic_edit(
    request: MagicEditRequest,
    current_user: User = Depends(get_current_user),
    renovation_service: RenovationService = Depends(get_renovation_service),
):
    """
    Regenerate the masked region of a generated image.
    White (painted) mask pixels are editable; everything else is kept.
    """
    job = await renovation_service.start_edit(current_user, request.image, request.mask, request.prompt)
    return job.to_response()


@router.get("/jobs/{job_id}", response_model=GenerationJobResponse)
async def get_job(
    job_id: str,
    current_user: User = Depends(get_current_user),
    jobs: GenerationJobRegistry = Depends(get_job_registry),
):
    """Status, progress and, once finished, the result or error of a generation job"""
    job = jobs.get(job_id)
    if not job or job.user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Job not found")
    return job.to_response()


@router.post("/analyze", response_model=RenovationAnalysis)
async def analyze_renovation(
    request: AnalyzeRenovationRequest,
    current_user: User = Depends(get_current_user),
    ai_service: RenovationAIService = Depends(get_ai_service),
    renovation_service: RenovationService = Depends(get_renovation_service),
    project_service: ProjectService = Depends(get_project_service),
):
    """
    Budget and materials plan for a before/after pair.
    Either image may be a project URL returned by /projects.
    Falls back to a generic plan (is_fallback=true) when the models fail.
    """
    original_image = await project_service.load_image(request.original_image)
    generated_image = await project_service.load_image(request.generated_image)
    api_key = await renovation_service.resolve_api_key()
    return await ai_service.analyze_renovation_plan(original_image, generated_image, request.config, api_key=api_key)


@router.post("/aspect-ratio", response_model=AspectRatioResponse)
async def get_aspect_ratio(
    request: AspectRatioRequest,
    current_user: User = Depends(get_current_user),
):
    """Closest supported output aspect ratio for an image (4:3 when it cannot be decoded)"""
    size = await asyncio.to_thread(images.image_size, request.image)
    if size is None:
        return AspectRatioResponse(aspect_ratio=images.DEFAULT_ASPECT_RATIO)

    width, height = size
    return AspectRatioResponse(aspect_ratio=images.closest_aspect_ratio(width, height), width=width, height=height)
