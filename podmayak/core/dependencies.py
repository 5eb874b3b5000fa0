"""
Dependencies for client handles created by the application lifespan
"""
from fastapi import Request

from podmayak.services.google_ai_service import RenovationAIService
from podmayak.services.jobs import GenerationJobRegistry
from podmayak.services.project_service import ProjectService
from podmayak.services.renovation_service import RenovationService


def get_ai_service(request: Request) -> RenovationAIService:
    return request.app.state.ai_service


def get_job_registry(request: Request) -> GenerationJobRegistry:
    return request.app.state.jobs


def get_project_service(request: Request) -> ProjectService:
    return request.app.state.project_service


def get_renovation_service(request: Request) -> RenovationService:
    return request.app.state.renovation_service
