"""
FastAPI main application for PodmayakAI
"""
import logging
import re
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from podmayak.core.config import settings
from podmayak.core.database import Database
from podmayak.core.errors import PodmayakError
from podmayak.core.logging import setup_logging
from podmayak.middleware.logging_middleware import RequestLoggingMiddleware
from podmayak.routers import admin, auth, chat, content, drafts, projects, renovations, tokens
from podmayak.services.google_ai_service import RenovationAIService, mask_api_key
from podmayak.services.jobs import GenerationJobRegistry
from podmayak.services.project_service import ProjectService
from podmayak.services.renovation_service import RenovationService
from podmayak.services.storage import LOCAL_URL_PREFIX, BlobStore, LocalBlobStore, build_blob_store

logger = logging.getLogger(__name__)


def _log_environment_check():
    logger.info("=" * 60)
    logger.info("ENVIRONMENT VARIABLES CHECK")
    logger.info("=" * 60)

    if settings.google_ai_api_key:
        logger.info(f"✅ GOOGLE_AI_API_KEY is set: {mask_api_key(settings.google_ai_api_key)}")
    else:
        logger.error("❌ GOOGLE_AI_API_KEY is NOT set - generation needs an admin-provided key!")

    sanitized = re.sub(r":\/\/[^:]*:[^@]*@", "://***:***@", settings.database_url)
    logger.info(f"✅ DATABASE_URL: {sanitized}")
    logger.info(f"✅ STORAGE_BACKEND: {settings.storage_backend}")
    logger.info("=" * 60)


def create_app(
    database_url: Optional[str] = None,
    ai_service: Optional[RenovationAIService] = None,
    blob_store: Optional[BlobStore] = None,
) -> FastAPI:
    """
    Build the application. Client handles are created by the lifespan and
    stored on app.state; the arguments replace them (used by tests).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        logger.info("Starting PodmayakAI API...")
        _log_environment_check()

        database = Database(
            database_url or settings.database_url,
            echo=settings.debug,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.auto_create_tables:
            await database.create_tables()

        jobs = GenerationJobRegistry()
        ai = ai_service or RenovationAIService()
        store = blob_store or build_blob_store(settings)

        app.state.database = database
        app.state.jobs = jobs
        app.state.ai_service = ai
        app.state.blob_store = store
        project_service = ProjectService(store)
        app.state.project_service = project_service
        app.state.renovation_service = RenovationService(ai, database, jobs, project_service)
        logger.info("Application started")

        yield

        logger.info("Shutting down PodmayakAI API...")
        await jobs.shutdown()
        await database.dispose()
        logger.info("Application stopped")

    app = FastAPI(
        title=settings.app_name,
        description="AI room renovation visualisation and budget planning API",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.environment == "development" else None,
        redoc_url="/redoc" if settings.environment == "development" else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(PodmayakError)
    async def podmayak_error_handler(request: Request, exc: PodmayakError):
        """Domain errors become {code, message} with the error's status code"""
        log = logger.warning if exc.status_code < 500 else logger.error
        log(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"code": exc.code, "message": exc.message})

    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancers"""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": settings.version,
        }

    @app.get("/")
    async def root():
        """Root endpoint with API information"""
        return {
            "name": settings.app_name,
            "version": settings.version,
            "docs": "/docs" if settings.environment == "development" else None,
            "endpoints": {
                "auth": "/api/auth",
                "tokens": "/api/tokens",
                "content": "/api/content",
                "renovations": "/api/renovations",
                "projects": "/api/projects",
                "drafts": "/api/drafts",
                "chat": "/api/chat",
                "admin": "/api/admin",
            },
        }

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(tokens.router, prefix="/api/tokens", tags=["tokens"])
    app.include_router(content.router, prefix="/api/content", tags=["content"])
    app.include_router(renovations.router, prefix="/api/renovations", tags=["renovations"])
    app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
    app.include_router(drafts.router, prefix="/api/drafts", tags=["drafts"])
    app.include_router(chat.router, prefix="/api/chat", tags=["chat"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])

    # Serve locally stored project images
    if isinstance(blob_store, LocalBlobStore) or (blob_store is None and settings.storage_backend == "local"):
        upload_dir = blob_store.root if blob_store is not None else Path(settings.upload_path)
        upload_dir.mkdir(parents=True, exist_ok=True)
        app.mount(LOCAL_URL_PREFIX, StaticFiles(directory=str(upload_dir)), name="uploads")

    return app


setup_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "podmayak.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_config=None,  # Use our custom logging
        access_log=False,  # We handle this in middleware
    )
