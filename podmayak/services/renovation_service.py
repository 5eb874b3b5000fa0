"""
Renovation and magic edit jobs: token guard, generation, charging and progress reporting
"""
import logging
from typing import Optional

from podmayak.core.database import Database
from podmayak.database.models import User
from podmayak.schemas.renovation import RenovationConfig, RenovationResult
from podmayak.services.admin_service import admin_service
from podmayak.services.google_ai_service import RenovationAIService
from podmayak.services.jobs import GenerationJob, GenerationJobRegistry, JobKind
from podmayak.services.progress import (
    EDIT_TICK_SECONDS,
    RENOVATION_TICK_SECONDS,
    ProgressStatus,
    ProgressTicker,
)
from podmayak.services.project_service import ProjectService
from podmayak.services.token_service import token_service

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = "Xəta baş verdi. Zəhmət olmasa bir daha cəhd edin."
EDIT_FAILED_MESSAGE = "Edit xətası baş verdi."


class RenovationService:
    """Starts generation jobs and runs them to completion in the background"""

    def __init__(
        self,
        ai_service: RenovationAIService,
        database: Database,
        jobs: GenerationJobRegistry,
        project_service: ProjectService,
    ):
        self.ai_service = ai_service
        self.database = database
        self.jobs = jobs
        self.project_service = project_service

    async def resolve_api_key(self) -> Optional[str]:
        async with self.database.session() as session:
            return await admin_service.get_api_key_override(session)

    async def _charge(self, user_id: str) -> bool:
        """Take one token after a successful generation"""
        async with self.database.session() as session:
            charged = await token_service.deduct_token(session, user_id)
        if not charged:
            logger.warning(f"User {user_id} ran out of tokens while a job was running; result delivered uncharged")
        return charged

    async def _ensure_tokens(self, user: User):
        async with self.database.session() as session:
            await token_service.ensure_can_spend(session, user.id)

    async def start_renovation(self, user: User, image: str, config: RenovationConfig) -> GenerationJob:
        """Check the balance and start a renovation job; raises InsufficientTokensError at zero tokens"""
        await self._ensure_tokens(user)
        image = await self.project_service.load_image(image)
        api_key = await self.resolve_api_key()

        job = self.jobs.create(
            user.id,
            JobKind.RENOVATION,
            meta={"style": config.style.value, "room_type": config.room_description(), "include_blueprint": config.include_blueprint},
        )

        async def run(job: GenerationJob):
            await self._run_renovation(job, image, config, api_key)

        self.jobs.submit(job, run)
        return job

    async def start_edit(self, user: User, image: str, mask: str, prompt: str) -> GenerationJob:
        """Check the balance and start a magic edit job"""
        await self._ensure_tokens(user)
        image = await self.project_service.load_image(image)
        api_key = await self.resolve_api_key()

        job = self.jobs.create(user.id, JobKind.EDIT, meta={"prompt": prompt[:200]})

        async def run(job: GenerationJob):
            await self._run_edit(job, image, mask, prompt, api_key)

        self.jobs.submit(job, run)
        return job

    async def _run_renovation(self, job: GenerationJob, image: str, config: RenovationConfig, api_key: Optional[str]):
        ticker = ProgressTicker(job.update_progress, RENOVATION_TICK_SECONDS, config.include_blueprint)
        ticker.start(ProgressStatus.ANALYZING, 5)
        try:
            generated = await self.ai_service.generate_renovation(image, config, api_key=api_key)
            await self._charge(job.user_id)

            analysis = None
            if config.include_blueprint:
                ticker.set(ProgressStatus.PLANNING, 85)
                analysis = await self.ai_service.analyze_renovation_plan(image, generated, config, api_key=api_key)

            await ticker.stop()
            ticker.set(ProgressStatus.FINISHING, 100)
            job.succeed(RenovationResult(generated_image=generated, analysis=analysis))
            logger.info(f"Renovation job {job.id} succeeded")
        except Exception as e:
            logger.exception(f"Renovation job {job.id} failed: {e}")
            job.fail(GENERATION_FAILED_MESSAGE)
        finally:
            await ticker.stop()

    async def _run_edit(self, job: GenerationJob, image: str, mask: str, prompt: str, api_key: Optional[str]):
        ticker = ProgressTicker(job.update_progress, EDIT_TICK_SECONDS)
        ticker.start(ProgressStatus.EDITING, 0)
        try:
            edited = await self.ai_service.edit_renovation(image, mask, prompt, api_key=api_key)
            await self._charge(job.user_id)

            await ticker.stop()
            ticker.set(ProgressStatus.FINISHING, 100)
            job.succeed(RenovationResult(generated_image=edited))
            logger.info(f"Edit job {job.id} succeeded")
        except Exception as e:
            logger.exception(f"Edit job {job.id} failed: {e}")
            job.fail(EDIT_FAILED_MESSAGE)
        finally:
            await ticker.stop()
