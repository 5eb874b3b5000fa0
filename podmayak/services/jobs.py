"""
In-process registry of generation jobs.

Generation and magic edit take tens of seconds, so the API starts them as
asyncio tasks and lets the client poll `/api/renovations/jobs/{id}`. Jobs
live in memory for one process; finished jobs are pruned after a TTL.
Jobs cannot be cancelled by the client.
"""
import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Set

import structlog

from podmayak.schemas.renovation import GenerationJobResponse, RenovationResult
from podmayak.services.progress import IDLE, ProgressState

logger = logging.getLogger(__name__)

FINISHED_JOB_TTL = timedelta(hours=1)


class JobKind(str, Enum):
    RENOVATION = "renovation"
    EDIT = "edit"


class JobState(str, Enum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class GenerationJob:
    user_id: str
    kind: JobKind
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: JobState = JobState.RUNNING
    progress: ProgressState = IDLE
    message: str = ""
    result: Optional[RenovationResult] = None
    error: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    finished_at: Optional[datetime] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def finished(self) -> bool:
        return self.state != JobState.RUNNING

    def update_progress(self, state: ProgressState):
        if not self.finished:
            self.progress = state

    def succeed(self, result: RenovationResult, message: str = ""):
        self.state = JobState.SUCCEEDED
        self.result = result
        self.message = message
        self.finished_at = datetime.utcnow()

    def fail(self, error: str):
        self.state = JobState.FAILED
        self.error = error
        self.result = None
        self.progress = IDLE
        self.finished_at = datetime.utcnow()

    def to_response(self) -> GenerationJobResponse:
        return GenerationJobResponse(
            id=self.id,
            kind=self.kind.value,
            state=self.state.value,
            status=self.progress.status.value,
            progress=self.progress.progress,
            message=self.message,
            result=self.result,
            error=self.error,
            created_at=self.created_at,
            finished_at=self.finished_at,
            meta=self.meta,
        )


class GenerationJobRegistry:
    """Keeps job records and the asyncio tasks running them"""

    def __init__(self, ttl: timedelta = FINISHED_JOB_TTL):
        self.ttl = ttl
        self._jobs: Dict[str, GenerationJob] = {}
        self._tasks: Set[asyncio.Task] = set()

    def create(self, user_id: str, kind: JobKind, meta: Optional[Dict[str, Any]] = None) -> GenerationJob:
        self.prune()
        job = GenerationJob(user_id=user_id, kind=kind, meta=meta or {})
        self._jobs[job.id] = job
        logger.info(f"Created {kind.value} job {job.id} for user {user_id}")
        return job

    def get(self, job_id: str) -> Optional[GenerationJob]:
        return self._jobs.get(job_id)

    def submit(self, job: GenerationJob, run: Callable[[GenerationJob], Awaitable[None]]) -> asyncio.Task:
        """
        Run `run(job)` in the background; the task is held until it completes.

        The task inherits the caller's log context (request_id) and binds
        job_id and job_kind on top, so every line the job logs is traceable.
        """

        async def run_with_context():
            structlog.contextvars.bind_contextvars(job_id=job.id, job_kind=job.kind.value)
            await run(job)

        task = asyncio.create_task(run_with_context(), name=f"job-{job.id}")
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Job task {task.get_name()} crashed: {task.exception()}")

    def prune(self):
        cutoff = datetime.utcnow() - self.ttl
        expired = [job_id for job_id, job in self._jobs.items() if job.finished_at and job.finished_at < cutoff]
        for job_id in expired:
            del self._jobs[job_id]

    async def wait_all(self):
        """Wait for every running job; used in tests and on shutdown"""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self):
        if self._tasks:
            logger.info(f"Waiting for {len(self._tasks)} generation job(s) to finish")
        await self.wait_all()
        self._jobs.clear()
