"""
Unit tests for the in-process generation job registry
"""
import asyncio
from datetime import datetime, timedelta

import pytest

from podmayak.schemas.renovation import RenovationResult
from podmayak.services.jobs import GenerationJobRegistry, JobKind, JobState
from podmayak.services.progress import ProgressState, ProgressStatus


class TestGenerationJob:

    @pytest.mark.unit
    def test_succeed(self):
        job = GenerationJobRegistry().create("user-1", JobKind.RENOVATION)
        job.update_progress(ProgressState(ProgressStatus.FINISHING, 100))
        job.succeed(RenovationResult(generated_image="data:image/png;base64,AAAA"))

        response = job.to_response()
        assert response.state == "succeeded"
        assert response.status == "finishing"
        assert response.progress == 100
        assert response.result.generated_image.startswith("data:image/png")
        assert response.finished_at is not None

    @pytest.mark.unit
    def test_fail_resets_progress(self):
        job = GenerationJobRegistry().create("user-1", JobKind.EDIT)
        job.update_progress(ProgressState(ProgressStatus.EDITING, 40))
        job.fail("Edit xətası baş verdi.")

        response = job.to_response()
        assert response.state == "failed"
        assert response.status == "idle"
        assert response.progress == 0
        assert response.error == "Edit xətası baş verdi."
        assert response.result is None

    @pytest.mark.unit
    def test_progress_ignored_after_finish(self):
        job = GenerationJobRegistry().create("user-1", JobKind.EDIT)
        job.fail("boom")
        job.update_progress(ProgressState(ProgressStatus.EDITING, 50))
        assert job.progress.status == ProgressStatus.IDLE


class TestGenerationJobRegistry:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_submit_runs_job(self):
        registry = GenerationJobRegistry()
        job = registry.create("user-1", JobKind.RENOVATION, meta={"style": "Modern"})

        async def run(job):
            await asyncio.sleep(0)
            job.succeed(RenovationResult(generated_image="data:image/png;base64,AAAA"))

        registry.submit(job, run)
        await registry.wait_all()

        assert registry.get(job.id).state == JobState.SUCCEEDED
        assert registry.get(job.id).meta == {"style": "Modern"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_crashing_task_does_not_break_registry(self):
        registry = GenerationJobRegistry()
        job = registry.create("user-1", JobKind.RENOVATION)

        async def run(job):
            raise RuntimeError("unexpected")

        registry.submit(job, run)
        await registry.wait_all()
        assert registry.get(job.id) is job

    @pytest.mark.unit
    def test_prune_drops_expired_jobs(self):
        registry = GenerationJobRegistry(ttl=timedelta(minutes=5))
        old = registry.create("user-1", JobKind.EDIT)
        old.fail("boom")
        old.finished_at = datetime.utcnow() - timedelta(minutes=10)
        running = registry.create("user-1", JobKind.EDIT)

        registry.prune()

        assert registry.get(old.id) is None
        assert registry.get(running.id) is running

    @pytest.mark.unit
    def test_unknown_job(self):
        assert GenerationJobRegistry().get("missing") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_shutdown_clears(self):
        registry = GenerationJobRegistry()
        job = registry.create("user-1", JobKind.EDIT)
        await registry.shutdown()
        assert registry.get(job.id) is None
