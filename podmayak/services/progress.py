"""
Simulated progress for long-running generation jobs.

The backend gives no progress signal, so progress is a pure state machine
(`advance`) driven by a ticker on a fixed interval. Real milestones (image
received, analysis started, done, failed) override the simulated value.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)

RENOVATION_TICK_SECONDS = 0.2
EDIT_TICK_SECONDS = 0.1


class ProgressStatus(str, Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    GENERATING = "generating"
    PLANNING = "planning"
    FINISHING = "finishing"
    EDITING = "editing"


@dataclass(frozen=True)
class ProgressState:
    status: ProgressStatus = ProgressStatus.IDLE
    progress: float = 0.0


IDLE = ProgressState()


def advance(state: ProgressState, include_blueprint: bool = False) -> ProgressState:
    """One simulated tick. Values stay below the next real milestone."""
    status, progress = state.status, state.progress

    if status == ProgressStatus.ANALYZING:
        if progress < 30:
            return ProgressState(status, progress + 4)
        return ProgressState(ProgressStatus.GENERATING, 30)

    if status == ProgressStatus.GENERATING:
        if progress < 80:
            return ProgressState(status, progress + 1.5)
        if include_blueprint:
            return ProgressState(ProgressStatus.PLANNING, 80)
        return ProgressState(ProgressStatus.FINISHING, 95)

    if status == ProgressStatus.PLANNING:
        if progress < 95:
            return ProgressState(status, progress + 0.5)
        return state

    if status == ProgressStatus.EDITING:
        if progress < 90:
            return ProgressState(status, progress + 2)
        return state

    return state


class ProgressTicker:
    """
    Drives `advance` on an interval and publishes every state through `on_change`.

    `stop()` is idempotent; callers stop the ticker in a `finally` block so it
    never outlives the job it reports on.
    """

    def __init__(
        self,
        on_change: Callable[[ProgressState], None],
        interval: float = RENOVATION_TICK_SECONDS,
        include_blueprint: bool = False,
    ):
        self.on_change = on_change
        self.interval = interval
        self.include_blueprint = include_blueprint
        self.state = IDLE
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def set(self, status: ProgressStatus, progress: float):
        """Jump to a real milestone"""
        self.state = ProgressState(status, progress)
        self.on_change(self.state)

    def start(self, status: ProgressStatus, progress: float):
        self.set(status, progress)
        if not self.running:
            self._task = asyncio.create_task(self._run())

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            next_state = advance(self.state, self.include_blueprint)
            if next_state != self.state:
                self.state = next_state
                self.on_change(next_state)

    async def stop(self):
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
