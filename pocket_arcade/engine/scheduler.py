from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

from .data_models import Outcome, RenderSnapshot
from .session import RunnerSession

FrameHook = Callable[[RenderSnapshot], None]


class RunnerScheduler:
    """
    Real-time driver for a RunnerSession.

    Runs the frame loop, both spawners and the one-second clock as asyncio
    tasks on one event loop. Every task is cancelled as soon as the session
    ends, and each spawn call also checks the session itself, so a firing
    that slips in after the end is a no-op.
    """

    def __init__(
        self,
        session: RunnerSession,
        frame_ms: Optional[float] = None,
        on_frame: Optional[FrameHook] = None,
        verbose: bool = False,
    ) -> None:
        self.session = session
        self.frame_ms = session.config.frame_ms if frame_ms is None else frame_ms
        self.on_frame = on_frame
        self.verbose = verbose
        self._tasks: List[asyncio.Task] = []
        self._finished: Optional[asyncio.Event] = None

    @property
    def tasks(self) -> List[asyncio.Task]:
        return list(self._tasks)

    async def run(self) -> Optional[Outcome]:
        """Starts the session and returns its outcome once it ends or the scheduler is stopped."""
        cfg = self.session.config
        self._finished = asyncio.Event()
        self.session.add_end_listener(lambda _outcome: self._finished.set())
        self.session.start()
        self.session.spawn_obstacle()
        self.session.spawn_power_up()

        self._tasks = [
            asyncio.create_task(self._frame_loop(), name="runner-frames"),
            asyncio.create_task(
                self._repeat(self.session.spawn_obstacle, cfg.obstacle_frequency_ms), name="runner-obstacles"
            ),
            asyncio.create_task(
                self._repeat(self.session.spawn_power_up, cfg.power_up_frequency_ms), name="runner-power-ups"
            ),
            asyncio.create_task(
                self._repeat(self.session.tick_clock, cfg.clock_interval_ms), name="runner-clock"
            ),
        ]
        self._log("Frame loop, spawners and clock started.")

        waiter = asyncio.create_task(self._finished.wait())
        try:
            done, _ = await asyncio.wait([waiter, *self._tasks], return_when=asyncio.FIRST_COMPLETED)
            for task in done:
                if task is not waiter and not task.cancelled() and task.exception() is not None:
                    raise task.exception()
        finally:
            waiter.cancel()
            await self._cancel_tasks()
        return self.session.outcome

    def stop(self) -> None:
        """External shutdown; ``run()`` returns without an outcome if the session is still running."""
        if self._finished is not None:
            self._finished.set()

    async def _frame_loop(self) -> None:
        while self.session.is_running:
            snapshot = self.session.tick()
            if self.on_frame:
                self.on_frame(snapshot)
            await asyncio.sleep(self.frame_ms / 1000.0)

    async def _repeat(self, action: Callable[[], object], interval_ms: float) -> None:
        while self.session.is_running:
            await asyncio.sleep(interval_ms / 1000.0)
            action()

    async def _cancel_tasks(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._log("All session tasks cancelled.")

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"[Scheduler] {message}")
