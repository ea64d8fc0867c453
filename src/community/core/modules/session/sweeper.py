"""Periodic removal of expired sessions."""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from datetime import timedelta

import structlog

logger = structlog.get_logger(__name__)

SESSION_SWEEP_INTERVAL = timedelta(minutes=15)


class SessionSweeper:
    """Runs a cleanup callable on a fixed interval until stopped.

    A failing sweep is logged and retried on the next tick, it never takes the
    process down.
    """

    def __init__(self, cleanup: Callable[[], Awaitable[int]], interval: timedelta = SESSION_SWEEP_INTERVAL) -> None:
        self._cleanup = cleanup
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="session-sweeper")
        logger.debug("session_sweeper_started", interval_seconds=self._interval.total_seconds())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.debug("session_sweeper_stopped")

    async def run_once(self) -> int:
        """Run a single sweep. Returns the number of deleted sessions, 0 on failure."""
        try:
            deleted = await self._cleanup()
        except Exception:
            logger.exception("session_sweep_failed")
            return 0
        if deleted > 0:
            logger.info("expired_sessions_cleaned", count=deleted)
        return deleted

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval.total_seconds())
            await self.run_once()
