"""Background sweeper for expired sessions.

Runs as a background task within the FastAPI application. Expired
sessions are also reaped lazily on validation; the sweeper keeps rows of
sessions that are never presented again from accumulating.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from iam.application.observability import (
    DefaultSessionSweeperProbe,
    SessionSweeperProbe,
)


class SessionSweeper:
    """Periodically runs the global expired-session sweep.

    The sweep callable is expected to open its own database session, so
    the sweeper never shares a session with request handling.
    """

    def __init__(
        self,
        sweep: Callable[[], Awaitable[int]],
        interval_seconds: int,
        probe: SessionSweeperProbe | None = None,
    ) -> None:
        """Initialize the sweeper.

        Args:
            sweep: Coroutine function performing one sweep, returning the count
            interval_seconds: Seconds between sweeps
            probe: Optional domain probe for observability
        """
        self._sweep = sweep
        self._interval = interval_seconds
        self._probe = probe or DefaultSessionSweeperProbe()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the sweep loop as a background task."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        self._probe.sweeper_started(self._interval)

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self._probe.sweeper_stopped()

    async def run_once(self) -> int:
        """Run a single sweep, recording its outcome."""
        count = await self._sweep()
        self._probe.sweep_completed(count)
        return count

    async def _run(self) -> None:
        while True:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                # Keep sweeping on the next tick
                self._probe.sweep_failed(e)
            await asyncio.sleep(self._interval)
