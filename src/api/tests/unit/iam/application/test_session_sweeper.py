"""Unit tests for SessionSweeper."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.application.services import SessionSweeper


@pytest.fixture
def probe():
    return MagicMock()


class TestSessionSweeper:
    """Tests for the background sweep loop."""

    @pytest.mark.asyncio
    async def test_run_once_reports_count(self, probe):
        """A single sweep returns and records the removed count."""
        sweeper = SessionSweeper(sweep=AsyncMock(return_value=3), interval_seconds=60, probe=probe)

        assert await sweeper.run_once() == 3
        probe.sweep_completed.assert_called_once_with(3)

    @pytest.mark.asyncio
    async def test_start_sweeps_immediately_and_stop_cancels(self, probe):
        """Starting runs a sweep; stopping cancels the loop."""
        swept = asyncio.Event()

        async def sweep():
            swept.set()
            return 0

        sweeper = SessionSweeper(sweep=sweep, interval_seconds=3600, probe=probe)

        await sweeper.start()
        await asyncio.wait_for(swept.wait(), timeout=1)
        assert sweeper.running

        await sweeper.stop()
        assert not sweeper.running
        probe.sweeper_started.assert_called_once_with(3600)
        probe.sweeper_stopped.assert_called_once()

    @pytest.mark.asyncio
    async def test_failures_do_not_stop_the_loop(self, probe):
        """A failing sweep is recorded and retried on the next tick."""
        calls = 0
        second_call = asyncio.Event()

        async def sweep():
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RuntimeError("database unavailable")
            second_call.set()
            return 1

        sweeper = SessionSweeper(sweep=sweep, interval_seconds=0, probe=probe)

        await sweeper.start()
        await asyncio.wait_for(second_call.wait(), timeout=1)
        await sweeper.stop()

        probe.sweep_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_stop_without_start(self, probe):
        """Stopping an idle sweeper is a no-op."""
        sweeper = SessionSweeper(sweep=AsyncMock(return_value=0), interval_seconds=60, probe=probe)

        await sweeper.stop()

        probe.sweeper_stopped.assert_not_called()
