"""Protocol for the background session sweeper."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SessionSweeperProbe(Protocol):
    """Domain probe for the periodic expired-session sweep."""

    def sweeper_started(self, interval_seconds: int) -> None:
        """Record that the sweeper loop started."""
        ...

    def sweep_completed(self, count: int) -> None:
        """Record the outcome of one sweep."""
        ...

    def sweep_failed(self, error: Exception) -> None:
        """Record that one sweep raised; the loop keeps running."""
        ...

    def sweeper_stopped(self) -> None:
        """Record that the sweeper loop stopped."""
        ...

    def with_context(self, context: ObservationContext) -> SessionSweeperProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSessionSweeperProbe:
    """Default implementation of SessionSweeperProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultSessionSweeperProbe:
        """Create a new probe with observation context bound."""
        return DefaultSessionSweeperProbe(logger=self._logger, context=context)

    def sweeper_started(self, interval_seconds: int) -> None:
        """Record that the sweeper loop started."""
        self._logger.info(
            "session_sweeper_started",
            interval_seconds=interval_seconds,
            **self._get_context_kwargs(),
        )

    def sweep_completed(self, count: int) -> None:
        """Record the outcome of one sweep."""
        self._logger.debug(
            "session_sweep_completed",
            count=count,
            **self._get_context_kwargs(),
        )

    def sweep_failed(self, error: Exception) -> None:
        """Record that one sweep raised; the loop keeps running."""
        self._logger.error(
            "session_sweep_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def sweeper_stopped(self) -> None:
        """Record that the sweeper loop stopped."""
        self._logger.info("session_sweeper_stopped", **self._get_context_kwargs())
