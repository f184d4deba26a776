"""Probe for the application lifespan.

Startup reports the tenancy deployment mode; shutdown reports once the
sweeper has stopped and the pool has been drained.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_starting(self, deployment_mode: str) -> None:
        """Record that the application is starting in the given tenancy mode."""
        ...

    def session_sweeper_disabled(self) -> None:
        """Record that the background session sweep is disabled by configuration."""
        ...

    def application_stopped(self) -> None:
        """Record that shutdown completed and connections were drained."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_starting(self, deployment_mode: str) -> None:
        """Record that the application is starting in the given tenancy mode."""
        self._logger.info(
            "application_starting",
            deployment_mode=deployment_mode,
            **self._get_context_kwargs(),
        )

    def session_sweeper_disabled(self) -> None:
        """Record that the background session sweep is disabled by configuration."""
        self._logger.info(
            "session_sweeper_disabled",
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        """Record that shutdown completed and connections were drained."""
        self._logger.info(
            "application_stopped",
            **self._get_context_kwargs(),
        )
