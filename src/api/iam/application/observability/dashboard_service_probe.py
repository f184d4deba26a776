"""Protocol for dashboard service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DashboardServiceProbe(Protocol):
    """Domain probe for dashboard and org settings operations."""

    def dashboard_viewed(self, user_id: str, tenant_id: str) -> None:
        """Record that a dashboard summary was built."""
        ...

    def settings_updated(self, user_id: str, tenant_id: str) -> None:
        """Record that a tenant's settings document was replaced."""
        ...

    def settings_deleted(self, user_id: str, tenant_id: str) -> None:
        """Record that a tenant's settings document was removed."""
        ...

    def operation_failed(self, operation: str, error: Exception) -> None:
        """Record that a dashboard operation failed unexpectedly."""
        ...

    def with_context(self, context: ObservationContext) -> DashboardServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDashboardServiceProbe:
    """Default implementation of DashboardServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultDashboardServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultDashboardServiceProbe(logger=self._logger, context=context)

    def dashboard_viewed(self, user_id: str, tenant_id: str) -> None:
        """Record that a dashboard summary was built."""
        self._logger.debug(
            "dashboard_viewed",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def settings_updated(self, user_id: str, tenant_id: str) -> None:
        """Record that a tenant's settings document was replaced."""
        self._logger.info(
            "org_settings_updated",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def settings_deleted(self, user_id: str, tenant_id: str) -> None:
        """Record that a tenant's settings document was removed."""
        self._logger.info(
            "org_settings_deleted",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, error: Exception) -> None:
        """Record that a dashboard operation failed unexpectedly."""
        self._logger.error(
            "dashboard_operation_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
