"""Protocol for tenant directory observability.

Defines the interface for domain probes that capture tenant lookups by
subdomain. Lookup failures are reported here because the directory itself
returns the same "not resolved" outcome for every failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantDirectoryProbe(Protocol):
    """Domain probe for tenant directory lookups."""

    def tenant_resolved(self, tenant_id: str, subdomain: str) -> None:
        """Record that a subdomain resolved to a tenant."""
        ...

    def tenant_not_found(self, subdomain: str) -> None:
        """Record that no tenant exists for a subdomain."""
        ...

    def invalid_subdomain(self, raw_value: str) -> None:
        """Record that the lookup input was not a usable subdomain."""
        ...

    def lookup_failed(self, subdomain: str, error: Exception) -> None:
        """Record that the storage lookup raised."""
        ...

    def with_context(self, context: ObservationContext) -> TenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantDirectoryProbe:
    """Default implementation of TenantDirectoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantDirectoryProbe(logger=self._logger, context=context)

    def tenant_resolved(self, tenant_id: str, subdomain: str) -> None:
        """Record that a subdomain resolved to a tenant."""
        self._logger.debug(
            "tenant_directory_resolved",
            tenant_id=tenant_id,
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, subdomain: str) -> None:
        """Record that no tenant exists for a subdomain."""
        self._logger.info(
            "tenant_directory_not_found",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def invalid_subdomain(self, raw_value: str) -> None:
        """Record that the lookup input was not a usable subdomain."""
        self._logger.info(
            "tenant_directory_invalid_subdomain",
            raw_value=raw_value,
            **self._get_context_kwargs(),
        )

    def lookup_failed(self, subdomain: str, error: Exception) -> None:
        """Record that the storage lookup raised."""
        self._logger.error(
            "tenant_directory_lookup_failed",
            subdomain=subdomain,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
