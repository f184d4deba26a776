"""Protocol for tenant resolver observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantResolverProbe(Protocol):
    """Domain probe for request-to-tenant resolution."""

    def host_without_tenant(self, host: str | None) -> None:
        """Record that the Host header carried no tenant subdomain."""
        ...

    def candidate_unresolved(self, subdomain: str) -> None:
        """Record that a subdomain candidate matched no tenant."""
        ...

    def forwarded_candidate_missing(self) -> None:
        """Record that the edge did not forward a tenant candidate."""
        ...

    def with_context(self, context: ObservationContext) -> TenantResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantResolverProbe:
    """Default implementation of TenantResolverProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantResolverProbe(logger=self._logger, context=context)

    def host_without_tenant(self, host: str | None) -> None:
        """Record that the Host header carried no tenant subdomain."""
        self._logger.debug(
            "tenant_resolver_no_subdomain",
            host=host,
            **self._get_context_kwargs(),
        )

    def candidate_unresolved(self, subdomain: str) -> None:
        """Record that a subdomain candidate matched no tenant."""
        self._logger.info(
            "tenant_resolver_unresolved",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def forwarded_candidate_missing(self) -> None:
        """Record that the edge did not forward a tenant candidate."""
        self._logger.debug(
            "tenant_resolver_forwarded_candidate_missing",
            **self._get_context_kwargs(),
        )
