"""Domain probe for edge tenant identification.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of the edge middleware that extracts the tenant
candidate from the Host header.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class EdgeTenantProbe(Protocol):
    """Domain probe for edge tenant candidate extraction."""

    def candidate_forwarded(self, subdomain: str) -> None:
        """Record that a tenant candidate was forwarded to the inner layer."""
        ...

    def no_candidate(self, host: str | None) -> None:
        """Record that the Host header carried no tenant candidate."""
        ...

    def spoofed_header_stripped(self, raw_value: str) -> None:
        """Record that a client-supplied x-tenant-subdomain header was removed."""
        ...

    def with_context(self, context: ObservationContext) -> EdgeTenantProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEdgeTenantProbe:
    """Default implementation of EdgeTenantProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultEdgeTenantProbe:
        """Create a new probe with observation context bound."""
        return DefaultEdgeTenantProbe(logger=self._logger, context=context)

    def candidate_forwarded(self, subdomain: str) -> None:
        """Record that a tenant candidate was forwarded to the inner layer."""
        self._logger.debug(
            "edge_tenant_candidate_forwarded",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def no_candidate(self, host: str | None) -> None:
        """Record that the Host header carried no tenant candidate."""
        self._logger.debug(
            "edge_tenant_no_candidate",
            host=host,
            **self._get_context_kwargs(),
        )

    def spoofed_header_stripped(self, raw_value: str) -> None:
        """Record that a client-supplied x-tenant-subdomain header was removed."""
        self._logger.warning(
            "edge_tenant_header_stripped",
            raw_value=raw_value,
            message="Inbound x-tenant-subdomain header is not trusted",
            **self._get_context_kwargs(),
        )
