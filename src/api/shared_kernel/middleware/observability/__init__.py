"""Observability for shared middleware operations."""

from shared_kernel.middleware.observability.edge_tenant_probe import (
    DefaultEdgeTenantProbe,
    EdgeTenantProbe,
)

__all__ = [
    "DefaultEdgeTenantProbe",
    "EdgeTenantProbe",
]
