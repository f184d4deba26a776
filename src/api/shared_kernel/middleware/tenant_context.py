"""Tenant identification value objects and host parsing.

This module holds the framework-agnostic pieces of tenant resolution that
every bounded context may depend on:

- ``extract_subdomain``: pure Host header parsing, no I/O
- ``TenantCandidate``: a subdomain extracted at the edge, not yet verified
- ``TenantContext``: a tenant confirmed to exist by a directory lookup

A ``TenantCandidate`` can only become a ``TenantContext`` through the tenant
directory. Keeping them as separate types means a forwarded header value can
never be passed where a verified tenant is expected.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

TENANT_SUBDOMAIN_HEADER = "x-tenant-subdomain"

DEFAULT_LOOPBACK_HOSTS = ("localhost", "127.0.0.1")

# subdomain.domain.tld
_MIN_TENANT_HOST_LABELS = 3


def extract_subdomain(
    host: str | None,
    loopback_hosts: Iterable[str] = DEFAULT_LOOPBACK_HOSTS,
) -> str | None:
    """Extract the candidate tenant subdomain from a Host header value.

    Strips any ``:port`` suffix, treats loopback aliases as "no tenant" and
    returns the first label when the host has at least three labels.

    Examples:
        acme.app.com       -> "acme"
        acme.app.com:3000  -> "acme"
        app.com            -> None
        localhost:3000     -> None

    Args:
        host: Raw Host header value (may be missing or empty)
        loopback_hosts: Host names that never carry a tenant

    Returns:
        The lower-cased first label, or None when the host carries no tenant
    """
    if not host:
        return None

    hostname = host.strip().lower().split(":", 1)[0]
    if not hostname or hostname in loopback_hosts:
        return None

    labels = hostname.split(".")
    if len(labels) < _MIN_TENANT_HOST_LABELS or not labels[0]:
        return None
    return labels[0]


@dataclass(frozen=True)
class TenantCandidate:
    """An unverified subdomain forwarded by the edge layer.

    Attributes:
        subdomain: The extracted (lower-cased) first host label.
    """

    subdomain: str


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    This is a shared kernel value object used across bounded contexts
    to carry a tenant identity that was confirmed by the tenant directory.

    Attributes:
        tenant_id: The tenant identifier as a string.
        subdomain: The tenant's canonical subdomain.
        name: The tenant's display name.
    """

    tenant_id: str
    subdomain: str
    name: str
