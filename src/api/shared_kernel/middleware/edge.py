"""Edge middleware forwarding the tenant candidate to inner layers.

In the split deployment the edge performs only host parsing: it never
touches storage. It writes the extracted subdomain to the
``x-tenant-subdomain`` request header, after removing any copy supplied by
the client, so inner layers can trust that the header originated here.
"""

from __future__ import annotations

from collections.abc import Iterable

from starlette.types import ASGIApp, Receive, Scope, Send

from shared_kernel.middleware.observability import (
    DefaultEdgeTenantProbe,
    EdgeTenantProbe,
)
from shared_kernel.middleware.tenant_context import (
    DEFAULT_LOOPBACK_HOSTS,
    TENANT_SUBDOMAIN_HEADER,
    extract_subdomain,
)

_HEADER_KEY = TENANT_SUBDOMAIN_HEADER.encode("latin-1")


class EdgeTenantMiddleware:
    """ASGI middleware that derives the tenant candidate from the Host header.

    Args:
        app: The wrapped ASGI application
        loopback_hosts: Host names that never carry a tenant
        trust_forwarded: Keep an inbound header set by a trusted upstream
            proxy instead of replacing it
        probe: Optional domain probe for observability
    """

    def __init__(
        self,
        app: ASGIApp,
        loopback_hosts: Iterable[str] = DEFAULT_LOOPBACK_HOSTS,
        trust_forwarded: bool = False,
        probe: EdgeTenantProbe | None = None,
    ) -> None:
        self.app = app
        self._loopback_hosts = frozenset(loopback_hosts)
        self._trust_forwarded = trust_forwarded
        self._probe = probe or DefaultEdgeTenantProbe()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        headers: list[tuple[bytes, bytes]] = list(scope.get("headers", []))
        forwarded = [value for key, value in headers if key == _HEADER_KEY]

        if forwarded and self._trust_forwarded:
            await self.app(scope, receive, send)
            return

        if forwarded:
            self._probe.spoofed_header_stripped(
                forwarded[0].decode("latin-1", errors="replace")
            )
            headers = [(key, value) for key, value in headers if key != _HEADER_KEY]

        host = next(
            (value.decode("latin-1") for key, value in headers if key == b"host"),
            None,
        )
        subdomain = extract_subdomain(host, self._loopback_hosts)
        if subdomain is None:
            self._probe.no_candidate(host)
        else:
            headers.append((_HEADER_KEY, subdomain.encode("latin-1")))
            self._probe.candidate_forwarded(subdomain)

        scope = dict(scope)
        scope["headers"] = headers
        await self.app(scope, receive, send)
