"""Request metadata attached to every probe event.

Probes take an optional ``ObservationContext`` through ``with_context``;
its non-empty fields are merged into each log event they emit so events
from one request can be correlated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable metadata bound to a probe for the life of a request.

    Attributes:
        request_id: Correlation id, taken from ``x-request-id`` when present.
        user_id: Authenticated user, once known.
        tenant_id: Resolved tenant, once known.
        subdomain: Subdomain the request was addressed to.
        extra: Additional key/value pairs, e.g. the request path.
    """

    request_id: str | None = None
    user_id: str | None = None
    tenant_id: str | None = None
    subdomain: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Logging kwargs; unset fields are left out."""
        result = {
            key: value
            for key, value in (
                ("request_id", self.request_id),
                ("user_id", self.user_id),
                ("tenant_id", self.tenant_id),
                ("subdomain", self.subdomain),
            )
            if value is not None
        }
        result.update(self.extra)
        return result
