"""Request-scoped observation context for IAM probes."""

from fastapi import Request
from ulid import ULID

from shared_kernel.observability_context import ObservationContext

REQUEST_ID_HEADER = "x-request-id"


def get_observation_context(request: Request) -> ObservationContext:
    """Build the context every probe of this request is bound to.

    Reuses an inbound ``x-request-id`` so events correlate with upstream
    proxies; otherwise a fresh ULID is generated.
    """
    return ObservationContext(
        request_id=request.headers.get(REQUEST_ID_HEADER) or str(ULID()),
        extra={"path": request.url.path},
    )
