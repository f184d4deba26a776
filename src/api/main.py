"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from iam.application.services import SessionSweeper
from iam.dependencies.session import sweep_expired_sessions
from iam.presentation import router as iam_router
from infrastructure.database.dependencies import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings, get_tenancy_settings
from infrastructure.version import __version__
from shared_kernel.middleware.edge import EdgeTenantMiddleware


@asynccontextmanager
async def tenantgate_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Background expired-session sweeper (unless disabled)
    - Connection pool lifecycle (created lazily, closed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)

    probe = DefaultStartupProbe()
    probe.application_starting(deployment_mode=settings.tenancy.deployment_mode)

    sweeper: SessionSweeper | None = None
    interval = settings.session.sweep_interval_seconds
    if interval > 0:
        sweeper = SessionSweeper(sweep=sweep_expired_sessions, interval_seconds=interval)
        await sweeper.start()
    else:
        probe.session_sweeper_disabled()

    try:
        yield
    finally:
        if sweeper is not None:
            await sweeper.stop()
        await close_database_connections()
        probe.application_stopped()


app = FastAPI(
    title="Tenantgate API",
    description="Subdomain-based tenant resolution and session authentication",
    version=__version__,
    lifespan=tenantgate_lifespan,
)

_tenancy = get_tenancy_settings()
if _tenancy.deployment_mode == "split":
    # Edge layer: forwards the Host-derived candidate in x-tenant-subdomain
    app.add_middleware(
        EdgeTenantMiddleware,
        loopback_hosts=_tenancy.loopback_hosts,
        trust_forwarded=_tenancy.trust_forwarded_subdomain,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 instead of 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body"},
    )


app.include_router(iam_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
