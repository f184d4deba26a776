"""Session store dependencies.

Also composes the standalone expiry sweep used by the background sweeper
and the cron script, which run outside of any request.
"""

from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultSessionStoreProbe
from iam.application.services import SessionStore
from iam.dependencies.data_access import get_session_repository
from iam.dependencies.observability import get_observation_context
from iam.infrastructure.session_repository import SessionRepository
from infrastructure.database.dependencies import get_session_factory, get_write_session
from infrastructure.settings import SessionSettings, get_session_settings
from shared_kernel.observability_context import ObservationContext


def get_session_store(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    repository: Annotated[SessionRepository, Depends(get_session_repository)],
    settings: Annotated[SessionSettings, Depends(get_session_settings)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> SessionStore:
    """Get SessionStore instance.

    Args:
        session: Async database session (the request's business session)
        repository: Session repository on the same session
        settings: Session settings providing the lifetime
        context: Request metadata bound to the store's probe

    Returns:
        SessionStore issuing sessions with the configured lifetime
    """
    return SessionStore(
        session=session,
        session_repository=repository,
        lifetime=timedelta(days=settings.lifetime_days),
        probe=DefaultSessionStoreProbe().with_context(context),
    )


def get_session_token(
    request: Request,
    settings: Annotated[SessionSettings, Depends(get_session_settings)],
) -> str | None:
    """Read the raw session token from the request cookie, if present."""
    return request.cookies.get(settings.cookie_name) or None


async def sweep_expired_sessions() -> int:
    """Run one global expired-session sweep on a fresh session.

    Returns:
        Number of sessions removed
    """
    factory = get_session_factory()
    async with factory() as session:
        store = SessionStore(
            session=session,
            session_repository=SessionRepository(session=session),
        )
        return await store.sweep_expired()
