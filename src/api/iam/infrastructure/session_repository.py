"""PostgreSQL implementation of ISessionRepository.

Tenant-scoped methods take the tenant id first. The credential-path methods
(``get_by_token``, ``delete_by_token``, ``delete_expired``) are used only by
the session store, where the token is itself the credential.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Session
from iam.domain.value_objects import SessionId, TenantId, UserId
from iam.infrastructure.models import SessionModel
from iam.infrastructure.observability import (
    DefaultSessionRepositoryProbe,
    SessionRepositoryProbe,
)
from iam.ports.repositories import ISessionRepository


class SessionRepository(ISessionRepository):
    """PostgreSQL-backed repository for Session aggregates.

    Sessions are insert-only: there is no update path.
    """

    def __init__(
        self, session: AsyncSession, probe: SessionRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultSessionRepositoryProbe()

    async def create(self, tenant_id: TenantId, session: Session) -> Session:
        """Insert a session stamped with ``tenant_id``.

        Raises:
            ValueError: If the aggregate belongs to another tenant
        """
        if not session.belongs_to(tenant_id):
            raise ValueError("Session aggregate belongs to a different tenant")

        self._session.add(
            SessionModel(
                id=session.id.value,
                user_id=session.user_id.value,
                tenant_id=tenant_id.value,
                token=session.token,
                expires_at=session.expires_at,
                created_at=session.created_at,
            )
        )
        await self._session.flush()
        self._probe.session_created(session.user_id.value, tenant_id.value)
        return session

    async def count_active(self, tenant_id: TenantId, now: datetime) -> int:
        """Count sessions of a tenant that have not expired at ``now``."""
        stmt = (
            select(func.count())
            .select_from(SessionModel)
            .where(
                SessionModel.tenant_id == tenant_id.value,
                SessionModel.expires_at > now,
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def delete_for_user(self, tenant_id: TenantId, user_id: UserId) -> int:
        """Delete every session of a user within one tenant."""
        stmt = delete(SessionModel).where(
            SessionModel.user_id == user_id.value,
            SessionModel.tenant_id == tenant_id.value,
        )
        result = await self._session.execute(stmt)
        self._probe.sessions_deleted("user_logout_all", result.rowcount)
        return result.rowcount

    async def get_by_token(self, token: str) -> Session | None:
        """Look up a session by its token."""
        stmt = select(SessionModel).where(SessionModel.token == token)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_aggregate(model)

    async def delete_by_token(self, token: str) -> int:
        """Delete the session with the given token, if any."""
        stmt = delete(SessionModel).where(SessionModel.token == token)
        result = await self._session.execute(stmt)
        self._probe.sessions_deleted("token", result.rowcount)
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete every session with ``expires_at < now`` across all tenants."""
        stmt = delete(SessionModel).where(SessionModel.expires_at < now)
        result = await self._session.execute(stmt)
        self._probe.sessions_deleted("expired", result.rowcount)
        return result.rowcount

    def _to_aggregate(self, model: SessionModel) -> Session:
        """Convert ORM model to domain aggregate."""
        return Session(
            id=SessionId(value=model.id),
            user_id=UserId(value=model.user_id),
            tenant_id=TenantId(value=model.tenant_id),
            token=model.token,
            expires_at=model.expires_at,
            created_at=model.created_at,
        )
