"""Session store application service.

Issues, validates and revokes session tokens. Only the raw token ever
leaves this service; session ids stay internal.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultSessionStoreProbe,
    SessionStoreProbe,
)
from iam.application.security import generate_session_token
from iam.application.value_objects import SessionIdentity
from iam.domain.aggregates import Session
from iam.domain.value_objects import TenantId, UserId
from iam.ports.repositories import ISessionRepository

DEFAULT_SESSION_LIFETIME = timedelta(days=30)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class SessionStore:
    """Application service for the session lifecycle.

    Every public method runs in its own transaction on the given session.
    Races between ``validate`` and ``revoke`` on the same token rely on the
    database's single-row atomicity: a validate sees either the row or its
    absence.
    """

    def __init__(
        self,
        session: AsyncSession,
        session_repository: ISessionRepository,
        lifetime: timedelta = DEFAULT_SESSION_LIFETIME,
        clock: Clock = utc_now,
        token_factory: Callable[[], str] = generate_session_token,
        probe: SessionStoreProbe | None = None,
    ) -> None:
        """Initialize SessionStore with dependencies.

        Args:
            session: Database session for transaction management
            session_repository: Repository for session persistence
            lifetime: Absolute validity period of new sessions
            clock: Source of the current (timezone-aware) time
            token_factory: Generator of session tokens
            probe: Optional domain probe for observability
        """
        self._session = session
        self._sessions = session_repository
        self._lifetime = lifetime
        self._clock = clock
        self._token_factory = token_factory
        self._probe = probe or DefaultSessionStoreProbe()

    def issue(self, user_id: UserId, tenant_id: TenantId) -> Session:
        """Build a new session without persisting it.

        For callers that store the session together with other rows in
        their own transaction, e.g. signup inserting the user and its first
        session atomically.
        """
        return Session.issue(
            user_id=user_id,
            tenant_id=tenant_id,
            token=self._token_factory(),
            lifetime=self._lifetime,
            now=self._clock(),
        )

    async def create(self, user_id: UserId, tenant_id: TenantId) -> str:
        """Issue a new session for a user in a tenant.

        Args:
            user_id: The authenticated user
            tenant_id: The user's tenant; stamped on the session row

        Returns:
            The raw session token for the client cookie
        """
        session = self.issue(user_id, tenant_id)
        async with self._session.begin():
            await self._sessions.create(tenant_id, session)

        self._probe.session_created(user_id.value, tenant_id.value, session.expires_at)
        return session.token

    async def validate(
        self, token: str | None, expected_tenant_id: TenantId | None = None
    ) -> SessionIdentity | None:
        """Validate a session token.

        An expired session is deleted as a side effect. A session issued for
        a tenant other than ``expected_tenant_id`` is reported exactly like
        an unknown token.

        Args:
            token: The raw token from the client
            expected_tenant_id: The tenant resolved for the request, if any

        Returns:
            The session's (user, tenant) pair, or None if invalid
        """
        if not token:
            return None

        async with self._session.begin():
            session = await self._sessions.get_by_token(token)
            if session is None:
                self._probe.session_not_found()
                return None

            if session.is_expired(self._clock()):
                await self._sessions.delete_by_token(token)
                self._probe.session_expired(
                    session.user_id.value, session.tenant_id.value
                )
                return None

        if expected_tenant_id is not None and not session.belongs_to(expected_tenant_id):
            self._probe.session_tenant_mismatch(
                session.tenant_id.value, expected_tenant_id.value
            )
            return None

        return SessionIdentity(user_id=session.user_id, tenant_id=session.tenant_id)

    async def revoke(self, token: str | None) -> None:
        """Delete the session for a token. Revoking an unknown token is a no-op."""
        if not token:
            return

        async with self._session.begin():
            deleted = await self._sessions.delete_by_token(token)
        self._probe.session_revoked(found=deleted > 0)

    async def revoke_all(self, user_id: UserId, tenant_id: TenantId) -> int:
        """Delete every session of a user within one tenant.

        Sessions of the same user id under other tenants are untouched.

        Returns:
            Number of sessions revoked
        """
        async with self._session.begin():
            count = await self._sessions.delete_for_user(tenant_id, user_id)
        self._probe.user_sessions_revoked(user_id.value, tenant_id.value, count)
        return count

    async def sweep_expired(self) -> int:
        """Delete every session with ``expires_at < now`` across all tenants.

        Returns:
            Number of sessions removed
        """
        async with self._session.begin():
            count = await self._sessions.delete_expired(self._clock())
        self._probe.expired_sessions_swept(count)
        return count
