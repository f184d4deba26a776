"""Protocol for session store observability.

Captures the session lifecycle: issue, validation outcomes, revocation
and the expiry sweep. Tokens are never logged.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SessionStoreProbe(Protocol):
    """Domain probe for session store operations."""

    def session_created(
        self, user_id: str, tenant_id: str, expires_at: datetime
    ) -> None:
        """Record that a session was issued."""
        ...

    def session_not_found(self) -> None:
        """Record that a presented token matched no session."""
        ...

    def session_expired(self, user_id: str, tenant_id: str) -> None:
        """Record that an expired session was found and deleted."""
        ...

    def session_tenant_mismatch(
        self, session_tenant_id: str, expected_tenant_id: str
    ) -> None:
        """Record that a token was presented to a tenant it was not issued for."""
        ...

    def session_revoked(self, found: bool) -> None:
        """Record that a session was revoked by token."""
        ...

    def user_sessions_revoked(self, user_id: str, tenant_id: str, count: int) -> None:
        """Record that every session of a user in a tenant was revoked."""
        ...

    def expired_sessions_swept(self, count: int) -> None:
        """Record the outcome of an expiry sweep."""
        ...

    def with_context(self, context: ObservationContext) -> SessionStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSessionStoreProbe:
    """Default implementation of SessionStoreProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSessionStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultSessionStoreProbe(logger=self._logger, context=context)

    def session_created(
        self, user_id: str, tenant_id: str, expires_at: datetime
    ) -> None:
        """Record that a session was issued."""
        self._logger.info(
            "session_created",
            user_id=user_id,
            tenant_id=tenant_id,
            expires_at=expires_at.isoformat(),
            **self._get_context_kwargs(),
        )

    def session_not_found(self) -> None:
        """Record that a presented token matched no session."""
        self._logger.debug("session_not_found", **self._get_context_kwargs())

    def session_expired(self, user_id: str, tenant_id: str) -> None:
        """Record that an expired session was found and deleted."""
        self._logger.info(
            "session_expired",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def session_tenant_mismatch(
        self, session_tenant_id: str, expected_tenant_id: str
    ) -> None:
        """Record that a token was presented to a tenant it was not issued for."""
        self._logger.warning(
            "session_tenant_mismatch",
            session_tenant_id=session_tenant_id,
            expected_tenant_id=expected_tenant_id,
            **self._get_context_kwargs(),
        )

    def session_revoked(self, found: bool) -> None:
        """Record that a session was revoked by token."""
        self._logger.info(
            "session_revoked",
            found=found,
            **self._get_context_kwargs(),
        )

    def user_sessions_revoked(self, user_id: str, tenant_id: str, count: int) -> None:
        """Record that every session of a user in a tenant was revoked."""
        self._logger.info(
            "user_sessions_revoked",
            user_id=user_id,
            tenant_id=tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def expired_sessions_swept(self, count: int) -> None:
        """Record the outcome of an expiry sweep."""
        self._logger.info(
            "expired_sessions_swept",
            count=count,
            **self._get_context_kwargs(),
        )
