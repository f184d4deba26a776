"""Protocol for authentication gate observability.

Every rejection is recorded with its reason here, while callers only ever
see one undifferentiated "unauthenticated" outcome.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for the authentication gate."""

    def authentication_succeeded(self, user_id: str, tenant_id: str) -> None:
        """Record that a request was authenticated."""
        ...

    def authentication_rejected(self, reason: str, tenant_id: str | None = None) -> None:
        """Record that a request failed authentication."""
        ...

    def session_user_tenant_mismatch(
        self, user_id: str, session_tenant_id: str, user_tenant_id: str
    ) -> None:
        """Record that a session's tenant disagrees with its user's tenant."""
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def authentication_succeeded(self, user_id: str, tenant_id: str) -> None:
        """Record that a request was authenticated."""
        self._logger.debug(
            "authentication_succeeded",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def authentication_rejected(self, reason: str, tenant_id: str | None = None) -> None:
        """Record that a request failed authentication."""
        self._logger.info(
            "authentication_rejected",
            reason=reason,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def session_user_tenant_mismatch(
        self, user_id: str, session_tenant_id: str, user_tenant_id: str
    ) -> None:
        """Record that a session's tenant disagrees with its user's tenant."""
        self._logger.error(
            "session_user_tenant_mismatch",
            user_id=user_id,
            session_tenant_id=session_tenant_id,
            user_tenant_id=user_tenant_id,
            message="Session tenant does not match user tenant; rejecting",
            **self._get_context_kwargs(),
        )
