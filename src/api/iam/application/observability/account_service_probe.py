"""Protocol for account service observability.

Defines the interface for domain probes that capture login, signup and
logout events. Emails and passwords are never logged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccountServiceProbe(Protocol):
    """Domain probe for account service operations."""

    def login_succeeded(self, user_id: str, tenant_id: str) -> None:
        """Record that a user logged in."""
        ...

    def login_failed(self, tenant_id: str, reason: str) -> None:
        """Record that a login attempt was rejected."""
        ...

    def signup_succeeded(self, user_id: str, tenant_id: str) -> None:
        """Record that a user signed up."""
        ...

    def signup_rejected(self, tenant_id: str, reason: str) -> None:
        """Record that a signup attempt was rejected."""
        ...

    def logged_out(self, had_session: bool) -> None:
        """Record a logout."""
        ...

    def logged_out_everywhere(self, user_id: str, tenant_id: str, count: int) -> None:
        """Record that a user revoked all of their sessions in a tenant."""
        ...

    def operation_failed(self, operation: str, error: Exception) -> None:
        """Record that an account operation failed unexpectedly."""
        ...

    def with_context(self, context: ObservationContext) -> AccountServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccountServiceProbe:
    """Default implementation of AccountServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAccountServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccountServiceProbe(logger=self._logger, context=context)

    def login_succeeded(self, user_id: str, tenant_id: str) -> None:
        """Record that a user logged in."""
        self._logger.info(
            "login_succeeded",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def login_failed(self, tenant_id: str, reason: str) -> None:
        """Record that a login attempt was rejected."""
        self._logger.info(
            "login_failed",
            tenant_id=tenant_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def signup_succeeded(self, user_id: str, tenant_id: str) -> None:
        """Record that a user signed up."""
        self._logger.info(
            "signup_succeeded",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def signup_rejected(self, tenant_id: str, reason: str) -> None:
        """Record that a signup attempt was rejected."""
        self._logger.info(
            "signup_rejected",
            tenant_id=tenant_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def logged_out(self, had_session: bool) -> None:
        """Record a logout."""
        self._logger.info(
            "logged_out",
            had_session=had_session,
            **self._get_context_kwargs(),
        )

    def logged_out_everywhere(self, user_id: str, tenant_id: str, count: int) -> None:
        """Record that a user revoked all of their sessions in a tenant."""
        self._logger.info(
            "logged_out_everywhere",
            user_id=user_id,
            tenant_id=tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, error: Exception) -> None:
        """Record that an account operation failed unexpectedly."""
        self._logger.error(
            "account_operation_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
