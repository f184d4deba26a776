"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to tenant, user, session and org settings
repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class _StructlogProbe:
    """Shared structlog plumbing for the default repository probes."""

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

    def with_context(self, context: ObservationContext):
        """Create a new probe with observation context bound."""
        return type(self)(logger=self._logger, context=context)


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_saved(self, tenant_id: str, subdomain: str) -> None:
        """Record that a tenant was provisioned."""
        ...

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        ...

    def tenant_not_found(self, subdomain: str) -> None:
        """Record that no tenant exists for a subdomain."""
        ...

    def duplicate_subdomain(self, subdomain: str) -> None:
        """Record that a duplicate subdomain was detected."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRepositoryProbe(_StructlogProbe):
    """Default implementation of TenantRepositoryProbe using structlog."""

    def tenant_saved(self, tenant_id: str, subdomain: str) -> None:
        """Record that a tenant was provisioned."""
        self._logger.info(
            "tenant_saved",
            tenant_id=tenant_id,
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, subdomain: str) -> None:
        """Record that no tenant exists for a subdomain."""
        self._logger.debug(
            "tenant_not_found",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def duplicate_subdomain(self, subdomain: str) -> None:
        """Record that a duplicate subdomain was detected."""
        self._logger.warning(
            "duplicate_tenant_subdomain",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations.

    Records domain events during user persistence operations.
    """

    def user_created(self, user_id: str, tenant_id: str) -> None:
        """Record that a user was created."""
        ...

    def user_retrieved(self, user_id: str, tenant_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, tenant_id: str) -> None:
        """Record that a user lookup in a tenant found nothing."""
        ...

    def duplicate_email(self, tenant_id: str) -> None:
        """Record that an email was already registered in the tenant."""
        ...

    def users_modified(self, operation: str, tenant_id: str, affected: int) -> None:
        """Record the outcome of a filtered update or delete."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe(_StructlogProbe):
    """Default implementation of UserRepositoryProbe using structlog."""

    def user_created(self, user_id: str, tenant_id: str) -> None:
        """Record that a user was created."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: str, tenant_id: str) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, tenant_id: str) -> None:
        """Record that a user lookup in a tenant found nothing."""
        self._logger.debug(
            "user_not_found",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def duplicate_email(self, tenant_id: str) -> None:
        """Record that an email was already registered in the tenant."""
        self._logger.warning(
            "user_duplicate_email",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def users_modified(self, operation: str, tenant_id: str, affected: int) -> None:
        """Record the outcome of a filtered update or delete."""
        self._logger.info(
            "users_modified",
            operation=operation,
            tenant_id=tenant_id,
            affected=affected,
            **self._get_context_kwargs(),
        )


class SessionRepositoryProbe(Protocol):
    """Domain probe for session repository operations."""

    def session_created(self, user_id: str, tenant_id: str) -> None:
        """Record that a session row was inserted."""
        ...

    def sessions_deleted(self, reason: str, count: int) -> None:
        """Record that session rows were deleted."""
        ...

    def with_context(self, context: ObservationContext) -> SessionRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSessionRepositoryProbe(_StructlogProbe):
    """Default implementation of SessionRepositoryProbe using structlog."""

    def session_created(self, user_id: str, tenant_id: str) -> None:
        """Record that a session row was inserted."""
        self._logger.debug(
            "session_row_created",
            user_id=user_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def sessions_deleted(self, reason: str, count: int) -> None:
        """Record that session rows were deleted."""
        self._logger.debug(
            "session_rows_deleted",
            reason=reason,
            count=count,
            **self._get_context_kwargs(),
        )


class OrgSettingsRepositoryProbe(Protocol):
    """Domain probe for org settings repository operations."""

    def settings_saved(self, tenant_id: str) -> None:
        """Record that a tenant's settings document was written."""
        ...

    def settings_deleted(self, tenant_id: str, affected: int) -> None:
        """Record that a tenant's settings document was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> OrgSettingsRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOrgSettingsRepositoryProbe(_StructlogProbe):
    """Default implementation of OrgSettingsRepositoryProbe using structlog."""

    def settings_saved(self, tenant_id: str) -> None:
        """Record that a tenant's settings document was written."""
        self._logger.info(
            "org_settings_saved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def settings_deleted(self, tenant_id: str, affected: int) -> None:
        """Record that a tenant's settings document was deleted."""
        self._logger.info(
            "org_settings_deleted",
            tenant_id=tenant_id,
            affected=affected,
            **self._get_context_kwargs(),
        )
