"""Account application service for IAM bounded context.

Orchestrates login, signup and logout on top of the tenant-scoped data
access layer and the session store.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AccountServiceProbe,
    DefaultAccountServiceProbe,
)
from iam.application.security import dummy_password_hash
from iam.application.services.session_store import SessionStore
from iam.application.value_objects import AuthenticatedIdentity, IssuedSession
from iam.domain.aggregates import Tenant, User
from iam.domain.value_objects import (
    MIN_PASSWORD_LENGTH,
    is_valid_email,
    normalize_email,
)
from iam.ports.exceptions import (
    DuplicateEmailError,
    TenantUnresolvedError,
    UnauthenticatedError,
    ValidationFailedError,
)
from iam.ports.repositories import IPasswordHasher
from iam.ports.scoped_access import TenantScopedDataAccess

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"

_EXPECTED_ERRORS = (
    DuplicateEmailError,
    TenantUnresolvedError,
    UnauthenticatedError,
    ValidationFailedError,
)


class AccountService:
    """Application service for account entry points.

    Manages database transactions; every user lookup or insert is scoped
    to the tenant the request resolved to.
    """

    def __init__(
        self,
        session: AsyncSession,
        data_access: TenantScopedDataAccess,
        session_store: SessionStore,
        password_hasher: IPasswordHasher,
        probe: AccountServiceProbe | None = None,
    ) -> None:
        """Initialize AccountService with dependencies.

        Args:
            session: Database session for transaction management
            data_access: Tenant-scoped repositories
            session_store: Issues and revokes session tokens
            password_hasher: Password hashing capability
            probe: Optional domain probe for observability
        """
        self._session = session
        self._data_access = data_access
        self._session_store = session_store
        self._hasher = password_hasher
        self._probe = probe or DefaultAccountServiceProbe()

    async def login(
        self,
        tenant: Tenant | None,
        email: str | None,
        password: str | None,
    ) -> IssuedSession:
        """Verify credentials within a tenant and issue a session.

        An unknown email and a wrong password fail identically.

        Raises:
            TenantUnresolvedError: If the request resolved to no tenant
            ValidationFailedError: If email or password is missing
            UnauthenticatedError: If the credentials do not match
        """
        if tenant is None:
            raise TenantUnresolvedError("Tenant not found")
        if not email or not password:
            raise ValidationFailedError("Email and password are required")

        try:
            scope = self._data_access.for_tenant(tenant.id)
            async with self._session.begin():
                user = await scope.users.get_by_email(normalize_email(email))

            if user is None:
                # Spend the same hashing work as a real mismatch
                self._hasher.verify(password, dummy_password_hash())
                self._probe.login_failed(tenant.id.value, "unknown_email")
                raise UnauthenticatedError(INVALID_CREDENTIALS_MESSAGE)

            if not self._hasher.verify(password, user.password_hash):
                self._probe.login_failed(tenant.id.value, "wrong_password")
                raise UnauthenticatedError(INVALID_CREDENTIALS_MESSAGE)

            token = await self._session_store.create(user.id, user.tenant_id)
        except _EXPECTED_ERRORS:
            raise
        except Exception as e:
            self._probe.operation_failed("login", e)
            raise

        self._probe.login_succeeded(user.id.value, tenant.id.value)
        return IssuedSession(user=user, token=token)

    async def signup(
        self,
        tenant: Tenant | None,
        email: str | None,
        password: str | None,
        name: str | None = None,
    ) -> IssuedSession:
        """Register a user in a tenant and log them in.

        Raises:
            TenantUnresolvedError: If the request resolved to no tenant
            ValidationFailedError: If a field is missing or malformed
            DuplicateEmailError: If the email is already registered in the tenant
        """
        if tenant is None:
            raise TenantUnresolvedError("Tenant not found")
        if not email or not password:
            raise ValidationFailedError("Email and password are required")

        normalized = normalize_email(email)
        if not is_valid_email(normalized):
            self._probe.signup_rejected(tenant.id.value, "invalid_email")
            raise ValidationFailedError("Invalid email format")
        if len(password) < MIN_PASSWORD_LENGTH:
            self._probe.signup_rejected(tenant.id.value, "weak_password")
            raise ValidationFailedError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        try:
            user = User.create(
                tenant_id=tenant.id,
                email=normalized,
                password_hash=self._hasher.hash(password),
                name=name,
            )
            first_session = self._session_store.issue(user.id, user.tenant_id)
            scope = self._data_access.for_tenant(tenant.id)
            # user and first session commit or roll back together
            async with self._session.begin():
                await scope.users.create(user)
                await scope.sessions.create(first_session)
            token = first_session.token
        except DuplicateEmailError:
            self._probe.signup_rejected(tenant.id.value, "duplicate_email")
            raise
        except Exception as e:
            self._probe.operation_failed("signup", e)
            raise

        self._probe.signup_succeeded(user.id.value, tenant.id.value)
        return IssuedSession(user=user, token=token)

    async def logout(self, token: str | None) -> None:
        """Revoke the session behind a token, if any. Never fails for a missing session."""
        try:
            await self._session_store.revoke(token)
        except Exception as e:
            self._probe.operation_failed("logout", e)
            raise
        self._probe.logged_out(had_session=bool(token))

    async def logout_everywhere(self, identity: AuthenticatedIdentity) -> int:
        """Revoke every session of the user within the request's tenant.

        Returns:
            Number of sessions revoked
        """
        try:
            count = await self._session_store.revoke_all(
                identity.user.id, identity.tenant.id
            )
        except Exception as e:
            self._probe.operation_failed("logout_everywhere", e)
            raise
        self._probe.logged_out_everywhere(
            identity.user.id.value, identity.tenant.id.value, count
        )
        return count
