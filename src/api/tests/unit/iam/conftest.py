"""Fixtures for IAM application and presentation tests.

Repositories are replaced by small in-memory fakes honouring the same
tenant scoping as the PostgreSQL implementations, so the services can be
exercised end to end without a database.
"""

from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from iam.application.services import (
    AccountService,
    AuthenticationGate,
    DashboardService,
    SessionStore,
    TenantDirectory,
    TenantResolver,
)
from iam.domain.aggregates import OrgSettings, Session, Tenant, User
from iam.domain.value_objects import Subdomain, TenantId, UserId, normalize_email
from iam.ports.exceptions import DuplicateEmailError
from iam.ports.scoped_access import TenantScopedDataAccess


class InMemoryTenantRepository:
    def __init__(self, *tenants: Tenant) -> None:
        self.tenants = {t.subdomain.value: t for t in tenants}

    async def get_by_subdomain(self, subdomain: Subdomain) -> Tenant | None:
        return self.tenants.get(subdomain.value)

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        return next((t for t in self.tenants.values() if t.id == tenant_id), None)

    async def save(self, tenant: Tenant) -> None:
        self.tenants[tenant.subdomain.value] = tenant


class InMemoryUserRepository:
    def __init__(self) -> None:
        self.rows: dict[UserId, User] = {}

    async def create(self, tenant_id: TenantId, user: User) -> User:
        if not user.belongs_to(tenant_id):
            raise ValueError("User aggregate belongs to a different tenant")
        if await self.get_by_email(tenant_id, user.email) is not None:
            raise DuplicateEmailError("A user with this email already exists")
        self.rows[user.id] = user
        return user

    async def get_by_id(self, tenant_id: TenantId, user_id: UserId) -> User | None:
        user = self.rows.get(user_id)
        return user if user is not None and user.tenant_id == tenant_id else None

    async def get_by_email(self, tenant_id: TenantId, email: str) -> User | None:
        email = normalize_email(email)
        return next(
            (
                u
                for u in self.rows.values()
                if u.tenant_id == tenant_id and u.email == email
            ),
            None,
        )

    async def find(self, tenant_id: TenantId, **filters: Any) -> list[User]:
        return [
            u
            for u in self.rows.values()
            if u.tenant_id == tenant_id
            and all(getattr(u, k) == v for k, v in filters.items())
        ]

    async def count(self, tenant_id: TenantId) -> int:
        return len(await self.find(tenant_id))

    async def update(self, tenant_id, user_id, *, name=None, password_hash=None) -> int:
        return 1 if await self.get_by_id(tenant_id, user_id) else 0

    async def delete(self, tenant_id: TenantId, user_id: UserId) -> int:
        if await self.get_by_id(tenant_id, user_id) is None:
            return 0
        del self.rows[user_id]
        return 1


class InMemorySessionRepository:
    def __init__(self) -> None:
        self.rows: dict[str, Session] = {}

    async def create(self, tenant_id: TenantId, session: Session) -> Session:
        if not session.belongs_to(tenant_id):
            raise ValueError("Session aggregate belongs to a different tenant")
        self.rows[session.token] = session
        return session

    async def count_active(self, tenant_id: TenantId, now: datetime) -> int:
        return sum(
            1
            for s in self.rows.values()
            if s.tenant_id == tenant_id and s.expires_at > now
        )

    async def delete_for_user(self, tenant_id: TenantId, user_id: UserId) -> int:
        doomed = [
            t
            for t, s in self.rows.items()
            if s.user_id == user_id and s.tenant_id == tenant_id
        ]
        for token in doomed:
            del self.rows[token]
        return len(doomed)

    async def get_by_token(self, token: str) -> Session | None:
        return self.rows.get(token)

    async def delete_by_token(self, token: str) -> int:
        return 1 if self.rows.pop(token, None) is not None else 0

    async def delete_expired(self, now: datetime) -> int:
        doomed = [t for t, s in self.rows.items() if s.expires_at < now]
        for token in doomed:
            del self.rows[token]
        return len(doomed)


class InMemoryOrgSettingsRepository:
    def __init__(self) -> None:
        self.rows: dict[TenantId, dict[str, Any]] = {}

    async def get(self, tenant_id: TenantId) -> OrgSettings | None:
        if tenant_id not in self.rows:
            return None
        return OrgSettings(tenant_id=tenant_id, settings=dict(self.rows[tenant_id]))

    async def upsert(self, tenant_id: TenantId, settings: dict[str, Any]) -> OrgSettings:
        self.rows[tenant_id] = dict(settings)
        return OrgSettings(tenant_id=tenant_id, settings=dict(settings))

    async def update(self, tenant_id: TenantId, settings: dict[str, Any]) -> int:
        if tenant_id not in self.rows:
            return 0
        self.rows[tenant_id] = dict(settings)
        return 1

    async def delete(self, tenant_id: TenantId) -> int:
        return 1 if self.rows.pop(tenant_id, None) is not None else 0


class FakePasswordHasher:
    def __init__(self) -> None:
        self.verified: list[tuple[str, str]] = []

    def hash(self, plaintext: str) -> str:
        return f"hashed:{plaintext}"

    def verify(self, plaintext: str, digest: str) -> bool:
        self.verified.append((plaintext, digest))
        return digest == f"hashed:{plaintext}"


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def mock_session():
    """Create mock async session with a working begin() context manager."""
    session = AsyncMock()

    ctx_manager = MagicMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=None)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)

    session.begin = Mock(return_value=ctx_manager)
    return session


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def tenant_a():
    return Tenant.create(subdomain="acme", name="Acme Corp")


@pytest.fixture
def tenant_b():
    return Tenant.create(subdomain="globex", name="Globex")


@pytest.fixture
def tenant_repo(tenant_a, tenant_b):
    return InMemoryTenantRepository(tenant_a, tenant_b)


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def session_repo():
    return InMemorySessionRepository()


@pytest.fixture
def settings_repo():
    return InMemoryOrgSettingsRepository()


@pytest.fixture
def hasher():
    return FakePasswordHasher()


@pytest.fixture
def data_access(user_repo, session_repo, settings_repo):
    return TenantScopedDataAccess(
        users=user_repo, sessions=session_repo, org_settings=settings_repo
    )


@pytest.fixture
def session_store(mock_session, session_repo, clock):
    return SessionStore(
        session=mock_session, session_repository=session_repo, clock=clock
    )


@pytest.fixture
def directory(mock_session, tenant_repo):
    return TenantDirectory(session=mock_session, tenant_repository=tenant_repo)


@pytest.fixture
def resolver(directory):
    return TenantResolver(directory=directory)


@pytest.fixture
def gate(mock_session, resolver, session_store, data_access):
    return AuthenticationGate(
        session=mock_session,
        resolver=resolver,
        session_store=session_store,
        data_access=data_access,
    )


@pytest.fixture
def account_service(mock_session, data_access, session_store, hasher):
    return AccountService(
        session=mock_session,
        data_access=data_access,
        session_store=session_store,
        password_hasher=hasher,
    )


@pytest.fixture
def dashboard_service(mock_session, data_access, clock):
    return DashboardService(session=mock_session, data_access=data_access, clock=clock)
