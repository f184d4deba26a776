"""PostgreSQL implementation of IUserRepository.

Every method takes the tenant id first and filters on it. Updates and
deletes are filtered bulk statements matching on (id, tenant_id), so a
wrong tenant id affects zero rows instead of crossing tenants.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.domain.value_objects import TenantId, UserId, normalize_email
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import DuplicateEmailError
from iam.ports.repositories import IUserRepository
from iam.ports.scoped_access import with_tenant


class UserRepository(IUserRepository):
    """PostgreSQL-backed, tenant-scoped repository for User aggregates."""

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def create(self, tenant_id: TenantId, user: User) -> User:
        """Insert a user owned by ``tenant_id``.

        The tenant id is set on the row in the same INSERT that creates it.

        Raises:
            DuplicateEmailError: If the email already exists in the tenant
            ValueError: If the aggregate belongs to another tenant
        """
        if not user.belongs_to(tenant_id):
            raise ValueError("User aggregate belongs to a different tenant")

        existing = await self.get_by_email(tenant_id, user.email)
        if existing is not None:
            self._probe.duplicate_email(tenant_id.value)
            raise DuplicateEmailError("A user with this email already exists")

        self._session.add(
            UserModel(
                id=user.id.value,
                tenant_id=tenant_id.value,
                email=user.email,
                password_hash=user.password_hash,
                name=user.name,
            )
        )
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Concurrent signup with the same email in the same tenant
            if "uq_users_email_tenant" in str(e):
                self._probe.duplicate_email(tenant_id.value)
                raise DuplicateEmailError(
                    "A user with this email already exists"
                ) from e
            raise

        self._probe.user_created(user.id.value, tenant_id.value)
        return user

    async def get_by_id(self, tenant_id: TenantId, user_id: UserId) -> User | None:
        """Retrieve a user by ID within a tenant.

        Returns:
            The User aggregate, or None if not found in this tenant
        """
        stmt = select(UserModel).where(
            UserModel.id == user_id.value,
            UserModel.tenant_id == tenant_id.value,
        )
        return await self._fetch_one(tenant_id, stmt)

    async def get_by_email(self, tenant_id: TenantId, email: str) -> User | None:
        """Retrieve a user by email within a tenant.

        Returns:
            The User aggregate, or None if not found in this tenant
        """
        stmt = select(UserModel).where(
            UserModel.email == normalize_email(email),
            UserModel.tenant_id == tenant_id.value,
        )
        return await self._fetch_one(tenant_id, stmt)

    async def find(self, tenant_id: TenantId, **filters: Any) -> list[User]:
        """List users of a tenant matching equality filters."""
        stmt = (
            select(UserModel)
            .filter_by(**with_tenant(tenant_id, filters))
            .order_by(UserModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_aggregate(model) for model in result.scalars().all()]

    async def count(self, tenant_id: TenantId) -> int:
        """Count the users of a tenant."""
        stmt = (
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.tenant_id == tenant_id.value)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def update(
        self,
        tenant_id: TenantId,
        user_id: UserId,
        *,
        name: str | None = None,
        password_hash: str | None = None,
    ) -> int:
        """Update a user matched on (id, tenant_id).

        Returns:
            Number of rows affected
        """
        values: dict[str, Any] = {}
        if name is not None:
            values["name"] = name
        if password_hash is not None:
            values["password_hash"] = password_hash
        if not values:
            return 0

        stmt = (
            update(UserModel)
            .where(
                UserModel.id == user_id.value,
                UserModel.tenant_id == tenant_id.value,
            )
            .values(**values)
        )
        result = await self._session.execute(stmt)
        self._probe.users_modified("update", tenant_id.value, result.rowcount)
        return result.rowcount

    async def delete(self, tenant_id: TenantId, user_id: UserId) -> int:
        """Delete a user matched on (id, tenant_id).

        Returns:
            Number of rows affected
        """
        stmt = delete(UserModel).where(
            UserModel.id == user_id.value,
            UserModel.tenant_id == tenant_id.value,
        )
        result = await self._session.execute(stmt)
        self._probe.users_modified("delete", tenant_id.value, result.rowcount)
        return result.rowcount

    async def _fetch_one(self, tenant_id: TenantId, stmt) -> User | None:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            self._probe.user_not_found(tenant_id.value)
            return None

        self._probe.user_retrieved(model.id, tenant_id.value)
        return self._to_aggregate(model)

    def _to_aggregate(self, model: UserModel) -> User:
        """Convert ORM model to domain aggregate."""
        return User(
            id=UserId(value=model.id),
            tenant_id=TenantId(value=model.tenant_id),
            email=model.email,
            password_hash=model.password_hash,
            name=model.name,
        )
