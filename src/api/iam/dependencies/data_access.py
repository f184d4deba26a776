"""Tenant-scoped data access dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.infrastructure.org_settings_repository import OrgSettingsRepository
from iam.infrastructure.session_repository import SessionRepository
from iam.infrastructure.user_repository import UserRepository
from iam.ports.scoped_access import TenantScopedDataAccess
from infrastructure.database.dependencies import get_write_session


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> UserRepository:
    """Get UserRepository instance bound to the request session."""
    return UserRepository(session=session)


def get_session_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> SessionRepository:
    """Get SessionRepository instance bound to the request session."""
    return SessionRepository(session=session)


def get_org_settings_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> OrgSettingsRepository:
    """Get OrgSettingsRepository instance bound to the request session."""
    return OrgSettingsRepository(session=session)


def get_scoped_data_access(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    sessions: Annotated[SessionRepository, Depends(get_session_repository)],
    org_settings: Annotated[
        OrgSettingsRepository, Depends(get_org_settings_repository)
    ],
) -> TenantScopedDataAccess:
    """Get the tenant-scoped data access facade.

    Returns:
        TenantScopedDataAccess over the request's repositories
    """
    return TenantScopedDataAccess(
        users=users, sessions=sessions, org_settings=org_settings
    )
