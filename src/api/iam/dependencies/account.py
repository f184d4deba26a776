"""Account and dashboard service dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultAccountServiceProbe,
    DefaultDashboardServiceProbe,
)
from iam.application.security import BcryptPasswordHasher
from iam.application.services import AccountService, DashboardService, SessionStore
from iam.dependencies.data_access import get_scoped_data_access
from iam.dependencies.observability import get_observation_context
from iam.dependencies.session import get_session_store
from iam.ports.repositories import IPasswordHasher
from iam.ports.scoped_access import TenantScopedDataAccess
from infrastructure.database.dependencies import get_write_session
from shared_kernel.observability_context import ObservationContext


def get_password_hasher() -> IPasswordHasher:
    """Get the password hasher.

    Returns:
        BcryptPasswordHasher instance
    """
    return BcryptPasswordHasher()


def get_account_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    data_access: Annotated[TenantScopedDataAccess, Depends(get_scoped_data_access)],
    session_store: Annotated[SessionStore, Depends(get_session_store)],
    hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AccountService:
    """Get AccountService instance."""
    return AccountService(
        session=session,
        data_access=data_access,
        session_store=session_store,
        password_hasher=hasher,
        probe=DefaultAccountServiceProbe().with_context(context),
    )


def get_dashboard_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    data_access: Annotated[TenantScopedDataAccess, Depends(get_scoped_data_access)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> DashboardService:
    """Get DashboardService instance."""
    return DashboardService(
        session=session,
        data_access=data_access,
        probe=DefaultDashboardServiceProbe().with_context(context),
    )
