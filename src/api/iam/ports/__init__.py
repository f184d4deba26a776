"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories and domain services without
specifying implementation details. This allows for dependency inversion
and makes the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    DuplicateEmailError,
    DuplicateSubdomainError,
    EntityNotFoundError,
    TenantUnresolvedError,
    UnauthenticatedError,
    ValidationFailedError,
)
from iam.ports.repositories import (
    IOrgSettingsRepository,
    IPasswordHasher,
    ISessionRepository,
    ITenantRepository,
    IUserRepository,
)
from iam.ports.scoped_access import (
    TenantScope,
    TenantScopedDataAccess,
    with_tenant,
)

__all__ = [
    "IOrgSettingsRepository",
    "IPasswordHasher",
    "ISessionRepository",
    "ITenantRepository",
    "IUserRepository",
    "TenantScope",
    "TenantScopedDataAccess",
    "with_tenant",
    "DuplicateEmailError",
    "DuplicateSubdomainError",
    "EntityNotFoundError",
    "TenantUnresolvedError",
    "UnauthenticatedError",
    "ValidationFailedError",
]
