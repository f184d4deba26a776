"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from iam.infrastructure.observability.repository_probe import (
    DefaultOrgSettingsRepositoryProbe,
    DefaultSessionRepositoryProbe,
    DefaultTenantRepositoryProbe,
    DefaultUserRepositoryProbe,
    OrgSettingsRepositoryProbe,
    SessionRepositoryProbe,
    TenantRepositoryProbe,
    UserRepositoryProbe,
)

__all__ = [
    "OrgSettingsRepositoryProbe",
    "DefaultOrgSettingsRepositoryProbe",
    "SessionRepositoryProbe",
    "DefaultSessionRepositoryProbe",
    "TenantRepositoryProbe",
    "DefaultTenantRepositoryProbe",
    "UserRepositoryProbe",
    "DefaultUserRepositoryProbe",
]
