"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.account_service_probe import (
    AccountServiceProbe,
    DefaultAccountServiceProbe,
)
from iam.application.observability.authentication_probe import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.observability.dashboard_service_probe import (
    DashboardServiceProbe,
    DefaultDashboardServiceProbe,
)
from iam.application.observability.session_store_probe import (
    DefaultSessionStoreProbe,
    SessionStoreProbe,
)
from iam.application.observability.session_sweeper_probe import (
    DefaultSessionSweeperProbe,
    SessionSweeperProbe,
)
from iam.application.observability.tenant_directory_probe import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)
from iam.application.observability.tenant_resolver_probe import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)

__all__ = [
    "AccountServiceProbe",
    "DefaultAccountServiceProbe",
    "AuthenticationProbe",
    "DefaultAuthenticationProbe",
    "DashboardServiceProbe",
    "DefaultDashboardServiceProbe",
    "SessionStoreProbe",
    "DefaultSessionStoreProbe",
    "SessionSweeperProbe",
    "DefaultSessionSweeperProbe",
    "TenantDirectoryProbe",
    "DefaultTenantDirectoryProbe",
    "TenantResolverProbe",
    "DefaultTenantResolverProbe",
]
