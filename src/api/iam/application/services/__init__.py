"""Application services for IAM bounded context.

Application services orchestrate domain aggregates, repositories, and
other infrastructure to fulfill use cases. They are the "front door" to
the IAM context.
"""

from iam.application.services.account_service import AccountService
from iam.application.services.authentication_gate import AuthenticationGate
from iam.application.services.dashboard_service import DashboardService
from iam.application.services.session_store import SessionStore
from iam.application.services.session_sweeper import SessionSweeper
from iam.application.services.tenant_directory import TenantDirectory
from iam.application.services.tenant_resolver import TenantResolver

__all__ = [
    "AccountService",
    "AuthenticationGate",
    "DashboardService",
    "SessionStore",
    "SessionSweeper",
    "TenantDirectory",
    "TenantResolver",
]
