"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from iam.domain.aggregates.org_settings import OrgSettings
from iam.domain.aggregates.session import Session
from iam.domain.aggregates.tenant import Tenant
from iam.domain.aggregates.user import User

__all__ = [
    "OrgSettings",
    "Session",
    "Tenant",
    "User",
]
