"""Session aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from iam.domain.value_objects import SessionId, TenantId, UserId


@dataclass(frozen=True)
class Session:
    """Session aggregate representing one authenticated login.

    Business rules:
    - A session belongs to one user and is stamped with that user's tenant
      at creation; the stamp is never changed afterwards
    - Sessions are never extended: expiry is absolute
    - A session is expired once ``expires_at <= now``
    - Only the token is ever handed to clients, never the session id
    """

    id: SessionId
    user_id: UserId
    tenant_id: TenantId
    token: str = field(repr=False)
    expires_at: datetime
    created_at: datetime

    @classmethod
    def issue(
        cls,
        user_id: UserId,
        tenant_id: TenantId,
        token: str,
        lifetime: timedelta,
        now: datetime,
    ) -> "Session":
        """Factory method for a freshly issued session.

        Args:
            user_id: The authenticated user
            tenant_id: The user's tenant
            token: High-entropy credential placed in the client cookie
            lifetime: How long the session stays valid
            now: Issue time (timezone-aware)

        Returns:
            A new Session aggregate expiring at ``now + lifetime``
        """
        return cls(
            id=SessionId.generate(),
            user_id=user_id,
            tenant_id=tenant_id,
            token=token,
            expires_at=now + lifetime,
            created_at=now,
        )

    def is_expired(self, now: datetime) -> bool:
        """Check whether the session has expired at ``now`` (inclusive)."""
        return self.expires_at <= now

    def belongs_to(self, tenant_id: TenantId) -> bool:
        """Check whether the session was issued for the given tenant."""
        return self.tenant_id == tenant_id
