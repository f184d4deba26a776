"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field

from iam.domain.value_objects import TenantId, UserId, normalize_email


@dataclass(frozen=True)
class User:
    """User aggregate representing a person within exactly one tenant.

    The natural key is (email, tenant_id): the same email address may
    exist in two tenants as two unrelated users.

    The password digest is held for verification only and is excluded
    from repr so it never ends up in logs.
    """

    id: UserId
    tenant_id: TenantId
    email: str
    password_hash: str = field(repr=False)
    name: str | None = None

    @classmethod
    def create(
        cls,
        tenant_id: TenantId,
        email: str,
        password_hash: str,
        name: str | None = None,
    ) -> "User":
        """Factory method for registering a new user in a tenant.

        Args:
            tenant_id: The tenant the user belongs to
            email: Email address (normalized before storing)
            password_hash: Digest produced by the password hasher
            name: Optional display name (blank becomes None)

        Returns:
            A new User aggregate with a generated ID
        """
        display_name = name.strip() if name else None
        return cls(
            id=UserId.generate(),
            tenant_id=tenant_id,
            email=normalize_email(email),
            password_hash=password_hash,
            name=display_name or None,
        )

    def belongs_to(self, tenant_id: TenantId) -> bool:
        """Check whether this user is owned by the given tenant."""
        return self.tenant_id == tenant_id

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.email})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
