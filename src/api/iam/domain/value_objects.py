"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ulid import ULID

# Basic shape check: something@something.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9-]+$")

MIN_PASSWORD_LENGTH = 6


def _parse_ulid(value: str, kind: str) -> str:
    """Validate a ULID string and return its canonical (uppercase) form."""
    try:
        return str(ULID.from_str(value.upper()))
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid {kind}: {value}") from e


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantId:
        """Generate a new TenantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Args:
            value: ULID string

        Returns:
            TenantId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        return cls(value=_parse_ulid(value, "TenantId"))


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        return cls(value=_parse_ulid(value, "UserId"))


@dataclass(frozen=True)
class SessionId:
    """Storage identifier for a Session.

    Never leaves the server: clients only ever see the session token.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> SessionId:
        """Generate a new SessionId using ULID."""
        return cls(value=str(ULID()))


@dataclass(frozen=True)
class Subdomain:
    """A tenant's human-facing identifier, normalized once on construction.

    Normalization (trim + lower-case) happens here and only here, so every
    comparison and lookup works on the same canonical string.
    """

    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip().lower()
        if not normalized:
            raise ValueError("Subdomain must not be empty")
        if SUBDOMAIN_PATTERN.match(normalized) is None:
            raise ValueError(
                "Subdomain may only contain letters, digits and hyphens"
            )
        # frozen dataclass: bypass __setattr__ to store the canonical form
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup of user emails."""
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    """Check the basic shape of an email address."""
    return EMAIL_PATTERN.match(email) is not None
