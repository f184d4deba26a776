"""Tenant aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import Subdomain, TenantId


@dataclass(frozen=True)
class Tenant:
    """Tenant aggregate representing an organization in the system.

    Tenants are the top-level isolation boundary in the system. Each tenant
    is reached through its own subdomain and owns its users, sessions and
    settings.

    Business rules:
    - Subdomains are globally unique and stored lower-cased
    - Tenants are provisioned out-of-band; request handling only reads them
    """

    id: TenantId
    subdomain: Subdomain
    name: str

    @classmethod
    def create(cls, subdomain: str, name: str) -> "Tenant":
        """Factory method for provisioning a new tenant.

        Args:
            subdomain: The subdomain the tenant is served on (normalized)
            name: Display name of the organization

        Returns:
            A new Tenant aggregate with a generated ID
        """
        return cls(
            id=TenantId.generate(),
            subdomain=Subdomain(subdomain),
            name=name.strip(),
        )
