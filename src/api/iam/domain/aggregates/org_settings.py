"""OrgSettings aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from iam.domain.value_objects import TenantId


@dataclass(frozen=True)
class OrgSettings:
    """Per-tenant settings document.

    One-to-one with Tenant. The document itself is opaque to IAM; only its
    ownership by a tenant matters here.
    """

    tenant_id: TenantId
    settings: dict[str, Any] = field(default_factory=dict)
