"""IAM presentation layer - entry-point-based organization.

Organizes presentation concerns by entry point (accounts, dashboard)
following vertical slicing. Each package contains its own routes and
models.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import accounts, dashboard

# Auth is enforced per-endpoint (each handler declares its own Depends),
# not at the router level, so login, signup and logout stay public.
router = APIRouter(prefix="/api")

router.include_router(accounts.router)
router.include_router(dashboard.router)

__all__ = ["router"]
