"""HTTP routes for the tenant dashboard and org settings.

Every route here requires an authenticated identity, and every query is
scoped to the tenant that identity was authenticated against.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import DashboardService
from iam.application.value_objects import AuthenticatedIdentity
from iam.dependencies.account import get_dashboard_service
from iam.dependencies.authentication import get_authenticated_identity
from iam.ports.exceptions import EntityNotFoundError, ValidationFailedError
from iam.presentation.dashboard.models import (
    DashboardResponse,
    SettingsResponse,
    UpdateSettingsRequest,
)

router = APIRouter(tags=["dashboard"])

INTERNAL_ERROR_DETAIL = "Internal server error"


@router.get("/dashboard", status_code=status.HTTP_200_OK)
async def get_dashboard(
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardResponse:
    """Return the current user, tenant, counters and settings."""
    try:
        summary = await service.summary(identity)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        )
    return DashboardResponse.from_summary(summary)


@router.get("/settings", status_code=status.HTTP_200_OK)
async def get_settings(
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> SettingsResponse:
    """Return the tenant's settings document (null if never set)."""
    try:
        org_settings = await service.get_settings(identity)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        )
    return SettingsResponse.from_domain(org_settings)


@router.put("/settings", status_code=status.HTTP_200_OK)
async def update_settings(
    body: UpdateSettingsRequest,
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> SettingsResponse:
    """Create or replace the tenant's settings document.

    Raises:
        HTTPException: 400 if the document is missing or not a JSON object
        HTTPException: 500 for unexpected errors
    """
    try:
        saved = await service.update_settings(identity, body.settings)
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        )
    return SettingsResponse.from_domain(saved)


@router.delete("/settings", status_code=status.HTTP_204_NO_CONTENT)
async def delete_settings(
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> None:
    """Remove the tenant's settings document.

    Raises:
        HTTPException: 404 if the tenant has no settings document
        HTTPException: 500 for unexpected errors
    """
    try:
        await service.delete_settings(identity)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        )
