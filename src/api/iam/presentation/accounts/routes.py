"""HTTP routes for login, signup and logout.

Login and signup are public entry points: an unresolved tenant is
reported as 404 "Tenant not found". Logout needs no tenant at all; it
only revokes the presented token.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from iam.application.services import AccountService
from iam.application.value_objects import AuthenticatedIdentity
from iam.dependencies.account import get_account_service
from iam.dependencies.authentication import get_authenticated_identity
from iam.dependencies.session import get_session_token
from iam.dependencies.tenant import get_resolved_tenant
from iam.domain.aggregates import Tenant
from iam.ports.exceptions import (
    DuplicateEmailError,
    TenantUnresolvedError,
    UnauthenticatedError,
    ValidationFailedError,
)
from iam.presentation.accounts.models import (
    LoginRequest,
    LoginResponse,
    LogoutAllResponse,
    LogoutResponse,
    SignupRequest,
    SignupResponse,
)
from iam.presentation.cookies import clear_session_cookie, set_session_cookie
from iam.presentation.models import UserResponse
from infrastructure.settings import SessionSettings, get_session_settings

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)

INTERNAL_ERROR_DETAIL = "Internal server error"


@router.post("/login", status_code=status.HTTP_200_OK)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    tenant: Annotated[Tenant | None, Depends(get_resolved_tenant)],
    service: Annotated[AccountService, Depends(get_account_service)],
    settings: Annotated[SessionSettings, Depends(get_session_settings)],
) -> LoginResponse:
    """Log in to the tenant the request was addressed to.

    Sets the session cookie on success.

    Raises:
        HTTPException: 404 if the tenant is unknown
        HTTPException: 400 if email or password is missing
        HTTPException: 401 for an unknown email or a wrong password
        HTTPException: 500 for unexpected errors
    """
    try:
        issued = await service.login(tenant, body.email, body.password)
    except TenantUnresolvedError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tenant not found",
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UnauthenticatedError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        )

    set_session_cookie(response, request, issued.token, settings)
    return LoginResponse(user=UserResponse.from_domain(issued.user))


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    request: Request,
    response: Response,
    tenant: Annotated[Tenant | None, Depends(get_resolved_tenant)],
    service: Annotated[AccountService, Depends(get_account_service)],
    settings: Annotated[SessionSettings, Depends(get_session_settings)],
) -> SignupResponse:
    """Register a user in the tenant the request was addressed to and log them in.

    Raises:
        HTTPException: 404 if the tenant is unknown
        HTTPException: 400 for missing or malformed fields
        HTTPException: 409 if the email is already registered in the tenant
        HTTPException: 500 for unexpected errors
    """
    try:
        issued = await service.signup(tenant, body.email, body.password, body.name)
    except TenantUnresolvedError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tenant not found",
        )
    except ValidationFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateEmailError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        )

    set_session_cookie(response, request, issued.token, settings)
    return SignupResponse(user=UserResponse.from_domain(issued.user))


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    response: Response,
    token: Annotated[str | None, Depends(get_session_token)],
    service: Annotated[AccountService, Depends(get_account_service)],
    settings: Annotated[SessionSettings, Depends(get_session_settings)],
) -> LogoutResponse:
    """Revoke the current session, if any, and clear the cookie.

    Succeeds whether or not a session existed.
    """
    try:
        await service.logout(token)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        )

    clear_session_cookie(response, settings)
    return LogoutResponse()


@router.get("/logout")
async def logout_and_redirect(
    token: Annotated[str | None, Depends(get_session_token)],
    service: Annotated[AccountService, Depends(get_account_service)],
    settings: Annotated[SessionSettings, Depends(get_session_settings)],
) -> RedirectResponse:
    """Revoke the current session and redirect to the home page.

    The redirect happens even if revocation failed; the failure is
    recorded by the account service.
    """
    redirect = RedirectResponse(url="/")
    try:
        await service.logout(token)
    except Exception:
        # recorded by the account service
        pass
    clear_session_cookie(redirect, settings)
    return redirect


@router.post("/logout-all", status_code=status.HTTP_200_OK)
async def logout_everywhere(
    response: Response,
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[AccountService, Depends(get_account_service)],
    settings: Annotated[SessionSettings, Depends(get_session_settings)],
) -> LogoutAllResponse:
    """Revoke every session of the current user within this tenant."""
    try:
        count = await service.logout_everywhere(identity)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        )

    clear_session_cookie(response, settings)
    return LogoutAllResponse(revoked_sessions=count)
