"""Session cookie helpers.

The session token is the only session value sent to clients. The cookie
is HttpOnly, SameSite=Lax and scoped to the whole site; it is marked
Secure when the request arrived over TLS or configuration forces it.
"""

from fastapi import Request, Response

from infrastructure.settings import SessionSettings


def set_session_cookie(
    response: Response,
    request: Request,
    token: str,
    settings: SessionSettings,
) -> None:
    """Attach the session token cookie to a response."""
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.max_age_seconds,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure or request.url.scheme == "https",
    )


def clear_session_cookie(response: Response, settings: SessionSettings) -> None:
    """Expire the session token cookie on the client."""
    response.delete_cookie(
        key=settings.cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
    )
