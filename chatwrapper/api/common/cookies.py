"""Session cookie helpers."""

from fastapi import Response

from chatwrapper.core.config import settings


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HTTP-only, SameSite=Lax cookie."""
    auth = settings.auth
    response.set_cookie(
        key=auth.cookie_name,
        value=token,
        max_age=auth.cookie_max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=auth.cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie in the browser."""
    auth = settings.auth
    response.delete_cookie(
        key=auth.cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=auth.cookie_secure,
    )
