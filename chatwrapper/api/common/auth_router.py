"""Authentication endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from chatwrapper.api.common.cookies import clear_session_cookie, set_session_cookie
from chatwrapper.dependencies import (
    CurrentUser,
    get_auth_service,
    get_client_ip,
    get_current_user,
    get_session_token,
)
from chatwrapper.schemas.auth_schema import (
    ChangePasswordRequest,
    LoginRequest,
    UserEnvelope,
    UserResponse,
)
from chatwrapper.schemas.response_schema import ErrorResponse, OkResponse
from chatwrapper.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]


@router.post(
    "/login",
    response_model=UserEnvelope,
    responses={401: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def login(
    body: LoginRequest,
    response: Response,
    auth_service: AuthServiceDep,
    client_ip: Annotated[str, Depends(get_client_ip)],
) -> UserEnvelope:
    """Authenticate and receive a session cookie."""
    user, token = await auth_service.login(body, client_ip)
    set_session_cookie(response, token)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=OkResponse)
async def logout(
    response: Response,
    auth_service: AuthServiceDep,
    token: Annotated[str | None, Depends(get_session_token)],
) -> OkResponse:
    """Revoke the current session and clear the cookie."""
    await auth_service.logout(token)
    clear_session_cookie(response)
    return OkResponse()


@router.get("/me", response_model=UserEnvelope)
async def me(current_user: CurrentUserDep) -> UserEnvelope:
    """Return the authenticated user."""
    return UserEnvelope(
        user=UserResponse(
            id=current_user.id,
            display_name=current_user.display_name,
            login_name=current_user.login_name,
            is_admin=current_user.is_admin,
        )
    )


@router.post("/password", response_model=OkResponse)
async def change_password(
    body: ChangePasswordRequest,
    response: Response,
    auth_service: AuthServiceDep,
    current_user: CurrentUserDep,
) -> OkResponse:
    """Change the password; every other session of this user is revoked."""
    token = await auth_service.change_password(current_user.id, body)
    set_session_cookie(response, token)
    return OkResponse()
