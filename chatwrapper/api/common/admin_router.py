"""Admin user-management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from chatwrapper.dependencies import CurrentUser, get_admin_service, require_admin
from chatwrapper.schemas.admin_schema import CreateUserRequest, UserListResponse
from chatwrapper.schemas.auth_schema import UserEnvelope, UserResponse
from chatwrapper.schemas.response_schema import OkResponse
from chatwrapper.services.admin_service import AdminService

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)

AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]


@router.get("/users", response_model=UserListResponse)
async def list_users(service: AdminServiceDep) -> UserListResponse:
    """List every account ordered by login name."""
    users = await service.list_users()
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.post(
    "/users",
    response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(body: CreateUserRequest, service: AdminServiceDep) -> UserEnvelope:
    """Create an account."""
    user = await service.create_user(body)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.delete("/users/{user_id}", response_model=OkResponse)
async def delete_user(
    user_id: str,
    service: AdminServiceDep,
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> OkResponse:
    """Delete an account and its sessions; admins cannot delete themselves."""
    await service.delete_user(acting_user_id=current_user.id, user_id=user_id)
    return OkResponse()
