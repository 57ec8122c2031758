"""Admin user-moderation endpoints."""

from fastapi import APIRouter

from campusevents.api.dependencies import AuthServiceDep, ContextDep
from campusevents.api.models import (
    ActiveUpdate,
    APIResponse,
    RoleUpdate,
    UserResponse,
    user_to_response,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=APIResponse[list[UserResponse]])
def list_users(ctx: ContextDep, auth: AuthServiceDep) -> APIResponse[list[UserResponse]]:
    """List all users."""
    ctx.require_admin()
    return APIResponse(data=[user_to_response(u) for u in auth.list_users()])


@router.get("/departments", response_model=APIResponse[list[str]])
def list_departments(ctx: ContextDep, auth: AuthServiceDep) -> APIResponse[list[str]]:
    """List distinct departments."""
    ctx.require_admin()
    return APIResponse(data=auth.list_departments())


@router.patch("/{user_id}/role", response_model=APIResponse[UserResponse])
def update_role(
    user_id: str, body: RoleUpdate, ctx: ContextDep, auth: AuthServiceDep
) -> APIResponse[UserResponse]:
    """Change a user's role."""
    admin = ctx.require_user()
    updated = auth.update_user_role(user_id, body.role, admin)
    return APIResponse(data=user_to_response(updated))


@router.patch("/{user_id}/status", response_model=APIResponse[UserResponse])
def update_status(
    user_id: str, body: ActiveUpdate, ctx: ContextDep, auth: AuthServiceDep
) -> APIResponse[UserResponse]:
    """Activate or deactivate a user."""
    admin = ctx.require_user()
    updated = auth.update_user_status(user_id, body.active, admin)
    return APIResponse(data=user_to_response(updated))
