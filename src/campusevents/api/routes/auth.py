"""Account and session endpoints."""

from fastapi import APIRouter, status

from campusevents.api.dependencies import AuthServiceDep, ContextDep, SessionDep
from campusevents.api.models import (
    APIResponse,
    LoginRequest,
    MessageResponse,
    UserRegister,
    UserResponse,
    user_to_response,
)
from campusevents.auth import NotAuthenticatedError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=APIResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(body: UserRegister, auth: AuthServiceDep) -> APIResponse[UserResponse]:
    """Create a student account."""
    user = auth.register_user(
        username=body.username,
        email=str(body.email),
        password=body.password,
        full_name=body.full_name,
        department=body.department,
        student_id=body.student_id,
        year=body.year,
    )
    return APIResponse(data=user_to_response(user))


@router.post("/login", response_model=APIResponse[UserResponse])
def login(
    body: LoginRequest, auth: AuthServiceDep, session: SessionDep
) -> APIResponse[UserResponse]:
    """Verify credentials and start a session."""
    user = auth.authenticate(body.username, body.password)
    if user is None:
        raise NotAuthenticatedError("Invalid credentials")
    auth.login(session, user)
    return APIResponse(data=user_to_response(user))


@router.post("/logout", response_model=APIResponse[MessageResponse])
def logout(auth: AuthServiceDep, session: SessionDep) -> APIResponse[MessageResponse]:
    """End the current session."""
    auth.logout(session)
    return APIResponse(data=MessageResponse(message="You have been logged out successfully."))


@router.get("/me", response_model=APIResponse[UserResponse])
def me(ctx: ContextDep) -> APIResponse[UserResponse]:
    """Return the logged-in user."""
    return APIResponse(data=user_to_response(ctx.require_user()))
