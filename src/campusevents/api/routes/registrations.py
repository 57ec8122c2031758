"""Registration moderation and self-service endpoints."""

from datetime import datetime

from fastapi import APIRouter, Query, status

from campusevents.api.dependencies import ContextDep, WorkflowDep
from campusevents.api.models import (
    APIResponse,
    RegistrationResponse,
    StatusUpdate,
    registration_to_response,
)
from campusevents.datastore import RegistrationStatus, as_naive_utc

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.get("", response_model=APIResponse[list[RegistrationResponse]])
def list_registrations(
    ctx: ContextDep,
    workflow: WorkflowDep,
    pending: bool = Query(default=False, description="Only registrations awaiting moderation"),
    start: datetime | None = Query(default=None, description="Registered at or after"),
    end: datetime | None = Query(default=None, description="Registered at or before"),
) -> APIResponse[list[RegistrationResponse]]:
    """List registrations. Admin only.

    Filters combine; a single bound gives an open-ended window.
    """
    ctx.require_admin()
    registrations = workflow.search(
        status=RegistrationStatus.PENDING if pending else None,
        start=as_naive_utc(start) if start is not None else None,
        end=as_naive_utc(end) if end is not None else None,
    )
    return APIResponse(data=[registration_to_response(r) for r in registrations])


@router.get("/mine", response_model=APIResponse[list[RegistrationResponse]])
def list_my_registrations(
    ctx: ContextDep, workflow: WorkflowDep
) -> APIResponse[list[RegistrationResponse]]:
    """List the current user's registrations."""
    user = ctx.require_user()
    return APIResponse(data=[registration_to_response(r) for r in workflow.list_for_user(user.id)])


@router.patch("/{registration_id}/status", response_model=APIResponse[RegistrationResponse])
def update_registration_status(
    registration_id: str, body: StatusUpdate, ctx: ContextDep, workflow: WorkflowDep
) -> APIResponse[RegistrationResponse]:
    """Set a registration's status. Admin only."""
    updated = workflow.update_registration_status(registration_id, body.status, ctx.require_user())
    return APIResponse(data=registration_to_response(updated))


@router.delete("/{registration_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_registration(registration_id: str, ctx: ContextDep, workflow: WorkflowDep) -> None:
    """Cancel the current user's own registration."""
    workflow.cancel_registration(registration_id, ctx.require_user())
