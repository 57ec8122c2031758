"""Event CRUD, moderation and sign-up endpoints."""

from fastapi import APIRouter, status

from campusevents.api.dependencies import ContextDep, EventServiceDep, WorkflowDep
from campusevents.api.models import (
    APIResponse,
    EventCreate,
    EventReject,
    EventResponse,
    EventUpdate,
    RegistrationResponse,
    event_to_response,
    registration_to_response,
)
from campusevents.auth import UnauthorizedError, is_admin

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=APIResponse[list[EventResponse]])
def list_events(ctx: ContextDep, events: EventServiceDep) -> APIResponse[list[EventResponse]]:
    """List all events."""
    ctx.require_user()
    return APIResponse(data=[event_to_response(e) for e in events.list_events()])


@router.get("/upcoming", response_model=APIResponse[list[EventResponse]])
def list_upcoming_events(events: EventServiceDep) -> APIResponse[list[EventResponse]]:
    """List events scheduled in the future. Public."""
    return APIResponse(data=[event_to_response(e) for e in events.upcoming_events()])


@router.get("/past", response_model=APIResponse[list[EventResponse]])
def list_past_events(ctx: ContextDep, events: EventServiceDep) -> APIResponse[list[EventResponse]]:
    """List events that already took place."""
    ctx.require_user()
    return APIResponse(data=[event_to_response(e) for e in events.past_events()])


@router.post(
    "",
    response_model=APIResponse[EventResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_event(
    body: EventCreate, ctx: ContextDep, events: EventServiceDep
) -> APIResponse[EventResponse]:
    """Create an event owned by the current user."""
    created = events.create_event(
        creator=ctx.require_user(),
        title=body.title,
        venue=body.venue,
        event_date=body.event_date,
        description=body.description,
        max_participants=body.max_participants,
        image_url=body.image_url,
    )
    return APIResponse(data=event_to_response(created))


@router.get("/{event_id}", response_model=APIResponse[EventResponse])
def get_event(
    event_id: str, ctx: ContextDep, events: EventServiceDep
) -> APIResponse[EventResponse]:
    """Get an event by ID."""
    ctx.require_user()
    return APIResponse(data=event_to_response(events.get_event(event_id)))


@router.patch("/{event_id}", response_model=APIResponse[EventResponse])
def update_event(
    event_id: str, body: EventUpdate, ctx: ContextDep, events: EventServiceDep
) -> APIResponse[EventResponse]:
    """Update an event (partial update). Creator or admin only."""
    updated = events.update_event(
        event_id,
        ctx.require_user(),
        title=body.title,
        description=body.description,
        venue=body.venue,
        event_date=body.event_date,
        max_participants=body.max_participants,
        image_url=body.image_url,
    )
    return APIResponse(data=event_to_response(updated))


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, ctx: ContextDep, events: EventServiceDep) -> None:
    """Delete an event and its registrations. Creator or admin only."""
    events.delete_event(event_id, ctx.require_user())


@router.post("/{event_id}/approve", response_model=APIResponse[EventResponse])
def approve_event(
    event_id: str, ctx: ContextDep, events: EventServiceDep
) -> APIResponse[EventResponse]:
    """Approve an event. Admin only."""
    approved = events.approve_event(event_id, ctx.require_user())
    return APIResponse(data=event_to_response(approved))


@router.post("/{event_id}/reject", response_model=APIResponse[EventResponse])
def reject_event(
    event_id: str, body: EventReject, ctx: ContextDep, events: EventServiceDep
) -> APIResponse[EventResponse]:
    """Reject an event with a reason. Admin only."""
    rejected = events.reject_event(event_id, body.reason, ctx.require_user())
    return APIResponse(data=event_to_response(rejected))


@router.post(
    "/{event_id}/registrations",
    response_model=APIResponse[RegistrationResponse],
    status_code=status.HTTP_201_CREATED,
)
def register_for_event(
    event_id: str, ctx: ContextDep, events: EventServiceDep, workflow: WorkflowDep
) -> APIResponse[RegistrationResponse]:
    """Register the current user for an event."""
    user = ctx.require_user()
    event = events.get_event(event_id)
    registration = workflow.register_for_event(event, user)
    return APIResponse(data=registration_to_response(registration))


@router.get(
    "/{event_id}/registrations",
    response_model=APIResponse[list[RegistrationResponse]],
)
def list_event_registrations(
    event_id: str, ctx: ContextDep, events: EventServiceDep, workflow: WorkflowDep
) -> APIResponse[list[RegistrationResponse]]:
    """List registrations for an event. Creator or admin only."""
    user = ctx.require_user()
    event = events.get_event(event_id)
    if event.created_by_id != user.id and not is_admin(user):
        raise UnauthorizedError("Not authorized to view registrations for this event")
    registrations = workflow.list_for_event(event_id)
    return APIResponse(data=[registration_to_response(r) for r in registrations])
