"""EventService - event CRUD gated by owner-or-admin, plus moderation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from campusevents.auth import UnauthorizedError, is_admin, require_admin
from campusevents.datastore import EventStatus, as_naive_utc, utc_now
from campusevents.events.exceptions import InvalidEventError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from campusevents.datastore import Datastore, Event, User
    from campusevents.registrations import EventLocks

logger = logging.getLogger(__name__)


class EventService:
    """Owns the event lifecycle.

    Update and delete require the acting user to be the event's creator or an
    admin. Approval and rejection are admin-only.
    """

    def __init__(
        self,
        datastore: Datastore,
        clock: Callable[[], datetime] = utc_now,
        locks: EventLocks | None = None,
    ) -> None:
        """Initialize the EventService.

        Args:
            datastore: Datastore instance for persistence.
            clock: Source of naive UTC timestamps.
            locks: Per-event lock registry shared with RegistrationWorkflow.
        """
        self.datastore = datastore
        self._clock = clock
        self._locks = locks

    def create_event(
        self,
        creator: User,
        title: str,
        venue: str,
        event_date: datetime,
        description: str = "",
        max_participants: int | None = None,
        image_url: str | None = None,
    ) -> Event:
        """Create an event owned by creator.

        Raises:
            InvalidEventError: If event_date is not in the future, or
                max_participants is not positive.
        """
        event_date = as_naive_utc(event_date)
        if event_date <= self._clock():
            raise InvalidEventError("Event date must be in the future")
        _check_capacity(max_participants)

        event = self.datastore.create_event(
            title=title,
            venue=venue,
            event_date=event_date,
            created_by_id=creator.id,
            description=description,
            max_participants=max_participants,
            image_url=image_url,
        )
        logger.info("User %s created event %s (%s)", creator.username, event.id, event.title)
        return event

    def get_event(self, event_id: str) -> Event:
        """Get an event by ID."""
        return self.datastore.get_event(event_id)

    def update_event(
        self,
        event_id: str,
        actor: User,
        title: str | None = None,
        description: str | None = None,
        venue: str | None = None,
        event_date: datetime | None = None,
        max_participants: int | None = None,
        image_url: str | None = None,
    ) -> Event:
        """Update event fields. Only provided fields are updated.

        Raises:
            EventNotFoundError: If event doesn't exist.
            UnauthorizedError: If actor is neither creator nor admin.
            InvalidEventError: If max_participants is not positive.
        """
        event = self.datastore.get_event(event_id)
        _check_owner_or_admin(event, actor, "update")
        _check_capacity(max_participants)

        updated = self.datastore.update_event(
            event_id,
            title=title,
            description=description,
            venue=venue,
            event_date=as_naive_utc(event_date) if event_date is not None else None,
            max_participants=max_participants,
            image_url=image_url,
        )
        logger.info("User %s updated event %s", actor.username, event_id)
        return updated

    def delete_event(self, event_id: str, actor: User) -> None:
        """Delete an event and its registrations.

        Raises:
            EventNotFoundError: If event doesn't exist.
            UnauthorizedError: If actor is neither creator nor admin.
        """
        event = self.datastore.get_event(event_id)
        _check_owner_or_admin(event, actor, "delete")

        if self._locks is not None:
            with self._locks.for_event(event_id):
                self.datastore.delete_event(event_id)
            self._locks.discard(event_id)
        else:
            self.datastore.delete_event(event_id)
        logger.info("User %s deleted event %s", actor.username, event_id)

    def approve_event(self, event_id: str, admin: User) -> Event:
        """Mark an event APPROVED.

        Raises:
            UnauthorizedError: If admin is not an admin.
            EventNotFoundError: If event doesn't exist.
        """
        require_admin(admin, "approve events")
        event = self.datastore.update_event(event_id, status=EventStatus.APPROVED)
        logger.info("Admin %s approved event %s", admin.username, event_id)
        return event

    def reject_event(self, event_id: str, reason: str, admin: User) -> Event:
        """Mark an event REJECTED with a reason.

        Raises:
            UnauthorizedError: If admin is not an admin.
            EventNotFoundError: If event doesn't exist.
        """
        require_admin(admin, "reject events")
        event = self.datastore.update_event(
            event_id, status=EventStatus.REJECTED, rejection_reason=reason
        )
        logger.info("Admin %s rejected event %s: %s", admin.username, event_id, reason)
        return event

    def list_events(self, status: EventStatus | None = None) -> list[Event]:
        """List events ordered by date."""
        return self.datastore.list_events(status=status)

    def upcoming_events(self) -> list[Event]:
        """Events scheduled after now."""
        now = self._clock()
        return [e for e in self.datastore.list_events(start=now) if e.event_date > now]

    def past_events(self) -> list[Event]:
        """Events scheduled at or before now."""
        return self.datastore.list_events(end=self._clock())

    def events_between(self, start: datetime, end: datetime) -> list[Event]:
        """Events scheduled within the closed interval [start, end]."""
        return self.datastore.list_events(start=as_naive_utc(start), end=as_naive_utc(end))


def _check_owner_or_admin(event: Event, actor: User, action: str) -> None:
    if event.created_by_id != actor.id and not is_admin(actor):
        raise UnauthorizedError(f"Not authorized to {action} this event")


def _check_capacity(max_participants: int | None) -> None:
    if max_participants is not None and max_participants <= 0:
        raise InvalidEventError("Maximum participants must be positive")
