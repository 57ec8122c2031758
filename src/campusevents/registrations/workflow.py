"""RegistrationWorkflow - capacity-limited sign-up and admin moderation."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from campusevents.auth import UnauthorizedError, require_admin
from campusevents.datastore import (
    DuplicateRegistrationError,
    RegistrationStatus,
    utc_now,
)
from campusevents.registrations.exceptions import CapacityExceededError, InvalidStatusError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from campusevents.datastore import Datastore, Event, Registration, User

logger = logging.getLogger(__name__)


class EventLocks:
    """Registry of one mutex per event ID."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def for_event(self, event_id: str) -> threading.Lock:
        """Get (creating on first use) the lock for an event."""
        with self._guard:
            lock = self._locks.get(event_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[event_id] = lock
            return lock

    def discard(self, event_id: str) -> None:
        """Forget the lock of a deleted event."""
        with self._guard:
            self._locks.pop(event_id, None)

    def __len__(self) -> int:
        return len(self._locks)


class RegistrationWorkflow:
    """Enforces registration invariants on top of the Datastore.

    - At most one registration per (event, user)
    - Registration count never exceeds the event's capacity; every status
      counts, including REJECTED
    - Only admins change status; only the owner cancels

    The uniqueness check, capacity check and insert for one event run under
    that event's lock, so concurrent sign-ups in this process are serialized.
    """

    def __init__(
        self,
        datastore: Datastore,
        clock: Callable[[], datetime] = utc_now,
        locks: EventLocks | None = None,
    ) -> None:
        """Initialize the workflow.

        Args:
            datastore: Datastore instance for persistence.
            clock: Source of naive UTC timestamps.
            locks: Per-event lock registry, shared with EventService so that
                deleting an event can release its lock.
        """
        self.datastore = datastore
        self._clock = clock
        self.locks = locks if locks is not None else EventLocks()

    def register_for_event(self, event: Event | None, user: User | None) -> Registration:
        """Register a user for an event with status PENDING.

        Args:
            event: The resolved event.
            user: The resolved registrant.

        Returns:
            The created Registration.

        Raises:
            ValueError: If event or user is missing.
            DuplicateRegistrationError: If the user is already registered.
            CapacityExceededError: If the event is full.
            EventNotFoundError: If the event was deleted in the meantime.
        """
        if event is None or user is None:
            raise ValueError("Invalid event or user information")

        with self.locks.for_event(event.id):
            existing = self.datastore.find_registration(event.id, user.id)
            if existing is not None:
                logger.warning("User %s already registered for event %s", user.id, event.id)
                raise DuplicateRegistrationError("You have already registered for this event")

            # Re-read so a capacity change made after the caller loaded the event applies
            current = self.datastore.get_event(event.id)
            count = self.datastore.count_registrations(event.id)
            if current.max_participants is not None and count >= current.max_participants:
                logger.warning(
                    "Event %s is full (%d/%d), rejecting user %s",
                    event.id,
                    count,
                    current.max_participants,
                    user.id,
                )
                raise CapacityExceededError("Registration limit reached for this event")

            registration = self.datastore.add_registration(
                event_id=event.id,
                user_id=user.id,
                registered_at=self._clock(),
                status=RegistrationStatus.PENDING,
            )

        logger.info(
            "User %s registered for event %s (registration %s)",
            user.id,
            event.id,
            registration.id,
        )
        return registration

    def update_registration_status(
        self,
        registration_id: str,
        new_status: RegistrationStatus | str,
        acting_user: User,
    ) -> Registration:
        """Set a registration's status. Any status may move to any other.

        Raises:
            UnauthorizedError: If acting_user is not an admin.
            InvalidStatusError: If new_status is not a RegistrationStatus.
            RegistrationNotFoundError: If the registration doesn't exist.
        """
        require_admin(acting_user, "update registration status")
        status = _coerce_status(new_status)

        registration = self.datastore.update_registration_status(registration_id, status)
        logger.info(
            "Admin %s set registration %s to %s",
            acting_user.username,
            registration_id,
            status,
        )
        return registration

    def cancel_registration(self, registration_id: str, acting_user: User) -> None:
        """Delete the acting user's own registration, whatever its status.

        Raises:
            RegistrationNotFoundError: If the registration doesn't exist.
            UnauthorizedError: If acting_user does not own the registration.
        """
        registration = self.datastore.get_registration(registration_id)
        if registration.user_id != acting_user.id:
            logger.warning(
                "User %s tried to cancel registration %s owned by %s",
                acting_user.id,
                registration_id,
                registration.user_id,
            )
            raise UnauthorizedError("You are not authorized to cancel this registration")

        with self.locks.for_event(registration.event_id):
            self.datastore.delete_registration(registration_id)
        logger.info("User %s cancelled registration %s", acting_user.id, registration_id)

    # --- Queries ---

    def get(self, registration_id: str) -> Registration:
        """Get a registration by ID."""
        return self.datastore.get_registration(registration_id)

    def list_for_event(self, event_id: str) -> list[Registration]:
        """All registrations for an event."""
        return self.datastore.list_registrations(event_id=event_id)

    def list_for_user(self, user_id: str) -> list[Registration]:
        """All registrations made by a user."""
        return self.datastore.list_registrations(user_id=user_id)

    def list_all(self) -> list[Registration]:
        """Every registration."""
        return self.datastore.list_registrations()

    def list_pending(self) -> list[Registration]:
        """Registrations awaiting moderation."""
        return self.datastore.list_registrations(status=RegistrationStatus.PENDING)

    def list_between(self, start: datetime, end: datetime) -> list[Registration]:
        """Registrations made within the closed interval [start, end]."""
        return self.datastore.list_registrations_between(start, end)

    def search(
        self,
        status: RegistrationStatus | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Registration]:
        """Registrations matching every given filter.

        A missing bound leaves that side of the window open; both bounds are
        inclusive.
        """
        return self.datastore.list_registrations(status=status, start=start, end=end)


def _coerce_status(value: RegistrationStatus | str) -> RegistrationStatus:
    """Validate a status value at the boundary."""
    try:
        return RegistrationStatus(str(value).upper())
    except ValueError as e:
        raise InvalidStatusError(f"Unknown registration status: {value!r}") from e
