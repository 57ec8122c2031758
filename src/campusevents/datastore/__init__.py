"""Datastore - Persistent storage for users, events and registrations."""

from campusevents.datastore.exceptions import (
    DatastoreError,
    DuplicateRegistrationError,
    EventNotFoundError,
    NotFoundError,
    RegistrationNotFoundError,
    StorageError,
    UserExistsError,
    UserNotFoundError,
)
from campusevents.datastore.models import (
    Event,
    EventStatus,
    Registration,
    RegistrationStatus,
    Role,
    User,
    as_naive_utc,
    utc_now,
)
from campusevents.datastore.store import Datastore

__all__ = [
    "Datastore",
    "DatastoreError",
    "DuplicateRegistrationError",
    "Event",
    "EventNotFoundError",
    "EventStatus",
    "NotFoundError",
    "Registration",
    "RegistrationNotFoundError",
    "RegistrationStatus",
    "Role",
    "StorageError",
    "User",
    "UserExistsError",
    "UserNotFoundError",
    "as_naive_utc",
    "utc_now",
]
