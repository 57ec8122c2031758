"""Events - event lifecycle and moderation."""

from campusevents.events.exceptions import EventError, InvalidEventError
from campusevents.events.service import EventService

__all__ = [
    "EventError",
    "EventService",
    "InvalidEventError",
]
