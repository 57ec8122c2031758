"""REST API for Campus Events."""

from campusevents.api.app import create_app, register_exception_handlers
from campusevents.api.models import (
    APIResponse,
    EventCreate,
    EventResponse,
    RegistrationResponse,
    UserResponse,
)

__all__ = [
    "APIResponse",
    "EventCreate",
    "EventResponse",
    "RegistrationResponse",
    "UserResponse",
    "create_app",
    "register_exception_handlers",
]
