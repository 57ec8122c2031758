"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from campusevents.datastore import Role

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


class MessageResponse(BaseModel):
    """Response model for actions without a resource body."""

    message: str


# Auth / user models


class UserRegister(BaseModel):
    """Request model for creating a student account."""

    username: str = Field(..., min_length=3, max_length=100, pattern=r"^[\w.\-]+$")
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=255)
    department: str | None = Field(default=None, max_length=255)
    student_id: str | None = Field(default=None, max_length=50)
    year: int | None = Field(default=None, ge=1, le=10)


class LoginRequest(BaseModel):
    """Request model for logging in."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Response model for a user. Never includes the credential."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    full_name: str
    role: str
    active: bool
    department: str | None
    student_id: str | None
    year: int | None
    created_at: datetime


def user_to_response(user: Any) -> UserResponse:
    """Convert a User model to UserResponse."""
    return UserResponse.model_validate(user)


class RoleUpdate(BaseModel):
    """Request model for changing a user's role."""

    role: Role


class ActiveUpdate(BaseModel):
    """Request model for activating or deactivating a user."""

    active: bool


# Event models


class EventCreate(BaseModel):
    """Request model for creating an event."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=10000)
    venue: str = Field(..., min_length=1, max_length=255)
    event_date: datetime
    max_participants: int | None = Field(default=None, ge=1)
    image_url: str | None = Field(default=None, max_length=500)


class EventUpdate(BaseModel):
    """Request model for updating an event (partial update)."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10000)
    venue: str | None = Field(default=None, min_length=1, max_length=255)
    event_date: datetime | None = None
    max_participants: int | None = Field(default=None, ge=1)
    image_url: str | None = Field(default=None, max_length=500)


class EventReject(BaseModel):
    """Request model for rejecting an event."""

    reason: str = Field(..., min_length=1, max_length=2000)


class EventResponse(BaseModel):
    """Response model for an event."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    venue: str
    event_date: datetime
    max_participants: int | None
    image_url: str | None
    status: str
    rejection_reason: str | None
    created_by_id: str
    created_at: datetime
    updated_at: datetime


def event_to_response(event: Any) -> EventResponse:
    """Convert an Event model to EventResponse."""
    return EventResponse.model_validate(event)


# Registration models


class RegistrationResponse(BaseModel):
    """Response model for a registration."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    user_id: str
    status: str
    registered_at: datetime


def registration_to_response(registration: Any) -> RegistrationResponse:
    """Convert a Registration model to RegistrationResponse."""
    return RegistrationResponse.model_validate(registration)


class StatusUpdate(BaseModel):
    """Request model for moderating a registration.

    The value is validated by the workflow so unknown statuses are reported
    with the same error as any other caller would get.
    """

    status: str = Field(..., min_length=1, max_length=20)
