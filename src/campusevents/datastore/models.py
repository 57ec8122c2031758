"""SQLAlchemy models for the Datastore."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class Role(StrEnum):
    """User role enum."""

    STUDENT = "STUDENT"
    ADMIN = "ADMIN"


class RegistrationStatus(StrEnum):
    """Registration status enum."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class EventStatus(StrEnum):
    """Event moderation status enum."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current time as a naive UTC datetime (the form SQLite round-trips)."""
    return datetime.now(UTC).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class User(Base):
    """User model - identity, credential hash and role."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False)
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)
    student_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __init__(
        self,
        username: str,
        email: str,
        password_hash: str,
        full_name: str,
        id: str | None = None,
        role: str | None = None,
        active: bool = True,
        department: str | None = None,
        student_id: str | None = None,
        year: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.username = username
        self.email = email
        self.password_hash = password_hash
        self.full_name = full_name
        self.role = role if role is not None else Role.STUDENT.value
        self.active = active
        self.department = department
        self.student_id = student_id
        self.year = year

    @property
    def user_role(self) -> Role:
        """Get role as Role enum."""
        return Role(self.role)

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, username={self.username!r}, role={self.role!r})>"


class Event(Base):
    """Event model - a scheduled event owned by its creator."""

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    venue: Mapped[str] = mapped_column(String(255), nullable=False)
    event_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    max_participants: Mapped[int | None] = mapped_column(Integer, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    registrations: Mapped[list[Registration]] = relationship(
        "Registration", back_populates="event", cascade="all, delete-orphan"
    )

    def __init__(
        self,
        title: str,
        venue: str,
        event_date: datetime,
        created_by_id: str,
        id: str | None = None,
        description: str = "",
        max_participants: int | None = None,
        image_url: str | None = None,
        status: str | None = None,
        rejection_reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.title = title
        self.description = description
        self.venue = venue
        self.event_date = event_date
        self.created_by_id = created_by_id
        self.max_participants = max_participants
        self.image_url = image_url
        self.status = status if status is not None else EventStatus.PENDING.value
        self.rejection_reason = rejection_reason

    @property
    def event_status(self) -> EventStatus:
        """Get status as EventStatus enum."""
        return EventStatus(self.status)

    @property
    def has_capacity_limit(self) -> bool:
        """Whether the event declares a maximum participant count."""
        return self.max_participants is not None

    def __repr__(self) -> str:
        return f"<Event(id={self.id!r}, title={self.title!r}, status={self.status!r})>"


class Registration(Base):
    """Registration model - binds one user to one event."""

    __tablename__ = "registrations"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_registration_event_user"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    event_id: Mapped[str] = mapped_column(String(36), ForeignKey("events.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    registered_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Relationships
    event: Mapped[Event] = relationship("Event", back_populates="registrations")

    def __init__(
        self,
        event_id: str,
        user_id: str,
        id: str | None = None,
        status: str | None = None,
        registered_at: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.event_id = event_id
        self.user_id = user_id
        self.status = status if status is not None else RegistrationStatus.PENDING.value
        self.registered_at = registered_at if registered_at is not None else utc_now()

    @property
    def registration_status(self) -> RegistrationStatus:
        """Get status as RegistrationStatus enum."""
        return RegistrationStatus(self.status)

    @registration_status.setter
    def registration_status(self, value: RegistrationStatus) -> None:
        """Set status from RegistrationStatus enum."""
        self.status = value.value

    def __repr__(self) -> str:
        return (
            f"<Registration(id={self.id!r}, event_id={self.event_id!r}, "
            f"user_id={self.user_id!r}, status={self.status!r})>"
        )
