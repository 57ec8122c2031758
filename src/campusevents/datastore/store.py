"""Datastore - Main API for persistence of users, events and registrations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError

from campusevents.datastore.database import Database
from campusevents.datastore.exceptions import (
    DuplicateRegistrationError,
    EventNotFoundError,
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
)

if TYPE_CHECKING:
    from datetime import datetime


class Datastore:
    """Main API for Datastore operations.

    Provides CRUD and query operations for Users, Events, and Registrations.
    Every call runs in its own short-lived session; returned objects are
    detached and safe to read after the call.
    """

    def __init__(self, db_path: str = "campusevents.db") -> None:
        """Initialize the Datastore with a SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file

        Raises:
            StorageError: If the database cannot be opened or initialized
        """
        self._db = Database(db_path)
        try:
            self._db.create_tables()
        except StorageError:
            self._db.close()
            raise

    @property
    def database(self) -> Database:
        """The underlying connection manager."""
        return self._db

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- User Operations ---

    def create_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        full_name: str,
        role: Role = Role.STUDENT,
        department: str | None = None,
        student_id: str | None = None,
        year: int | None = None,
    ) -> User:
        """Create a new user.

        Args:
            username: Unique login name
            email: Unique email address
            password_hash: Hashed credential (never plaintext)
            full_name: Display name
            role: Initial role
            department: Department (optional)
            student_id: Student number (optional)
            year: Year of study (optional)

        Returns:
            Created User object with generated ID

        Raises:
            UserExistsError: If username or email is already taken
        """
        with self._db.session_scope() as session:
            stmt = select(User).where(or_(User.username == username, User.email == email))
            existing = session.execute(stmt).scalars().first()
            if existing is not None:
                field = "username" if existing.username == username else "email"
                raise UserExistsError(f"User with {field} already exists")

            user = User(
                username=username,
                email=email,
                password_hash=password_hash,
                full_name=full_name,
                role=role.value,
                department=department,
                student_id=student_id,
                year=year,
            )
            session.add(user)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise UserExistsError(f"User '{username}' already exists") from e
            session.refresh(user)
            return user

    def get_user(self, user_id: str) -> User:
        """Get user by ID.

        Raises:
            UserNotFoundError: If user doesn't exist
        """
        with self._db.session_scope() as session:
            user = session.get(User, user_id)
            if user is None:
                raise UserNotFoundError(f"User with id '{user_id}' not found")
            return user

    def get_user_by_username(self, username: str) -> User:
        """Get user by username.

        Raises:
            UserNotFoundError: If no user has this username
        """
        with self._db.session_scope() as session:
            stmt = select(User).where(User.username == username)
            user = session.execute(stmt).scalar_one_or_none()
            if user is None:
                raise UserNotFoundError(f"User with username '{username}' not found")
            return user

    def get_user_by_email(self, email: str) -> User:
        """Get user by email.

        Raises:
            UserNotFoundError: If no user has this email
        """
        with self._db.session_scope() as session:
            stmt = select(User).where(User.email == email)
            user = session.execute(stmt).scalar_one_or_none()
            if user is None:
                raise UserNotFoundError(f"User with email '{email}' not found")
            return user

    def list_users(self) -> list[User]:
        """List all users, ordered by username."""
        with self._db.session_scope() as session:
            stmt = select(User).order_by(User.username)
            return list(session.execute(stmt).scalars().all())

    def list_departments(self) -> list[str]:
        """List distinct non-empty departments, sorted."""
        with self._db.session_scope() as session:
            stmt = (
                select(User.department)
                .where(User.department.is_not(None), User.department != "")
                .distinct()
                .order_by(User.department)
            )
            return list(session.execute(stmt).scalars().all())

    def update_user(
        self,
        user_id: str,
        role: Role | None = None,
        active: bool | None = None,
    ) -> User:
        """Update user role and/or active flag. Only provided fields are updated.

        Raises:
            UserNotFoundError: If user doesn't exist
        """
        with self._db.session_scope() as session:
            user = session.get(User, user_id)
            if user is None:
                raise UserNotFoundError(f"User with id '{user_id}' not found")

            if role is not None:
                user.role = role.value
            if active is not None:
                user.active = active

            session.commit()
            session.refresh(user)
            return user

    # --- Event Operations ---

    def create_event(
        self,
        title: str,
        venue: str,
        event_date: datetime,
        created_by_id: str,
        description: str = "",
        max_participants: int | None = None,
        image_url: str | None = None,
    ) -> Event:
        """Create a new event.

        Args:
            title: Event title
            venue: Where the event takes place
            event_date: Scheduled date-time (naive UTC)
            created_by_id: ID of the owning user
            description: Free-form description
            max_participants: Capacity, None for unlimited
            image_url: Image location (optional)

        Returns:
            Created Event object with generated ID

        Raises:
            UserNotFoundError: If creator doesn't exist
        """
        with self._db.session_scope() as session:
            if session.get(User, created_by_id) is None:
                raise UserNotFoundError(f"User with id '{created_by_id}' not found")

            event = Event(
                title=title,
                venue=venue,
                event_date=event_date,
                created_by_id=created_by_id,
                description=description,
                max_participants=max_participants,
                image_url=image_url,
            )
            session.add(event)
            session.commit()
            session.refresh(event)
            return event

    def get_event(self, event_id: str) -> Event:
        """Get event by ID.

        Raises:
            EventNotFoundError: If event doesn't exist
        """
        with self._db.session_scope() as session:
            event = session.get(Event, event_id)
            if event is None:
                raise EventNotFoundError(f"Event with id '{event_id}' not found")
            return event

    def list_events(
        self,
        status: EventStatus | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        created_by_id: str | None = None,
    ) -> list[Event]:
        """List events with optional filters.

        Args:
            status: Filter by moderation status (optional)
            start: Only events scheduled at or after this time (optional)
            end: Only events scheduled at or before this time (optional)
            created_by_id: Filter by creator (optional)

        Returns:
            List of events, ordered by event_date ascending
        """
        with self._db.session_scope() as session:
            stmt = select(Event)

            if status is not None:
                stmt = stmt.where(Event.status == status.value)
            if start is not None:
                stmt = stmt.where(Event.event_date >= start)
            if end is not None:
                stmt = stmt.where(Event.event_date <= end)
            if created_by_id is not None:
                stmt = stmt.where(Event.created_by_id == created_by_id)

            stmt = stmt.order_by(Event.event_date)
            return list(session.execute(stmt).scalars().all())

    def update_event(
        self,
        event_id: str,
        title: str | None = None,
        description: str | None = None,
        venue: str | None = None,
        event_date: datetime | None = None,
        max_participants: int | None = None,
        image_url: str | None = None,
        status: EventStatus | None = None,
        rejection_reason: str | None = None,
    ) -> Event:
        """Update event fields. Only provided fields are updated.

        Raises:
            EventNotFoundError: If event doesn't exist
        """
        with self._db.session_scope() as session:
            event = session.get(Event, event_id)
            if event is None:
                raise EventNotFoundError(f"Event with id '{event_id}' not found")

            if title is not None:
                event.title = title
            if description is not None:
                event.description = description
            if venue is not None:
                event.venue = venue
            if event_date is not None:
                event.event_date = event_date
            if max_participants is not None:
                event.max_participants = max_participants
            if image_url is not None:
                event.image_url = image_url
            if status is not None:
                event.status = status.value
            if rejection_reason is not None:
                event.rejection_reason = rejection_reason

            session.commit()
            session.refresh(event)
            return event

    def delete_event(self, event_id: str) -> None:
        """Delete an event together with its registrations.

        Raises:
            EventNotFoundError: If event doesn't exist
        """
        with self._db.session_scope() as session:
            event = session.get(Event, event_id)
            if event is None:
                raise EventNotFoundError(f"Event with id '{event_id}' not found")

            session.delete(event)
            session.commit()

    # --- Registration Operations ---

    def add_registration(
        self,
        event_id: str,
        user_id: str,
        registered_at: datetime,
        status: RegistrationStatus = RegistrationStatus.PENDING,
    ) -> Registration:
        """Insert a registration row.

        Performs no capacity check; callers enforce business rules.

        Raises:
            EventNotFoundError: If event doesn't exist
            UserNotFoundError: If user doesn't exist
            DuplicateRegistrationError: If the (event, user) pair already exists
        """
        with self._db.session_scope() as session:
            if session.get(Event, event_id) is None:
                raise EventNotFoundError(f"Event with id '{event_id}' not found")
            if session.get(User, user_id) is None:
                raise UserNotFoundError(f"User with id '{user_id}' not found")

            registration = Registration(
                event_id=event_id,
                user_id=user_id,
                status=status.value,
                registered_at=registered_at,
            )
            session.add(registration)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise DuplicateRegistrationError(
                    f"User '{user_id}' is already registered for event '{event_id}'"
                ) from e
            session.refresh(registration)
            return registration

    def get_registration(self, registration_id: str) -> Registration:
        """Get registration by ID.

        Raises:
            RegistrationNotFoundError: If registration doesn't exist
        """
        with self._db.session_scope() as session:
            registration = session.get(Registration, registration_id)
            if registration is None:
                raise RegistrationNotFoundError(
                    f"Registration with id '{registration_id}' not found"
                )
            return registration

    def find_registration(self, event_id: str, user_id: str) -> Registration | None:
        """Find the registration for an (event, user) pair, if any."""
        with self._db.session_scope() as session:
            stmt = select(Registration).where(
                Registration.event_id == event_id,
                Registration.user_id == user_id,
            )
            return session.execute(stmt).scalar_one_or_none()

    def count_registrations(self, event_id: str) -> int:
        """Count registrations for an event, regardless of status."""
        with self._db.session_scope() as session:
            stmt = select(func.count(Registration.id)).where(Registration.event_id == event_id)
            return session.execute(stmt).scalar_one()

    def list_registrations(
        self,
        event_id: str | None = None,
        user_id: str | None = None,
        status: RegistrationStatus | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Registration]:
        """List registrations with optional filters.

        Args:
            event_id: Filter by event (optional)
            user_id: Filter by user (optional)
            status: Filter by status (optional)
            start: Registered at or after (optional, inclusive)
            end: Registered at or before (optional, inclusive)

        Returns:
            List of registrations, ordered by registered_at ascending
        """
        with self._db.session_scope() as session:
            stmt = select(Registration)

            if event_id is not None:
                stmt = stmt.where(Registration.event_id == event_id)
            if user_id is not None:
                stmt = stmt.where(Registration.user_id == user_id)
            if status is not None:
                stmt = stmt.where(Registration.status == status.value)
            if start is not None:
                stmt = stmt.where(Registration.registered_at >= start)
            if end is not None:
                stmt = stmt.where(Registration.registered_at <= end)

            stmt = stmt.order_by(Registration.registered_at)
            return list(session.execute(stmt).scalars().all())

    def list_registrations_between(self, start: datetime, end: datetime) -> list[Registration]:
        """List registrations whose registered_at lies in the closed interval [start, end]."""
        return self.list_registrations(start=start, end=end)

    def update_registration_status(
        self, registration_id: str, status: RegistrationStatus
    ) -> Registration:
        """Set a registration's status.

        Raises:
            RegistrationNotFoundError: If registration doesn't exist
        """
        with self._db.session_scope() as session:
            registration = session.get(Registration, registration_id)
            if registration is None:
                raise RegistrationNotFoundError(
                    f"Registration with id '{registration_id}' not found"
                )

            registration.registration_status = status
            session.commit()
            session.refresh(registration)
            return registration

    def delete_registration(self, registration_id: str) -> None:
        """Delete a registration.

        Raises:
            RegistrationNotFoundError: If registration doesn't exist
        """
        with self._db.session_scope() as session:
            registration = session.get(Registration, registration_id)
            if registration is None:
                raise RegistrationNotFoundError(
                    f"Registration with id '{registration_id}' not found"
                )

            session.delete(registration)
            session.commit()
