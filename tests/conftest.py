"""Shared pytest fixtures and configuration."""

from collections.abc import Callable
from datetime import timedelta

import pytest

from campusevents.datastore import Datastore, Event, Role, User, utc_now

# Cheap placeholder; tests that exercise login hash real passwords
PLACEHOLDER_HASH = "not-a-real-hash"


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def store():
    """Create an in-memory Datastore."""
    s = Datastore(":memory:")
    yield s
    s.close()


@pytest.fixture
def make_user(store: Datastore) -> Callable[..., User]:
    """Factory that persists users with unique usernames and emails."""
    counter = {"n": 0}

    def _make(username: str | None = None, role: Role = Role.STUDENT, **kwargs) -> User:
        counter["n"] += 1
        name = username or f"user{counter['n']}"
        return store.create_user(
            username=name,
            email=kwargs.pop("email", f"{name}@campus.edu"),
            password_hash=kwargs.pop("password_hash", PLACEHOLDER_HASH),
            full_name=kwargs.pop("full_name", name.title()),
            role=role,
            **kwargs,
        )

    return _make


@pytest.fixture
def student(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture
def other_student(make_user: Callable[..., User]) -> User:
    return make_user("bob")


@pytest.fixture
def admin(make_user: Callable[..., User]) -> User:
    return make_user("root", role=Role.ADMIN)


@pytest.fixture
def make_event(store: Datastore, admin: User) -> Callable[..., Event]:
    """Factory that persists events one week in the future."""

    def _make(max_participants: int | None = None, creator: User | None = None, **kwargs) -> Event:
        return store.create_event(
            title=kwargs.pop("title", "Hackathon"),
            venue=kwargs.pop("venue", "Main Hall"),
            event_date=kwargs.pop("event_date", utc_now() + timedelta(days=7)),
            created_by_id=(creator or admin).id,
            max_participants=max_participants,
            **kwargs,
        )

    return _make
