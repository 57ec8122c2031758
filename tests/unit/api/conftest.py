"""Fixtures for route tests: a bare app wired to an in-memory Datastore."""

from collections.abc import Callable
from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from campusevents.api.app import register_exception_handlers
from campusevents.api.dependencies import Services, get_services
from campusevents.api.routes import auth, events, registrations, users
from campusevents.datastore import Datastore, Event, User, utc_now

PASSWORDS = {
    "alice": "wonderland",
    "bob": "builder-bob",
    "root": "supersecret",
}


@pytest.fixture
def services(store: Datastore) -> Services:
    """Service graph with a cheap bcrypt cost."""
    return Services.build(store, bcrypt_rounds=4)


@pytest.fixture
def app(services: Services) -> FastAPI:
    """Create a test FastAPI app with the service graph overridden."""
    app = FastAPI()
    app.add_middleware(SessionMiddleware, secret_key="test-secret")

    def override_get_services():
        yield services

    app.dependency_overrides[get_services] = override_get_services
    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(events.router, prefix="/api/v1")
    app.include_router(registrations.router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api/v1")
    return app


@pytest.fixture
def client(app: FastAPI):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def alice(services: Services) -> User:
    return services.auth.register_user(
        "alice", "alice@campus.edu", PASSWORDS["alice"], "Alice Liddell", department="Math"
    )


@pytest.fixture
def bob(services: Services) -> User:
    return services.auth.register_user("bob", "bob@campus.edu", PASSWORDS["bob"], "Bob Builder")


@pytest.fixture
def root(services: Services) -> User:
    return services.auth.create_admin("root", "root@campus.edu", PASSWORDS["root"], "Root")


@pytest.fixture
def login(client: TestClient) -> Callable[[User], None]:
    """Log the client in as a user, replacing any previous session."""

    def _login(user: User) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"username": user.username, "password": PASSWORDS[user.username]},
        )
        assert response.status_code == 200

    return _login


@pytest.fixture
def seminar(services: Services, alice: User) -> Event:
    """An alice-owned event with two seats."""
    return services.events.create_event(
        alice,
        title="Seminar",
        venue="Room 101",
        event_date=utc_now() + timedelta(days=3),
        max_participants=2,
    )
