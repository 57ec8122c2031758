"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from campusevents.auth import AuthService, DictSession, RequestContext
from campusevents.auth.passwords import DEFAULT_ROUNDS
from campusevents.datastore import Datastore
from campusevents.events import EventService
from campusevents.registrations import EventLocks, RegistrationWorkflow


@dataclass
class Services:
    """Service graph built around one Datastore."""

    datastore: Datastore
    auth: AuthService
    events: EventService
    registrations: RegistrationWorkflow

    @classmethod
    def build(cls, datastore: Datastore, bcrypt_rounds: int = DEFAULT_ROUNDS) -> Services:
        """Wire services so events and registrations share one lock registry."""
        locks = EventLocks()
        return cls(
            datastore=datastore,
            auth=AuthService(datastore, bcrypt_rounds=bcrypt_rounds),
            events=EventService(datastore, locks=locks),
            registrations=RegistrationWorkflow(datastore, locks=locks),
        )

    def close(self) -> None:
        self.datastore.close()


# Global Services instance (initialized on app startup)
_services: Services | None = None


def init_services(
    db_path: str = "campusevents.db", bcrypt_rounds: int = DEFAULT_ROUNDS
) -> Services:
    """Initialize the global Services instance."""
    global _services  # noqa: PLW0603
    _services = Services.build(Datastore(db_path), bcrypt_rounds=bcrypt_rounds)
    return _services


def close_services() -> None:
    """Close the global Services instance."""
    global _services  # noqa: PLW0603
    if _services is not None:
        _services.close()
        _services = None


def get_services() -> Generator[Services, None, None]:
    """Dependency that provides the Services instance."""
    if _services is None:
        raise RuntimeError("Services not initialized. Call init_services() first.")
    yield _services


ServicesDep = Annotated[Services, Depends(get_services)]


def get_auth_service(services: ServicesDep) -> AuthService:
    """Dependency that provides the AuthService."""
    return services.auth


def get_event_service(services: ServicesDep) -> EventService:
    """Dependency that provides the EventService."""
    return services.events


def get_registration_workflow(services: ServicesDep) -> RegistrationWorkflow:
    """Dependency that provides the RegistrationWorkflow."""
    return services.registrations


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
EventServiceDep = Annotated[EventService, Depends(get_event_service)]
WorkflowDep = Annotated[RegistrationWorkflow, Depends(get_registration_workflow)]


def get_session_store(request: Request) -> DictSession:
    """Dependency that wraps the signed-cookie session."""
    return DictSession(request.session)


SessionDep = Annotated[DictSession, Depends(get_session_store)]


def get_request_context(session: SessionDep, auth: AuthServiceDep) -> RequestContext:
    """Dependency that resolves the current user for this request."""
    return RequestContext(user=auth.current_user(session))


ContextDep = Annotated[RequestContext, Depends(get_request_context)]
