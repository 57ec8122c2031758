"""Role predicates and the request-scoped identity context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from campusevents.auth.exceptions import NotAuthenticatedError, UnauthorizedError
from campusevents.datastore.models import Role

if TYPE_CHECKING:
    from campusevents.datastore.models import User


def is_admin(user: User) -> bool:
    """Whether the user holds the ADMIN role."""
    return user.role == Role.ADMIN.value


def is_student(user: User) -> bool:
    """Whether the user holds the STUDENT role."""
    return user.role == Role.STUDENT.value


def require_admin(user: User, action: str) -> None:
    """Raise UnauthorizedError unless user is an admin.

    Args:
        user: The acting user.
        action: Short description used in the error message.
    """
    if not is_admin(user):
        raise UnauthorizedError(f"Only admins can {action}")


@dataclass(frozen=True)
class RequestContext:
    """Identity resolved for one request.

    Built by the caller from its session and passed explicitly to services.
    """

    user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def require_user(self) -> User:
        """Return the current user or raise NotAuthenticatedError."""
        if self.user is None:
            raise NotAuthenticatedError("Not authenticated")
        return self.user

    def require_admin(self) -> User:
        """Return the current user if they are an admin.

        Raises:
            NotAuthenticatedError: If nobody is logged in.
            UnauthorizedError: If the user is not an admin.
        """
        user = self.require_user()
        require_admin(user, "perform this action")
        return user
