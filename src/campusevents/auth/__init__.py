"""Auth - identity resolution, credentials and role checks."""

from campusevents.auth.context import RequestContext, is_admin, is_student, require_admin
from campusevents.auth.exceptions import AuthError, NotAuthenticatedError, UnauthorizedError
from campusevents.auth.passwords import hash_password, verify_password
from campusevents.auth.service import AuthService
from campusevents.auth.session import (
    USER_ROLE_KEY,
    USER_SESSION_KEY,
    DictSession,
    SessionStore,
)

__all__ = [
    "USER_ROLE_KEY",
    "USER_SESSION_KEY",
    "AuthError",
    "AuthService",
    "DictSession",
    "NotAuthenticatedError",
    "RequestContext",
    "SessionStore",
    "UnauthorizedError",
    "hash_password",
    "is_admin",
    "is_student",
    "require_admin",
    "verify_password",
]
