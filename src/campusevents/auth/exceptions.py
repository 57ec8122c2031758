"""Exceptions for the Auth module."""


class AuthError(Exception):
    """Base exception for authentication and authorization errors."""

    pass


class UnauthorizedError(AuthError):
    """Acting user lacks the required role or ownership."""

    pass


class NotAuthenticatedError(AuthError):
    """No user is logged in for this request."""

    pass
