"""Exceptions for the Registration workflow."""

from campusevents.datastore.exceptions import DuplicateRegistrationError


class RegistrationError(Exception):
    """Base exception for registration workflow errors."""

    pass


class CapacityExceededError(RegistrationError):
    """Event has reached its maximum number of participants."""

    pass


class InvalidStatusError(RegistrationError, ValueError):
    """Requested status is not a recognized registration status."""

    pass


__all__ = [
    "CapacityExceededError",
    "DuplicateRegistrationError",
    "InvalidStatusError",
    "RegistrationError",
]
