"""Custom exceptions for the Datastore."""


class DatastoreError(Exception):
    """Base exception for Datastore errors."""


class StorageError(DatastoreError):
    """Underlying database operation failed."""


class NotFoundError(DatastoreError):
    """Entity with given ID does not exist."""


class UserNotFoundError(NotFoundError):
    """User with given ID or username does not exist."""


class EventNotFoundError(NotFoundError):
    """Event with given ID does not exist."""


class RegistrationNotFoundError(NotFoundError):
    """Registration with given ID does not exist."""


class UserExistsError(DatastoreError):
    """User with given username or email already exists."""


class DuplicateRegistrationError(DatastoreError):
    """User is already registered for this event."""
