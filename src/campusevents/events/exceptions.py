"""Exceptions for the Event component."""


class EventError(Exception):
    """Base exception for event errors."""

    pass


class InvalidEventError(EventError, ValueError):
    """Event data violates a scheduling or capacity rule."""

    pass
