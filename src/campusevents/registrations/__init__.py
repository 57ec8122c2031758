"""Registrations - capacity-limited event sign-up workflow."""

from campusevents.registrations.exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    InvalidStatusError,
    RegistrationError,
)
from campusevents.registrations.workflow import EventLocks, RegistrationWorkflow

__all__ = [
    "CapacityExceededError",
    "DuplicateRegistrationError",
    "EventLocks",
    "InvalidStatusError",
    "RegistrationError",
    "RegistrationWorkflow",
]
