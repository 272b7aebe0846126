"""
Domain-specific exception hierarchy for the stylist booking application.

A slot that is already taken is not an error here: it is reported through
``AppointmentResponse.success``.
"""


class BookingError(Exception):
    """Base class for all application-level errors."""


class InvalidArgumentError(BookingError, ValueError):
    """Raised when a required argument, such as the booking request, is missing."""


class StylistNotFoundError(BookingError, KeyError):
    """Raised when a stylist identifier cannot be resolved by the directory."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ConfigError(BookingError):
    """Raised when configuration values cannot be turned into runtime objects."""
