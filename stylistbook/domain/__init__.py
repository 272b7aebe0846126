"""
Domain layer - Pure booking logic without external dependencies.
"""

from .booking_ledger import (
    BookingLedger,
    GlobalBookingLedger,
    PerStylistBookingLedger,
    create_ledger,
)
from .exceptions import BookingError, InvalidArgumentError, StylistNotFoundError
from .models import Appointment, AppointmentRequest, AppointmentResponse, Slot, Stylist

__all__ = [
    "Appointment",
    "AppointmentRequest",
    "AppointmentResponse",
    "BookingError",
    "BookingLedger",
    "GlobalBookingLedger",
    "InvalidArgumentError",
    "PerStylistBookingLedger",
    "Slot",
    "Stylist",
    "StylistNotFoundError",
    "create_ledger",
]
