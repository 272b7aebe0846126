"""
Domain models for slots and appointments.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from pendulum import DateTime


@dataclass(frozen=True)
class Slot:
    """
    Represents an immutable bookable time window for one stylist.

    Two slots are the same booking target iff resource, start and end all
    match. A slot is atomic: no overlap checks are done against other slots.
    """
    start: DateTime
    end: DateTime
    resource_id: str

    @property
    def key(self) -> Tuple[str, DateTime, DateTime]:
        """(resource_id, start, end) tuple identifying the booking target."""
        return (self.resource_id, self.start, self.end)

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def __str__(self) -> str:
        return (
            f"{self.resource_id}: "
            f"{self.start.strftime('%d.%m.%Y %H:%M')} - {self.end.strftime('%H:%M')}"
        )


@dataclass(frozen=True)
class AppointmentRequest:
    """A client's request to book a slot."""
    slot: Slot
    client_id: str


@dataclass(frozen=True)
class Appointment:
    """
    Confirmed booking binding a slot to a client.

    Only created by a successful booking.
    """
    slot: Slot
    client_id: str


@dataclass(frozen=True)
class AppointmentResponse:
    """
    Outcome of a booking attempt.

    Invariant: appointment is present iff success is True.
    """
    success: bool
    appointment: Optional[Appointment] = None

    def __post_init__(self):
        if self.success and self.appointment is None:
            raise ValueError("A successful response must carry an appointment")
        if not self.success and self.appointment is not None:
            raise ValueError("A rejected response must not carry an appointment")

    @classmethod
    def booked(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(success=True, appointment=appointment)

    @classmethod
    def rejected(cls) -> "AppointmentResponse":
        return cls(success=False)


@dataclass(frozen=True)
class Stylist:
    """Minimal identity record for a bookable stylist."""
    id: str
    name: str

    def display_name(self) -> str:
        """Get display name."""
        return self.name
