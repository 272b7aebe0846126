"""
Service layer helpers that orchestrate the booking ledger and domain models.
"""

from .create_appointment import CreateAppointmentCommand

__all__ = ["CreateAppointmentCommand"]
