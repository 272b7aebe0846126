"""
Application service for booking appointments.

The command coordinates the availability check and the reservation against a
shared ``BookingLedger``. It holds a reference to the ledger but does not own
it, so several command instances can book against the same state.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..domain.booking_ledger import BookingLedger
from ..domain.exceptions import InvalidArgumentError
from ..domain.models import Appointment, AppointmentRequest, AppointmentResponse

logger = logging.getLogger(__name__)


class CreateAppointmentCommand:
    """
    Orchestrates ledger check, reservation and appointment creation.

    The check and the booking run inside ``ledger.reservation`` so that at
    most one concurrent caller can take a given slot.
    """

    def __init__(self, ledger: BookingLedger) -> None:
        self._ledger = ledger

    def execute(self, request: Optional[AppointmentRequest]) -> AppointmentResponse:
        """
        Try to book the requested slot for the client.

        Returns:
            A booked response carrying the new appointment, or a rejected
            response if the slot is already taken

        Raises:
            InvalidArgumentError: If request is None
        """
        if request is None:
            raise InvalidArgumentError("request must not be None")

        slot = request.slot

        with self._ledger.reservation(slot.resource_id):
            if self._ledger.is_booked(slot.resource_id, slot):
                logger.info("Slot %s unavailable for client %s", slot, request.client_id)
                return AppointmentResponse.rejected()

            self._ledger.book(slot.resource_id, slot)

        appointment = Appointment(slot=slot, client_id=request.client_id)
        logger.info("Booked %s for client %s", slot, request.client_id)

        return AppointmentResponse.booked(appointment)

    def execute_many(
        self,
        requests: Iterable[AppointmentRequest],
    ) -> List[AppointmentResponse]:
        """Execute requests in order, returning one response per request."""
        return [self.execute(request) for request in requests]
