"""
Tests for the booking ledgers.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pendulum
import pytest

from stylistbook.domain.booking_ledger import (
    GlobalBookingLedger,
    PerStylistBookingLedger,
    create_ledger,
)
from stylistbook.domain.exceptions import ConfigError
from stylistbook.domain.models import Slot


def _slot(resource_id="R1", hour=10) -> Slot:
    start = pendulum.datetime(2024, 6, 1, hour, 0, tz="Europe/Berlin")
    return Slot(start=start, end=start.add(hours=1), resource_id=resource_id)


@pytest.fixture(params=[GlobalBookingLedger, PerStylistBookingLedger], ids=["global", "per_stylist"])
def ledger(request):
    return request.param()


class TestBookingLedger:
    """Behaviour shared by both partitioning strategies."""

    def test_empty_ledger(self, ledger):
        """A fresh ledger has nothing booked."""
        assert not ledger.is_booked("R1", _slot())
        assert len(ledger) == 0
        assert ledger.booked_slots() == []

    def test_book_marks_slot_booked(self, ledger):
        ledger.book("R1", _slot())

        assert ledger.is_booked("R1", _slot())
        assert len(ledger) == 1

    def test_book_is_idempotent(self, ledger):
        """Booking the same slot twice stores it once and does not raise."""
        ledger.book("R1", _slot())
        ledger.book("R1", _slot())

        assert len(ledger) == 1
        assert ledger.booked_slots() == [_slot()]

    def test_same_time_different_stylist_is_free(self, ledger):
        ledger.book("R1", _slot("R1"))

        assert not ledger.is_booked("R2", _slot("R2"))

    def test_different_time_same_stylist_is_free(self, ledger):
        ledger.book("R1", _slot(hour=10))

        assert not ledger.is_booked("R1", _slot(hour=11))

    def test_booked_slots_filtered_and_sorted(self, ledger):
        ledger.book("R2", _slot("R2", hour=9))
        ledger.book("R1", _slot("R1", hour=12))
        ledger.book("R1", _slot("R1", hour=10))

        assert ledger.booked_slots("R1") == [_slot("R1", hour=10), _slot("R1", hour=12)]
        assert ledger.booked_slots("R3") == []
        assert len(ledger.booked_slots()) == 3

    def test_reservation_is_reentrant(self, ledger):
        """is_booked and book can be called while holding the reservation."""
        with ledger.reservation("R1"):
            assert not ledger.is_booked("R1", _slot())
            ledger.book("R1", _slot())

        assert ledger.is_booked("R1", _slot())

    def test_naive_and_aware_slots_for_one_stylist(self, ledger):
        """Mixing naive and aware timestamps does not break counting or listing."""
        naive = Slot(start=datetime(2024, 6, 1, 10), end=datetime(2024, 6, 1, 11), resource_id="R1")
        aware = _slot("R1", hour=12)

        ledger.book("R1", naive)
        ledger.book("R1", aware)

        assert len(ledger) == 2
        assert set(ledger.booked_slots("R1")) == {naive, aware}
        assert len(ledger.booked_slots()) == 2

    def test_concurrent_books_of_distinct_slots(self, ledger):
        """Every distinct slot booked from many threads ends up in the ledger."""
        slots = [_slot(f"R{i % 5}", hour=i % 24) for i in range(100)]

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda s: ledger.book(s.resource_id, s), slots))

        assert len(ledger) == len(set(slots))


class TestCreateLedger:
    """Tests for the ledger factory."""

    def test_global(self):
        assert isinstance(create_ledger("global"), GlobalBookingLedger)

    def test_per_stylist(self):
        assert isinstance(create_ledger("per_stylist"), PerStylistBookingLedger)

    def test_default_is_per_stylist(self):
        assert isinstance(create_ledger(), PerStylistBookingLedger)

    def test_unknown_partitioning_raises(self):
        with pytest.raises(ConfigError, match="Unknown ledger partitioning"):
            create_ledger("per_salon")
