"""
Booking ledgers: the single source of truth for which slots are taken.

Two partitioning strategies are provided. Both behave identically for the
appointment command; they only differ in how the booked set is stored and
which bookings contend for the same lock.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import Lock, RLock
from typing import Dict, Iterator, List, Optional, Protocol, Set

from .exceptions import ConfigError
from .models import Slot

logger = logging.getLogger(__name__)


GLOBAL = "global"
PER_STYLIST = "per_stylist"
PARTITIONING_STRATEGIES = (GLOBAL, PER_STYLIST)


class BookingLedger(Protocol):
    """Protocol describing the ledger behaviour needed by the appointment command."""

    def is_booked(self, resource_id: str, slot: Slot) -> bool:
        """Return True if this exact slot has been booked."""

    def book(self, resource_id: str, slot: Slot) -> None:
        """Record the slot as booked."""

    def reservation(self, resource_id: str):
        """Context manager that makes an is_booked/book pair atomic."""

    def booked_slots(self, resource_id: Optional[str] = None) -> List[Slot]:
        """Return a snapshot of booked slots."""

    def __len__(self) -> int:
        ...


def _sorted(slots) -> List[Slot]:
    # Naive and aware datetimes cannot be compared directly; epoch seconds can.
    return sorted(
        slots,
        key=lambda s: (s.resource_id, s.start.timestamp(), s.end.timestamp()),
    )


class GlobalBookingLedger:
    """
    One set of slots shared by every stylist, behind a single lock.

    Membership is keyed on the full slot, so two stylists can hold the same
    time range without colliding.
    """

    def __init__(self) -> None:
        self._slots: Set[Slot] = set()
        self._lock = RLock()

    @contextmanager
    def reservation(self, resource_id: str) -> Iterator[None]:
        with self._lock:
            yield

    def is_booked(self, resource_id: str, slot: Slot) -> bool:
        with self._lock:
            return slot in self._slots

    def book(self, resource_id: str, slot: Slot) -> None:
        with self._lock:
            self._slots.add(slot)
        logger.debug("Booked %s in global ledger", slot)

    def booked_slots(self, resource_id: Optional[str] = None) -> List[Slot]:
        with self._lock:
            slots = [
                slot for slot in self._slots
                if resource_id is None or slot.resource_id == resource_id
            ]
        return _sorted(slots)

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)


class PerStylistBookingLedger:
    """
    A separate slot set and lock per stylist.

    Buckets are created on first use. Bookings for different stylists never
    wait on each other; only bucket creation is serialized.
    """

    def __init__(self) -> None:
        self._buckets: Dict[str, Set[Slot]] = {}
        self._locks: Dict[str, RLock] = {}
        self._registry_lock = Lock()

    def _bucket(self, resource_id: str) -> Set[Slot]:
        with self._registry_lock:
            bucket = self._buckets.get(resource_id)
            if bucket is None:
                bucket = self._buckets[resource_id] = set()
                self._locks[resource_id] = RLock()
            return bucket

    def _lock_for(self, resource_id: str) -> RLock:
        self._bucket(resource_id)
        with self._registry_lock:
            return self._locks[resource_id]

    @contextmanager
    def reservation(self, resource_id: str) -> Iterator[None]:
        with self._lock_for(resource_id):
            yield

    def is_booked(self, resource_id: str, slot: Slot) -> bool:
        bucket = self._bucket(resource_id)
        with self._lock_for(resource_id):
            return slot in bucket

    def book(self, resource_id: str, slot: Slot) -> None:
        bucket = self._bucket(resource_id)
        with self._lock_for(resource_id):
            bucket.add(slot)
        logger.debug("Booked %s in bucket %s", slot, resource_id)

    def booked_slots(self, resource_id: Optional[str] = None) -> List[Slot]:
        with self._registry_lock:
            if resource_id is None:
                resource_ids = list(self._buckets)
            elif resource_id in self._buckets:
                resource_ids = [resource_id]
            else:
                resource_ids = []

        slots: List[Slot] = []
        for rid in resource_ids:
            with self._lock_for(rid):
                slots.extend(self._buckets[rid])
        return _sorted(slots)

    def __len__(self) -> int:
        with self._registry_lock:
            resource_ids = list(self._buckets)

        total = 0
        for rid in resource_ids:
            with self._lock_for(rid):
                total += len(self._buckets[rid])
        return total


def create_ledger(partitioning: str = PER_STYLIST) -> BookingLedger:
    """
    Build a ledger for the given partitioning strategy.

    Raises:
        ConfigError: If the strategy is unknown
    """
    if partitioning == GLOBAL:
        return GlobalBookingLedger()
    if partitioning == PER_STYLIST:
        return PerStylistBookingLedger()
    raise ConfigError(
        f"Unknown ledger partitioning '{partitioning}'. "
        f"Expected one of: {', '.join(PARTITIONING_STRATEGIES)}"
    )
