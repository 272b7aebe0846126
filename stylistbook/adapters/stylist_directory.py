"""
Stylist directory: resolves stylist identifiers to identity records.

The booking core never needs this; it works on the resource id carried by the
slot. Front ends use it to turn names into ids and ids into display names.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Optional, Protocol

from ..config import AppConfig
from ..domain.exceptions import StylistNotFoundError
from ..domain.models import Stylist

logger = logging.getLogger(__name__)


class StylistDirectoryProtocol(Protocol):
    """Protocol describing the directory lookup used by integrations."""

    def get_by_id(self, stylist_id: str) -> Stylist:
        """Return the stylist for an id or raise StylistNotFoundError."""

    def resolve(self, identifier: str) -> Stylist:
        """Return the stylist for an id or name or raise StylistNotFoundError."""


class InMemoryStylistDirectory:
    """Directory backed by a fixed list of stylists, usually from config."""

    def __init__(self, stylists: Iterable[Stylist]) -> None:
        self._by_id: Dict[str, Stylist] = {}
        for stylist in stylists:
            self._by_id[stylist.id] = stylist

    @classmethod
    def from_config(cls, config: AppConfig) -> "InMemoryStylistDirectory":
        return cls(Stylist(id=entry.id, name=entry.name) for entry in config.stylists)

    def get_by_id(self, stylist_id: str) -> Stylist:
        try:
            return self._by_id[stylist_id]
        except KeyError:
            raise StylistNotFoundError(f"Unknown stylist id: '{stylist_id}'") from None

    def find_by_name(self, name: str) -> Optional[Stylist]:
        """Find a stylist by their name (alias)."""
        for stylist in self._by_id.values():
            if stylist.name.lower() == name.lower():
                return stylist
        return None

    def resolve(self, identifier: str) -> Stylist:
        """
        Resolve a stylist identifier (id or name) to a stylist.

        Raises:
            StylistNotFoundError: If identifier matches neither an id nor a name
        """
        if identifier in self._by_id:
            return self._by_id[identifier]

        stylist = self.find_by_name(identifier)
        if stylist:
            return stylist

        logger.warning("Could not resolve stylist identifier %r", identifier)
        raise StylistNotFoundError(
            f"Unknown stylist identifier: '{identifier}'. "
            f"Use a stylist id or a configured name."
        )

    def __iter__(self) -> Iterator[Stylist]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)
