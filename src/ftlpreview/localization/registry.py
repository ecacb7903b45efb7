"""Loaded-resource registry.

Records, per logical identifier, either the parsed resource or the
IN_FLIGHT marker of a load that has started but not finished. Presence of
either state is what makes ensure_loaded() a no-op, so the marker must be
written before the first suspension point of a load.

clear() bumps a generation counter: a load that started before the clear
compares generations when it resumes and drops its result.

Python 3.13+. Zero external dependencies.
"""

import logging
from enum import Enum
from typing import Final, Literal

from ftlpreview.localization.types import LogicalIdentifier
from ftlpreview.syntax import Resource

__all__ = ["IN_FLIGHT", "LoadedResourceRegistry"]

logger = logging.getLogger(__name__)


class _Marker(Enum):
    IN_FLIGHT = "in-flight"

    def __repr__(self) -> str:
        return "IN_FLIGHT"


IN_FLIGHT: Final = _Marker.IN_FLIGHT

type RegistryEntry = Resource | Literal[_Marker.IN_FLIGHT]


class LoadedResourceRegistry:
    """Identifier -> parsed Resource or IN_FLIGHT.

    Example:
        >>> registry = LoadedResourceRegistry()
        >>> registry.mark_in_flight("toolkit/a.ftl")
        True
        >>> registry.mark_in_flight("toolkit/a.ftl")
        False
        >>> "toolkit/a.ftl" in registry
        True
    """

    __slots__ = ("_entries", "_generation")

    def __init__(self) -> None:
        self._entries: dict[LogicalIdentifier, RegistryEntry] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        """Incremented by every clear()."""
        return self._generation

    def mark_in_flight(self, identifier: LogicalIdentifier) -> bool:
        """Claim identifier for loading.

        Returns:
            False if the identifier is already loaded or in flight
        """
        if identifier in self._entries:
            return False
        self._entries[identifier] = IN_FLIGHT
        return True

    def mark_loaded(self, identifier: LogicalIdentifier, resource: Resource) -> None:
        self._entries[identifier] = resource
        logger.debug("Registered resource %s", identifier)

    def discard(self, identifier: LogicalIdentifier) -> None:
        """Forget identifier so a later ensure_loaded() fetches it again."""
        self._entries.pop(identifier, None)

    def is_in_flight(self, identifier: LogicalIdentifier) -> bool:
        return self._entries.get(identifier) is IN_FLIGHT

    def is_loaded(self, identifier: LogicalIdentifier) -> bool:
        return isinstance(self._entries.get(identifier), Resource)

    def get(self, identifier: LogicalIdentifier) -> Resource | None:
        """Parsed resource for identifier, or None if absent or in flight."""
        entry = self._entries.get(identifier)
        return entry if isinstance(entry, Resource) else None

    @property
    def loaded_ids(self) -> tuple[LogicalIdentifier, ...]:
        return tuple(key for key, entry in self._entries.items() if isinstance(entry, Resource))

    @property
    def in_flight_ids(self) -> tuple[LogicalIdentifier, ...]:
        return tuple(key for key, entry in self._entries.items() if entry is IN_FLIGHT)

    def clear(self) -> None:
        self._entries.clear()
        self._generation += 1
        logger.debug("Registry cleared (generation %d)", self._generation)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"LoadedResourceRegistry(loaded={len(self.loaded_ids)}, "
            f"in_flight={len(self.in_flight_ids)})"
        )
