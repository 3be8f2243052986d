"""Connection registry for storing and querying connection profiles."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Mapping, NamedTuple

from glconn.core.connection.profile import ConnectionProfile

logger = logging.getLogger(__name__)


class _Snapshot(NamedTuple):
    profiles: tuple[ConnectionProfile, ...]
    index: Mapping[str, ConnectionProfile]


def _build_snapshot(profiles: tuple[ConnectionProfile, ...]) -> _Snapshot:
    index: dict[str, ConnectionProfile] = {}
    for profile in profiles:
        # Later entries win on duplicate names
        index[profile.name] = profile
    return _Snapshot(profiles, MappingProxyType(index))


class ConnectionRegistry:
    """Ordered collection of connection profiles with a name index.

    Responsibilities:
    - Keep profiles in submission order for display
    - Resolve a connection name to its profile
    - Rebuild the name index whenever the collection changes

    The profile sequence and its index live in one immutable snapshot that
    is swapped in a single assignment, so lock-free readers always see an
    index that matches the sequence. Writers are serialized by the owning
    ``ConnectionConfigService``.
    """

    def __init__(self, profiles: Iterable[ConnectionProfile] = ()) -> None:
        self._snapshot = _build_snapshot(tuple(profiles))

    def replace_all(self, profiles: Iterable[ConnectionProfile]) -> None:
        """Replace every profile and rebuild the name index.

        No validation is performed. Callers must clear any client cache
        built from the previous profiles.
        """
        self._snapshot = _build_snapshot(tuple(profiles))
        logger.debug("Connection registry replaced: %d profile(s)", len(self._snapshot.profiles))

    def add(self, profile: ConnectionProfile) -> None:
        """Append a single profile, indexing it by name."""
        self._snapshot = _build_snapshot(self._snapshot.profiles + (profile,))

    def get(self, name: str) -> ConnectionProfile | None:
        return self._snapshot.index.get(name)

    def list(self) -> tuple[ConnectionProfile, ...]:
        return self._snapshot.profiles

    def names(self) -> list[str]:
        return list(self._snapshot.index)

    def __contains__(self, name: object) -> bool:
        return name in self._snapshot.index

    def __len__(self) -> int:
        return len(self._snapshot.profiles)

    def __iter__(self) -> Iterator[ConnectionProfile]:
        return iter(self._snapshot.profiles)
