"""
Persistence for connection profiles.

Only the ordered profile sequence is stored; the name index and the client
cache are rebuilt from it at runtime.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from glconn.core.connection.profile import ConnectionProfile
from glconn.core.exceptions import StorageError

_logger = logging.getLogger(__name__)


class ConnectionStore(ABC):
    """Abstract storage backend for the connection configuration."""

    @abstractmethod
    def load(self) -> list[ConnectionProfile]:
        """Read the stored profiles in their saved order.

        Returns:
            An empty list when nothing has been saved yet
        """

    @abstractmethod
    def save(self, profiles: Sequence[ConnectionProfile]) -> None:
        """Replace the stored profiles.

        Raises:
            StorageError: If the write fails
        """


class InMemoryConnectionStore(ConnectionStore):
    """Keeps the configuration in memory. Useful for tests and demos."""

    def __init__(self, profiles: Sequence[ConnectionProfile] = ()) -> None:
        self._profiles = list(profiles)
        self.save_count = 0

    def load(self) -> list[ConnectionProfile]:
        return list(self._profiles)

    def save(self, profiles: Sequence[ConnectionProfile]) -> None:
        self._profiles = list(profiles)
        self.save_count += 1


class FileSystemConnectionStore(ConnectionStore):
    """Stores the configuration as a JSON document.

    Layout::

        {"connections": [{"id": ..., "name": ..., "url": ...,
                          "api_token_id": ..., "ignore_certificate_errors": ...}]}
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> list[ConnectionProfile]:
        if not self.path.exists():
            _logger.info("No connection configuration at %s, starting empty", self.path)
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except json.JSONDecodeError as e:
            _logger.error("Corrupted connection file %s: %s", self.path, e)
            raise StorageError(f"Invalid connection data in {self.path}: {e}") from e
        except OSError as e:
            _logger.error("Failed to read connection file %s: %s", self.path, e)
            raise StorageError(f"Cannot read connection file: {e}") from e

        records = data.get("connections", []) if isinstance(data, dict) else None
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise StorageError(f"Invalid connection data in {self.path}: expected a 'connections' list")

        return [ConnectionProfile.from_dict(record) for record in records]

    def save(self, profiles: Sequence[ConnectionProfile]) -> None:
        document = {"connections": [profile.to_dict() for profile in profiles]}
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            _logger.error("Failed to write connection file %s: %s", self.path, e)
            raise StorageError(f"Cannot write connection file: {e}") from e
        _logger.debug("Saved %d connection(s) to %s", len(profiles), self.path)
