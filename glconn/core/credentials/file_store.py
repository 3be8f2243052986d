"""
Filesystem-based credential store.

Stores credentials in a JSON document (``~/.glconn/credentials.json`` by
default) with owner-only permissions.
"""

import json
import logging
import os
import threading
from pathlib import Path

from glconn.core.exceptions import StorageError

from . import Credential, CredentialKind, CredentialStore

_logger = logging.getLogger(__name__)

FILE_PERMISSIONS = 0o600


class FileSystemCredentialStore(CredentialStore):
    """File-based credential store.

    The file is read on every lookup so that credentials added by the CLI
    are visible to a running server without a restart. The file is
    created with mode 0600 on Unix systems.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()
        self._write_lock = threading.Lock()

    def _read(self) -> dict[str, Credential]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, TypeError) as e:
            _logger.error("Corrupted credentials file %s: %s", self.path, e)
            raise StorageError(f"Invalid credential data in {self.path}: {e}") from e
        except OSError as e:
            _logger.error("Failed to read credentials file %s: %s", self.path, e)
            raise StorageError(f"Cannot read credentials file: {e}") from e

        records = data.get("credentials", []) if isinstance(data, dict) else None
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise StorageError(f"Invalid credential data in {self.path}: expected a 'credentials' list")
        credentials = [Credential.from_dict(record) for record in records]
        return {credential.id: credential for credential in credentials}

    def _write(self, credentials: dict[str, Credential]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                if hasattr(os, "fchmod"):
                    os.fchmod(f.fileno(), FILE_PERMISSIONS)
                json.dump(
                    {"credentials": [c.to_dict() for c in credentials.values()]},
                    f,
                    indent=2,
                )
        except OSError as e:
            _logger.error("Failed to write credentials file %s: %s", self.path, e)
            raise StorageError(f"Cannot write credentials file: {e}") from e

    def lookup_credentials(self, kind: CredentialKind | None = None) -> list[Credential]:
        return [c for c in self._read().values() if kind is None or c.kind == kind]

    def add(self, credential: Credential) -> None:
        with self._write_lock:
            credentials = self._read()
            credentials[credential.id] = credential
            self._write(credentials)
        _logger.info("Stored %s credential %r", credential.kind.value, credential.id)

    def remove(self, credential_id: str) -> bool:
        with self._write_lock:
            credentials = self._read()
            if credentials.pop(credential_id, None) is None:
                return False
            self._write(credentials)
        _logger.info("Removed credential %r", credential_id)
        return True

    def get(self, credential_id: str) -> Credential | None:
        return self._read().get(credential_id)

    def __repr__(self) -> str:
        return f"FileSystemCredentialStore(path={str(self.path)!r})"
