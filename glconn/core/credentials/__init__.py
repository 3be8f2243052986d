"""
Credential store abstraction.

Connection profiles never hold secrets: they reference a credential by id.
A credential store owns the secrets and lists them by kind, allowing
different backends (filesystem, memory, custom) to be used.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from glconn.core.exceptions import StorageError


class CredentialKind(str, Enum):
    """Kinds of credential a store can hold."""

    STRING = "string"  # Opaque secret text, e.g. a personal access token
    USERNAME_PASSWORD = "username_password"
    CERTIFICATE = "certificate"
    SSH_KEY = "ssh_key"


@dataclass(frozen=True)
class Credential:
    """A stored credential.

    Attributes:
        id: Opaque identifier referenced by connection profiles
        kind: Credential kind tag
        description: Optional human-readable label
        secret: The secret value; never logged or serialized to API responses
    """

    id: str
    kind: CredentialKind
    description: str = ""
    secret: str = field(default="", repr=False)

    @property
    def display_name(self) -> str:
        return self.description or self.id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "description": self.description,
            "secret": self.secret,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Credential":
        """Create from a stored dictionary.

        Raises:
            StorageError: If the id is missing or the kind is unknown
        """
        credential_id = data.get("id")
        if not credential_id:
            raise StorageError("Credential record is missing an 'id'")
        try:
            kind = CredentialKind(data.get("kind", CredentialKind.STRING.value))
        except ValueError as e:
            raise StorageError(f"Credential {credential_id!r} has unknown kind {data.get('kind')!r}") from e
        return cls(
            id=credential_id,
            kind=kind,
            description=data.get("description", ""),
            secret=data.get("secret", ""),
        )


class CredentialStore(ABC):
    """Abstract storage backend for credentials.

    Implementations:
    - FileSystemCredentialStore: JSON document on disk
    - InMemoryCredentialStore: For testing and ephemeral use
    """

    @abstractmethod
    def lookup_credentials(self, kind: CredentialKind | None = None) -> list[Credential]:
        """List stored credentials, optionally restricted to one kind.

        Returns:
            Credentials in insertion order
        """

    @abstractmethod
    def add(self, credential: Credential) -> None:
        """Store a credential, replacing any credential with the same id."""

    @abstractmethod
    def remove(self, credential_id: str) -> bool:
        """Remove a credential.

        Returns:
            True if a credential was removed
        """

    def get(self, credential_id: str) -> Credential | None:
        """Look up a single credential by id."""
        for credential in self.lookup_credentials():
            if credential.id == credential_id:
                return credential
        return None


# Import implementations (E402 exemption: implementations depend on the ABC above)
from .file_store import FileSystemCredentialStore  # noqa: E402
from .matcher import ApiTokenCredentialMatcher, filter_api_token_credentials  # noqa: E402
from .memory_store import InMemoryCredentialStore  # noqa: E402

__all__ = [
    "ApiTokenCredentialMatcher",
    "Credential",
    "CredentialKind",
    "CredentialStore",
    "FileSystemCredentialStore",
    "InMemoryCredentialStore",
    "filter_api_token_credentials",
]
