"""
In-memory credential store for testing and ephemeral use.

Data is lost when the process exits.
"""

from collections.abc import Iterable

from . import Credential, CredentialKind, CredentialStore


class InMemoryCredentialStore(CredentialStore):
    """Stores credentials in a dictionary for the lifetime of the process."""

    def __init__(self, credentials: Iterable[Credential] = ()) -> None:
        self._credentials: dict[str, Credential] = {}
        for credential in credentials:
            self.add(credential)

    def lookup_credentials(self, kind: CredentialKind | None = None) -> list[Credential]:
        return [c for c in self._credentials.values() if kind is None or c.kind == kind]

    def add(self, credential: Credential) -> None:
        self._credentials[credential.id] = credential

    def remove(self, credential_id: str) -> bool:
        return self._credentials.pop(credential_id, None) is not None

    def get(self, credential_id: str) -> Credential | None:
        return self._credentials.get(credential_id)

    def __repr__(self) -> str:
        return f"InMemoryCredentialStore(credentials={len(self._credentials)})"
