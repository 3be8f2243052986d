"""Client builder turning connection settings into GitLab clients."""

import logging
from typing import TYPE_CHECKING, Protocol

import httpx

from glconn.core.client import GitLabClient
from glconn.core.credentials import CredentialStore
from glconn.core.credentials.matcher import ApiTokenCredentialMatcher
from glconn.core.exceptions import ClientConstructionError, StorageError
from glconn.core.logging import secret_hash

if TYPE_CHECKING:
    from glconn.core.connection.profile import ConnectionProfile

logger = logging.getLogger(__name__)


class ClientBuilder(Protocol):
    """Builds GitLab clients from connection settings."""

    def build(self, profile: "ConnectionProfile") -> GitLabClient: ...

    def build_client(
        self, url: str, api_token_id: str, ignore_certificate_errors: bool
    ) -> GitLabClient: ...


class GitLabClientBuilder:
    """Creates GitLab client instances.

    Responsibilities:
    - Resolve the API token reference through the credential store
    - Apply the TLS verification policy and configured timeouts

    No caching happens here; see ``ClientCache``.
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        timeout: float = 10.0,
        connect_timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.credential_store = credential_store
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self._transport = transport
        self._matcher = ApiTokenCredentialMatcher()

    def build(self, profile: "ConnectionProfile") -> GitLabClient:
        """Build a client for a stored connection profile.

        Raises:
            ClientConstructionError: If the token cannot be resolved or the
                client cannot be created.
        """
        return self.build_client(
            profile.url, profile.api_token_id, profile.ignore_certificate_errors
        )

    def build_client(
        self, url: str, api_token_id: str, ignore_certificate_errors: bool
    ) -> GitLabClient:
        """Build a client from raw connection settings.

        Raises:
            ClientConstructionError: For every failure, including an
                unreadable credential store.
        """
        if not url:
            raise ClientConstructionError("GitLab host URL is empty")
        if not api_token_id:
            raise ClientConstructionError("API token id is empty")

        try:
            credential = self.credential_store.get(api_token_id)
        except StorageError as e:
            raise ClientConstructionError(f"Cannot read credential {api_token_id!r}: {e}") from e
        if credential is None:
            raise ClientConstructionError(f"Credential {api_token_id!r} not found")
        if not self._matcher.matches(credential):
            raise ClientConstructionError(
                f"Credential {api_token_id!r} is a {credential.kind.value} credential, not an API token"
            )

        try:
            client = GitLabClient(
                url=url,
                api_token=credential.secret,
                ignore_certificate_errors=ignore_certificate_errors,
                timeout=self.timeout,
                connect_timeout=self.connect_timeout,
                transport=self._transport,
            )
        except (httpx.InvalidURL, ValueError) as e:
            raise ClientConstructionError(f"Cannot build client for {url}: {e}") from e

        logger.debug(
            "Built GitLab client for %s (token %s, verify=%s)",
            url,
            secret_hash(credential.secret),
            not ignore_certificate_errors,
        )
        return client
