"""Connection configuration service.

The façade the HTTP and CLI layers talk to. It owns the connection registry
and the client cache, and wires them to persistence, the credential store
and the client builder.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass

from glconn.core.client import GitLabClient
from glconn.core.client_builder import ClientBuilder, GitLabClientBuilder
from glconn.core.config import Config
from glconn.core.connection import validation
from glconn.core.connection.cache import ClientCache
from glconn.core.connection.persistence import ConnectionStore, FileSystemConnectionStore
from glconn.core.connection.profile import ConnectionProfile
from glconn.core.connection.registry import ConnectionRegistry
from glconn.core.connection.validation import FormValidation
from glconn.core.credentials import CredentialStore, FileSystemCredentialStore
from glconn.core.credentials.matcher import filter_api_token_credentials
from glconn.core.exceptions import (
    ClientConstructionError,
    RemoteRejectedError,
    TransportFailureError,
)

logger = logging.getLogger(__name__)

EMPTY_SELECTION_LABEL = "- none -"


@dataclass(slots=True)
class CredentialOption:
    """One entry of the API token drop-down."""

    value: str
    name: str
    selected: bool = False

    def to_dict(self) -> dict[str, object]:
        return {"value": self.value, "name": self.name, "selected": self.selected}


class ConnectionConfigService:
    """Runtime owner of the GitLab connection configuration.

    Responsibilities:
    - Load the configuration at startup and save it on every submission
    - Validate form fields and whole submissions
    - Resolve connection names to cached GitLab clients
    - Test ad hoc connection settings without touching the registry
    - List the credentials selectable as API tokens

    Replacing the configuration (replace profiles, rebuild the index, clear
    the client cache) happens under one lock that the cache also takes for
    its check-then-build step.
    """

    def __init__(
        self,
        store: ConnectionStore,
        builder: ClientBuilder,
        credential_store: CredentialStore,
    ) -> None:
        self._store = store
        self._builder = builder
        self._credential_store = credential_store
        self._lock = threading.RLock()
        self._registry = ConnectionRegistry()
        self._clients = ClientCache(self._registry, builder, lock=self._lock)

    @classmethod
    def from_config(cls, config: Config) -> ConnectionConfigService:
        """Build a service backed by the files named in ``config``."""
        credential_store = FileSystemCredentialStore(config.credentials_file)
        builder = GitLabClientBuilder(
            credential_store,
            timeout=config.request_timeout,
            connect_timeout=config.connect_timeout,
        )
        return cls(FileSystemConnectionStore(config.connections_file), builder, credential_store)

    # Lifecycle

    def load(self) -> None:
        """Load the persisted configuration, replacing whatever is held."""
        profiles = self._store.load()
        with self._lock:
            self._registry.replace_all(profiles)
            self._clients.clear()
        logger.info("Loaded %d GitLab connection(s)", len(profiles))

    def save(self) -> None:
        self._store.save(self._registry.list())

    def configure(self, profiles: Sequence[ConnectionProfile]) -> list[FormValidation]:
        """Apply a full configuration submission.

        The submission is validated first; if anything fails nothing is
        applied and the failures are returned. Otherwise the profiles are
        persisted, replace the registry, and every cached client is dropped.

        Returns:
            Validation failures; empty when the submission was applied

        Raises:
            StorageError: If the configuration cannot be persisted. The
                running configuration is left unchanged.
        """
        profiles = list(profiles)
        failures = validation.validate_profiles(profiles)
        if failures:
            logger.info("Rejected connection configuration: %d problem(s)", len(failures))
            return failures

        with self._lock:
            self._store.save(profiles)
            self._registry.replace_all(profiles)
            self._clients.clear()

        logger.info(
            "Applied connection configuration: %s",
            ", ".join(profile.name for profile in profiles) or "(none)",
        )
        return []

    def add_connection(self, profile: ConnectionProfile) -> None:
        """Register one more connection programmatically.

        The profile is not validated or persisted. Cached clients are dropped,
        as for a full submission.
        """
        with self._lock:
            self._registry.add(profile)
            self._clients.clear()
        logger.info("Added connection %r (%s)", profile.name, profile.url)

    # Queries

    @property
    def connections(self) -> tuple[ConnectionProfile, ...]:
        return self._registry.list()

    def get_connection(self, name: str) -> ConnectionProfile | None:
        return self._registry.get(name)

    def get_client(self, connection_name: str) -> GitLabClient | None:
        """Resolve a connection name to its (cached) GitLab client.

        Returns:
            None if no connection has that name

        Raises:
            ClientConstructionError: If the client cannot be built; nothing
                is cached and the next call tries again.
        """
        return self._clients.get(connection_name)

    # Form validation

    def check_name(self, value: str | None, profile_id: str | None = None) -> FormValidation:
        return validation.check_name(self._registry, value, profile_id)

    def check_url(self, value: str | None) -> FormValidation:
        return validation.check_url(value)

    def check_api_token_id(self, value: str | None) -> FormValidation:
        return validation.check_api_token_id(value)

    def test_connection(
        self, url: str, api_token_id: str, ignore_certificate_errors: bool = False
    ) -> FormValidation:
        """Check ad hoc connection settings against the GitLab instance.

        Uses a throwaway client; the registry and the cache are not touched.
        """
        try:
            client = self._builder.build_client(url, api_token_id, ignore_certificate_errors)
            try:
                client.head_current_user()
            finally:
                client.close()
        except RemoteRejectedError as e:
            logger.info("Connection test for %s rejected: %s", url, e.message)
            return FormValidation.error(e.message, e.error_type)
        except TransportFailureError as e:
            logger.info("Connection test for %s failed: %s", url, e.cause_message)
            return FormValidation.error(e.cause_message, e.error_type)
        except ClientConstructionError as e:
            logger.info("Connection test for %s could not build a client: %s", url, e)
            return FormValidation.error(str(e), e.error_type)
        return FormValidation.ok(validation.CONNECTION_SUCCESS)

    # Credentials

    def list_api_token_options(
        self, name: str | None = None, include_empty_selection: bool = False
    ) -> list[CredentialOption]:
        """List credentials selectable as the API token of a connection.

        The option matching the named connection's current token reference
        is marked selected.
        """
        options = [
            CredentialOption(value="", name=EMPTY_SELECTION_LABEL)
        ] if include_empty_selection else []
        options.extend(
            CredentialOption(value=credential.id, name=credential.display_name)
            for credential in filter_api_token_credentials(
                self._credential_store.lookup_credentials()
            )
        )

        profile = self._registry.get(name) if name else None
        if profile is not None:
            for option in options:
                if option.value == profile.api_token_id:
                    option.selected = True
        return options
