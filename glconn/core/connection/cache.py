"""Lazily-populated cache of GitLab clients, one per connection name."""

from __future__ import annotations

import logging
import threading

from glconn.core.client import GitLabClient
from glconn.core.client_builder import ClientBuilder
from glconn.core.connection.registry import ConnectionRegistry

logger = logging.getLogger(__name__)


class ClientCache:
    """Creates and caches GitLab clients per connection name.

    Responsibilities:
    - Resolve a connection name through the registry on first access
    - Build the client once and hand out the same instance afterwards
    - Forget every client when the configuration is replaced

    Lookups for unknown names return None and cache nothing. Builder
    failures propagate and are never cached, so a transient problem is
    retried on the next lookup.

    The check-then-build sequence runs under ``lock``. Pass the lock that
    guards registry replacement so a client is never built from a profile
    that is being replaced.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        builder: ClientBuilder,
        lock: threading.RLock | None = None,
    ) -> None:
        self._registry = registry
        self._builder = builder
        self._lock = lock if lock is not None else threading.RLock()
        self._clients: dict[str, GitLabClient] = {}

    def get(self, name: str) -> GitLabClient | None:
        """Get the cached client for a connection, building it on first use.

        Raises:
            ClientConstructionError: If the builder fails.
        """
        with self._lock:
            client = self._clients.get(name)
            if client is not None:
                return client

            profile = self._registry.get(name)
            if profile is None:
                return None

            client = self._builder.build(profile)
            self._clients[name] = client
            logger.info("Created GitLab client for connection %r (%s)", name, profile.url)
            return client

    def clear(self) -> None:
        """Drop every cached client.

        Clients are not closed: callers may still hold an instance obtained
        before the configuration changed.
        """
        with self._lock:
            dropped = len(self._clients)
            self._clients.clear()
        if dropped:
            logger.debug("Client cache cleared (%d client(s) dropped)", dropped)

    def __contains__(self, name: object) -> bool:
        return name in self._clients

    def __len__(self) -> int:
        return len(self._clients)
