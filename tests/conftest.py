"""Shared pytest configuration and fixtures for GitLab Connections tests."""

import threading
import time

import pytest

from glconn.core.connection.persistence import InMemoryConnectionStore
from glconn.core.connection.profile import ConnectionProfile
from glconn.core.connection.service import ConnectionConfigService
from glconn.core.credentials import Credential, CredentialKind, InMemoryCredentialStore

# Import HTTP mocking fixtures from fixtures module
pytest_plugins = ["tests.fixtures.mock_http"]

GLCONN_ENV_VARS = (
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "GLCONN_HOME",
    "GLCONN_CONNECTIONS_FILE",
    "GLCONN_CREDENTIALS_FILE",
    "REQUEST_TIMEOUT",
    "CONNECT_TIMEOUT",
    "ADMIN_API_KEY",
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, no external deps)")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires services)"
    )


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to everything under tests/ that is not marked otherwise."""
    for item in items:
        if "integration" not in item.keywords:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point every file the service touches at a temporary directory.

    A developer's own ``~/.glconn`` or exported settings must never leak
    into a test run.
    """
    for name in GLCONN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GLCONN_HOME", str(tmp_path / "glconn-home"))
    yield


class StubClient:
    """Stands in for GitLabClient; records the profile it was built from."""

    def __init__(self, url: str, api_token_id: str, ignore_certificate_errors: bool) -> None:
        self.url = url
        self.api_token_id = api_token_id
        self.ignore_certificate_errors = ignore_certificate_errors
        self.closed = False
        self.head_error: Exception | None = None

    def head_current_user(self) -> None:
        if self.head_error is not None:
            raise self.head_error

    def get_current_user(self) -> dict:
        return {"id": 1, "username": "root", "url": self.url}

    def close(self) -> None:
        self.closed = True


class CountingBuilder:
    """Client builder stub counting how often clients are built."""

    def __init__(self) -> None:
        self.build_calls: list[str] = []
        self.build_client_calls: list[tuple[str, str, bool]] = []
        # Seconds each build() blocks for
        self.delay = 0.0
        self.error: Exception | None = None
        self.head_error: Exception | None = None
        self._lock = threading.Lock()

    def build(self, profile):
        with self._lock:
            self.build_calls.append(profile.name)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return StubClient(profile.url, profile.api_token_id, profile.ignore_certificate_errors)

    def build_client(self, url, api_token_id, ignore_certificate_errors):
        self.build_client_calls.append((url, api_token_id, ignore_certificate_errors))
        if self.error is not None:
            raise self.error
        client = StubClient(url, api_token_id, ignore_certificate_errors)
        client.head_error = self.head_error
        return client


@pytest.fixture
def builder():
    return CountingBuilder()


@pytest.fixture
def credential_store():
    return InMemoryCredentialStore(
        [
            Credential(id="T", kind=CredentialKind.STRING, description="GitLab bot token", secret="glpat-T"),
            Credential(id="S", kind=CredentialKind.USERNAME_PASSWORD, secret="hunter2"),
            Credential(id="U", kind=CredentialKind.STRING, secret="glpat-U"),
        ]
    )


@pytest.fixture
def connection_store():
    return InMemoryConnectionStore()


@pytest.fixture
def service(connection_store, builder, credential_store):
    return ConnectionConfigService(connection_store, builder, credential_store)


@pytest.fixture
def gitlab_com():
    return ConnectionProfile(name="gitlab.com", url="https://gitlab.com", api_token_id="T")


@pytest.fixture
def internal_gitlab():
    return ConnectionProfile(
        name="internal",
        url="https://gitlab.internal.example",
        api_token_id="U",
        ignore_certificate_errors=True,
    )
