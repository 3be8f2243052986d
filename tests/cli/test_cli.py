import logging

import httpx
import pytest
from typer.testing import CliRunner

from glconn import __version__
from glconn.cli.main import app
from glconn.core.config import Config
from glconn.core.connection.persistence import FileSystemConnectionStore
from glconn.core.connection.profile import ConnectionProfile
from glconn.core.credentials import CredentialKind, FileSystemCredentialStore
from tests.fixtures.mock_http import GITLAB_URL

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logging():
    # Every CLI invocation reconfigures the root logger
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def saved_connections():
    config = Config.load()
    FileSystemConnectionStore(config.connections_file).save(
        [ConnectionProfile(name="example", url=GITLAB_URL, api_token_id="bot")]
    )
    return config


def _add_bot_token():
    return runner.invoke(
        app, ["credentials", "add", "bot", "--description", "CI bot", "--secret", "glpat-bot"]
    )


@pytest.mark.unit
class TestVersionCommand:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout


@pytest.mark.unit
class TestCredentialsCommands:
    def test_add_then_list(self):
        added = _add_bot_token()
        listed = runner.invoke(app, ["credentials", "list"])

        assert added.exit_code == 0
        assert "Stored string credential 'bot'" in added.stdout
        assert listed.exit_code == 0
        assert "bot" in listed.stdout
        assert "glpat-bot" not in listed.stdout

    def test_add_persists_kind(self):
        result = runner.invoke(
            app, ["credentials", "add", "deploy", "--kind", "ssh_key", "--secret", "key"]
        )

        assert result.exit_code == 0
        stored = FileSystemCredentialStore(Config.load().credentials_file).get("deploy")
        assert stored.kind is CredentialKind.SSH_KEY

    def test_list_empty(self):
        result = runner.invoke(app, ["credentials", "list"])

        assert result.exit_code == 0
        assert "No credentials stored" in result.stdout


@pytest.mark.unit
class TestConnectionsCommands:
    def test_list_empty(self):
        result = runner.invoke(app, ["connections", "list"])

        assert result.exit_code == 0
        assert "No connections configured" in result.stdout

    def test_list_saved_connections(self, saved_connections):
        result = runner.invoke(app, ["connections", "list"])

        assert result.exit_code == 0
        assert "example" in result.stdout

    def test_list_reports_corrupt_file(self):
        path = Config.load().connections_file
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{broken")

        result = runner.invoke(app, ["connections", "list"])

        assert result.exit_code == 1

    def test_unknown_connection(self, saved_connections):
        result = runner.invoke(app, ["connections", "test", "missing"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_requires_name_or_settings(self):
        result = runner.invoke(app, ["connections", "test"])

        assert result.exit_code == 1

    def test_named_connection_success(self, saved_connections, mock_gitlab_api):
        _add_bot_token()
        route = mock_gitlab_api.head("/api/v4/user").mock(return_value=httpx.Response(200))

        result = runner.invoke(app, ["connections", "test", "example"])

        assert result.exit_code == 0
        assert "Success" in result.stdout
        assert route.calls.last.request.headers["PRIVATE-TOKEN"] == "glpat-bot"

    def test_ad_hoc_settings_rejected(self, mock_gitlab_api):
        _add_bot_token()
        mock_gitlab_api.head("/api/v4/user").mock(
            return_value=httpx.Response(401, json={"message": "401 Unauthorized"})
        )

        result = runner.invoke(
            app, ["connections", "test", "--url", GITLAB_URL, "--api-token-id", "bot"]
        )

        assert result.exit_code == 1
        assert "401 Unauthorized" in result.stdout


@pytest.mark.unit
class TestConfigCommands:
    def test_validate_ok(self):
        result = runner.invoke(app, ["config", "validate"])

        assert result.exit_code == 0
        assert "Configuration is valid" in result.stdout

    def test_validate_reports_every_problem(self, monkeypatch):
        monkeypatch.setenv("PORT", "eighty")
        monkeypatch.setenv("CONNECT_TIMEOUT", "0")

        result = runner.invoke(app, ["config", "validate"])

        assert result.exit_code == 1
        assert "PORT" in result.stdout
        assert "CONNECT_TIMEOUT" in result.stdout

    def test_env_lists_variables(self):
        result = runner.invoke(app, ["config", "env", "--raw"])

        assert result.exit_code == 0
        assert "`GLCONN_HOME`" in result.stdout
        assert "`ADMIN_API_KEY`" in result.stdout

    def test_start_refuses_invalid_configuration(self, monkeypatch):
        monkeypatch.setenv("PORT", "70000")

        result = runner.invoke(app, ["start"])

        assert result.exit_code == 1
        assert "must be between 1 and 65535" in result.stdout
