import threading
import time

import httpx
import pytest

from glconn.core.connection.profile import ConnectionProfile
from glconn.core.error_types import ErrorType
from glconn.core.exceptions import (
    ClientConstructionError,
    RemoteRejectedError,
    StorageError,
    TransportFailureError,
)


@pytest.mark.unit
class TestLifecycle:
    def test_load_reads_persisted_profiles(self, service, connection_store, gitlab_com):
        connection_store.save([gitlab_com])

        service.load()

        assert service.connections == (gitlab_com,)
        assert service.get_connection("gitlab.com") is gitlab_com

    def test_configure_replaces_registry_and_persists(
        self, service, connection_store, gitlab_com, internal_gitlab
    ):
        failures = service.configure([internal_gitlab, gitlab_com])

        assert failures == []
        assert [p.name for p in service.connections] == ["internal", "gitlab.com"]
        assert connection_store.load() == [internal_gitlab, gitlab_com]

    def test_configure_clears_cached_clients(self, service, builder, gitlab_com):
        service.configure([gitlab_com])
        stale = service.get_client("gitlab.com")

        rotated = ConnectionProfile(name="gitlab.com", url="https://gitlab.com", api_token_id="U")
        service.configure([rotated])
        fresh = service.get_client("gitlab.com")

        assert fresh is not stale
        assert fresh.api_token_id == "U"
        assert builder.build_calls == ["gitlab.com", "gitlab.com"]

    def test_invalid_submission_changes_nothing(self, service, connection_store, builder, gitlab_com):
        service.configure([gitlab_com])
        cached = service.get_client("gitlab.com")
        saves = connection_store.save_count

        failures = service.configure(
            [
                ConnectionProfile(name="dup", url="https://a", api_token_id="T"),
                ConnectionProfile(name="dup", url="", api_token_id="T"),
            ]
        )

        assert {f.error_type for f in failures} == {ErrorType.DUPLICATE_NAME, ErrorType.EMPTY_FIELD}
        assert service.connections == (gitlab_com,)
        assert service.get_client("gitlab.com") is cached
        assert connection_store.save_count == saves

    def test_failed_save_leaves_running_configuration(
        self, service, connection_store, gitlab_com, internal_gitlab, monkeypatch
    ):
        service.configure([gitlab_com])

        def _broken_save(profiles):
            raise StorageError("disk full")

        monkeypatch.setattr(connection_store, "save", _broken_save)

        with pytest.raises(StorageError):
            service.configure([internal_gitlab])
        assert service.connections == (gitlab_com,)

    def test_add_connection_registers_and_invalidates(self, service, builder, gitlab_com, internal_gitlab):
        service.configure([gitlab_com])
        before = service.get_client("gitlab.com")

        service.add_connection(internal_gitlab)

        assert service.get_connection("internal") is internal_gitlab
        assert service.get_client("gitlab.com") is not before
        assert builder.build_calls == ["gitlab.com", "gitlab.com"]

    def test_add_connection_is_not_persisted(self, service, connection_store, internal_gitlab):
        service.add_connection(internal_gitlab)

        assert connection_store.load() == []


@pytest.mark.unit
class TestClientLookup:
    def test_unknown_connection_resolves_to_none(self, service):
        assert service.get_client("nope") is None

    def test_construction_error_propagates_uncached(self, service, builder, gitlab_com):
        service.configure([gitlab_com])
        builder.error = ClientConstructionError("Credential 'T' not found")

        with pytest.raises(ClientConstructionError):
            service.get_client("gitlab.com")

        builder.error = None
        assert service.get_client("gitlab.com") is not None

    def test_replacement_during_build_never_leaves_stale_client(self, service, builder, gitlab_com):
        service.configure([gitlab_com])
        builder.delay = 0.1
        worker = threading.Thread(target=service.get_client, args=("gitlab.com",))
        worker.start()
        deadline = time.monotonic() + 5
        while not builder.build_calls and time.monotonic() < deadline:
            time.sleep(0.001)

        rotated = ConnectionProfile(name="gitlab.com", url="https://gitlab.com", api_token_id="U")
        service.configure([rotated])
        worker.join()
        builder.delay = 0.0

        assert service.get_client("gitlab.com").api_token_id == "U"


@pytest.mark.unit
class TestFieldChecks:
    def test_check_name_uses_current_registry(self, service, gitlab_com):
        service.configure([gitlab_com])

        assert service.check_name("gitlab.com", gitlab_com.profile_id).is_ok
        assert service.check_name("gitlab.com", "someone-else").error_type is ErrorType.DUPLICATE_NAME
        assert service.check_name("").error_type is ErrorType.EMPTY_FIELD

    def test_check_url_and_token(self, service):
        assert service.check_url("https://gitlab.com").is_ok
        assert not service.check_url("").is_ok
        assert service.check_api_token_id("T").is_ok
        assert not service.check_api_token_id("").is_ok


@pytest.mark.unit
class TestConnectionTest:
    def test_success(self, service, builder):
        result = service.test_connection("https://gitlab.com", "T", False)

        assert result.is_ok
        assert result.message == "Success"
        assert builder.build_client_calls == [("https://gitlab.com", "T", False)]

    def test_remote_rejection_reports_remote_message(self, service, builder):
        builder.head_error = RemoteRejectedError(401, "unauthorized")

        result = service.test_connection("https://gitlab.com", "T", False)

        assert not result.is_ok
        assert result.message == "unauthorized"
        assert result.error_type is ErrorType.REMOTE_REJECTED

    def test_transport_failure_reports_wrapped_cause(self, service, builder):
        cause = httpx.ConnectError("connection refused")
        builder.head_error = TransportFailureError("Cannot reach https://gitlab.com", cause=cause)

        result = service.test_connection("https://gitlab.com", "T", False)

        assert result.message == "connection refused"
        assert result.error_type is ErrorType.TRANSPORT_FAILURE

    def test_construction_failure_is_reported(self, service, builder):
        builder.error = ClientConstructionError("Credential 'nope' not found")

        result = service.test_connection("https://gitlab.com", "nope", False)

        assert result.message == "Credential 'nope' not found"
        assert result.error_type is ErrorType.CONSTRUCTION_ERROR

    def test_bypasses_registry_and_cache(self, service, builder, gitlab_com):
        service.configure([gitlab_com])

        service.test_connection("https://gitlab.com", "T", True)

        assert builder.build_calls == []
        assert service.connections == (gitlab_com,)


@pytest.mark.unit
class TestApiTokenOptions:
    def test_only_string_credentials_with_current_token_selected(self, service, credential_store):
        service.configure([ConnectionProfile(name="X", url="https://x", api_token_id="T")])

        options = service.list_api_token_options("X")

        assert [(o.value, o.selected) for o in options] == [("T", True), ("U", False)]
        assert options[0].name == "GitLab bot token"
        assert options[1].name == "U"

    def test_non_token_credentials_are_never_offered(self, service, credential_store):
        credential_store.remove("U")
        service.configure([ConnectionProfile(name="X", url="https://x", api_token_id="T")])

        options = service.list_api_token_options("X")

        assert [(o.value, o.selected) for o in options] == [("T", True)]

    def test_unknown_connection_selects_nothing(self, service):
        options = service.list_api_token_options("missing")

        assert not any(o.selected for o in options)

    def test_empty_selection_is_prepended_on_request(self, service):
        options = service.list_api_token_options(None, include_empty_selection=True)

        assert options[0].value == ""
        assert [o.value for o in options[1:]] == ["T", "U"]
