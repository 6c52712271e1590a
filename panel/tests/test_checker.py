"""Tests for the status checker."""

import pytest
import requests
from unittest.mock import MagicMock

from panel.checker import StatusChecker, find_codespace
from panel.errors import GitHubAPIError, HealthCheckError
from panel.github import CodespacesClient
from panel.status import Status


REPO = "Fake-Text-Story"


@pytest.fixture
def checker(state_store, client_factory):
    return StatusChecker(state_store, client_factory=client_factory, repo_name=REPO)


class TestFindCodespace:
    """Tests for matching a codespace by repository name."""

    def test_first_match_wins(self, make_codespace):
        codespaces = [
            make_codespace(name="other", repo="Other"),
            make_codespace(name="first", repo=REPO),
            make_codespace(name="second", repo=REPO),
        ]
        assert find_codespace(codespaces, REPO).name == "first"

    def test_no_match(self, make_codespace):
        assert find_codespace([make_codespace(repo="Other")], REPO) is None

    def test_empty_list(self):
        assert find_codespace([], REPO) is None


class TestNoToken:
    """Without a token no network call is made."""

    def test_status_is_no_token(self, checker, client_factory, state_store, no_token):
        result = checker.check()
        assert result.status == Status.NO_TOKEN.value
        assert state_store.state.status == "no_token"
        client_factory.assert_not_called()

    def test_blank_token_counts_as_missing(self, checker, client_factory, monkeypatch):
        monkeypatch.delenv("NEXT_PUBLIC_GITHUB_TOKEN", raising=False)
        monkeypatch.setenv("GITHUB_TOKEN", "   ")
        assert checker.check().status == "no_token"
        client_factory.assert_not_called()


class TestListing:
    """Tests for the codespace listing step."""

    def test_api_error_sets_error(self, checker, api, state_store, token):
        api.list_codespaces.side_effect = GitHubAPIError("GitHub API error (401)", status_code=401)
        assert checker.check().status == "error"
        assert state_store.state.status == "error"

    def test_uses_configured_token(self, checker, client_factory, api, token):
        api.list_codespaces.return_value = []
        checker.check()
        client_factory.assert_called_once_with("test-token")

    def test_no_matching_codespace(self, checker, api, make_codespace, token):
        api.list_codespaces.return_value = [make_codespace(repo="Other"), make_codespace(repo="Another")]
        assert checker.check().status == "not_found"
        api.probe_health.assert_not_called()

    def test_unexpected_exception_sets_error(self, checker, api, state_store, token):
        api.list_codespaces.side_effect = ValueError("bad payload")
        result = checker.check()
        assert result.status == "error"
        assert state_store.state.status == "error"
        assert state_store.state.loading is False


class TestRunningCodespace:
    """Tests for a running codespace and its health probe."""

    def test_healthy_app_is_running(self, checker, api, state_store, make_codespace, token):
        api.list_codespaces.return_value = [make_codespace(name="fluffy-robot", state="Available")]
        result = checker.check()

        assert result.status == "running"
        assert result.url == "https://fluffy-robot-8080.app.github.dev"
        api.probe_health.assert_called_once_with("https://fluffy-robot-8080.app.github.dev")
        assert state_store.state.url == "https://fluffy-robot-8080.app.github.dev"
        assert state_store.state.codespace_id == "42"

    def test_lowercase_running_state(self, checker, api, make_codespace, token):
        api.list_codespaces.return_value = [make_codespace(state="running")]
        assert checker.check().status == "running"

    def test_failed_probe_is_app_not_running(self, checker, api, state_store, make_codespace, token):
        api.list_codespaces.return_value = [make_codespace()]
        api.probe_health.side_effect = HealthCheckError("Health check failed (502)")
        result = checker.check()
        assert result.status == "app_not_running"
        assert state_store.state.status == "app_not_running"
        assert state_store.state.codespace_id == "42"

    def test_probe_crash_is_error(self, checker, api, make_codespace, token):
        api.list_codespaces.return_value = [make_codespace()]
        api.probe_health.side_effect = RuntimeError("boom")
        assert checker.check().status == "error"


class TestOtherLifecycleStates:
    """Non-running lifecycle states pass through verbatim."""

    @pytest.mark.parametrize("state", ["stopped", "Shutdown", "Starting", "Rebuilding", "SomethingNew"])
    def test_raw_state_passthrough(self, checker, api, state_store, make_codespace, token, state):
        api.list_codespaces.return_value = [make_codespace(state=state)]
        assert checker.check().status == state
        assert state_store.state.status == state
        api.probe_health.assert_not_called()

    def test_records_codespace_id(self, checker, api, state_store, make_codespace, token):
        api.list_codespaces.return_value = [make_codespace(state="Shutdown", id=1234)]
        checker.check()
        assert state_store.state.codespace_id == "1234"


class TestCommit:
    """Tests for committing results to the store."""

    def test_clears_loading(self, checker, api, state_store, token):
        api.list_codespaces.return_value = []
        assert state_store.state.loading is True
        checker.check()
        assert state_store.state.loading is False
        assert state_store.state.checked_at is not None

    def test_stale_result_not_committed(self, checker, api, state_store, make_codespace, token):
        def list_then_newer_check():
            # A newer check is issued while this one is in flight.
            state_store.begin_check()
            return [make_codespace(state="Shutdown")]

        api.list_codespaces.side_effect = list_then_newer_check
        result = checker.check()
        assert result.status == "Shutdown"
        assert state_store.state.status == "checking"


class TestClientLifetime:
    """Each check closes the HTTP session it opened."""

    def test_sessions_closed(self, state_store, token):
        sessions = []

        def factory(token):
            session = MagicMock(spec=requests.Session)
            session.request.return_value.ok = True
            session.request.return_value.json.return_value = {"codespaces": []}
            sessions.append(session)
            return CodespacesClient(token, session=session)

        checker = StatusChecker(state_store, client_factory=factory, repo_name=REPO)
        for _ in range(5):
            assert checker.check().status == "not_found"

        assert len(sessions) == 5
        assert all(s.close.call_count == 1 for s in sessions)

    def test_closed_on_api_error(self, checker, api, token):
        api.list_codespaces.side_effect = GitHubAPIError("GitHub API error (500)", status_code=500)
        checker.check()
        api.__exit__.assert_called_once()
