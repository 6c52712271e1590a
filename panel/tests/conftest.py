"""Shared test fixtures."""

import pytest
from unittest.mock import MagicMock

from panel.github import CodespacesClient
from panel.models import Codespace
from panel.state import StateStore


@pytest.fixture
def state_store():
    """A fresh state store per test."""
    return StateStore()


@pytest.fixture
def token(monkeypatch):
    """Configure a GitHub token."""
    monkeypatch.delenv("NEXT_PUBLIC_GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    return "test-token"


@pytest.fixture
def no_token(monkeypatch):
    """Remove every GitHub token variable."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("NEXT_PUBLIC_GITHUB_TOKEN", raising=False)


@pytest.fixture
def api():
    """A mocked Codespaces client, usable as a context manager."""
    client = MagicMock(spec=CodespacesClient)
    client.__enter__.return_value = client
    return client


@pytest.fixture
def client_factory(api):
    """Client factory that records the token and returns the mocked client."""
    return MagicMock(return_value=api)


@pytest.fixture
def make_codespace():
    """Build Codespace records."""
    def _make(name="fluffy-robot", state="Available", repo="Fake-Text-Story", id=42):
        return Codespace.model_validate({
            "id": id,
            "name": name,
            "state": state,
            "repository": {"name": repo, "full_name": f"owner/{repo}"},
        })
    return _make
