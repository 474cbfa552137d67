"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import git
import httpx
import pytest
import structlog

from gitea_cli.models.domain import Credentials
from gitea_cli.providers.gitea_rest import GiteaRestClient
from gitea_cli.utils.logging_config import configure_logging

GITEA_URL = "http://example.test"


@pytest.fixture(autouse=True)
def reset_structlog():
    """Keep logging configuration from leaking between tests."""
    configure_logging("WARNING")
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clean_credential_env(monkeypatch):
    """Tests never pick up credentials from the developer's environment."""
    for var in ("GITEA_URL", "GITEA_TOKEN", "GITEA_USERNAME", "GITEA_PASSWORD", "GITEA_CLI_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Fresh Git working copy named 'myproj' with no remotes."""
    repo_dir = tmp_path / "myproj"
    repo_dir.mkdir()
    git.Repo.init(repo_dir)
    return repo_dir


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(url=GITEA_URL, username="jdoe", password="s3cret")


@pytest.fixture
def sample_repo_data() -> dict:
    """Repository as returned by the Gitea API (trimmed)."""
    return {
        "id": 7,
        "name": "myproj",
        "full_name": "jdoe/myproj",
        "description": "",
        "clone_url": "http://example.test/jdoe/myproj.git",
        "ssh_url": "git@example.test:jdoe/myproj.git",
        "html_url": "http://example.test/jdoe/myproj",
        "default_branch": "main",
        "private": False,
    }


@pytest.fixture
def make_client() -> Callable[..., GiteaRestClient]:
    """Build a GiteaRestClient whose requests go to a handler function.

    The handler receives the ``httpx.Request`` and returns either an
    ``httpx.Response`` or a ``(status, json_body)`` tuple. Requests are
    recorded on ``client.requests``.
    """

    def factory(
        handler: Callable[[httpx.Request], Any],
        credentials: Credentials | None = None,
        base_url: str = GITEA_URL,
    ) -> GiteaRestClient:
        requests: list[httpx.Request] = []

        def dispatch(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            outcome = handler(request)
            if isinstance(outcome, httpx.Response):
                return outcome
            status, body = outcome
            return httpx.Response(status, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})

        client = GiteaRestClient(base_url, credentials, transport=httpx.MockTransport(dispatch))
        client.requests = requests  # type: ignore[attr-defined]
        return client

    return factory
