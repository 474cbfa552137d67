"""Tests for gitea_cli/credentials - backends and the resolver chain."""

import subprocess
from unittest.mock import MagicMock, Mock, patch

import pytest
from keyring.errors import KeyringError

from gitea_cli.credentials import (
    CredentialError,
    CredentialResolver,
    EnvironmentBackend,
    GitCredentialHelperBackend,
    KeyringBackend,
    PromptBackend,
)
from gitea_cli.credentials.git_helper_backend import credential_request, parse_credential_output
from gitea_cli.credentials.keyring_backend import keyring_service

URL = "https://gitea.example.com"


class FakeBackend:
    """In-memory backend for resolver tests."""

    def __init__(self, name, values=None, available=True):
        self._name = name
        self.values = values or {}
        self._available = available
        self.calls = []

    @property
    def name(self):
        return self._name

    @property
    def available(self):
        return self._available

    def get(self, url, key):
        self.calls.append((url, key))
        return self.values.get(key)


# =============================================================================
# EnvironmentBackend
# =============================================================================


class TestEnvironmentBackend:
    def test_reads_variables(self, monkeypatch):
        monkeypatch.setenv("GITEA_USERNAME", "jdoe")
        monkeypatch.setenv("GITEA_PASSWORD", "s3cret")
        monkeypatch.setenv("GITEA_TOKEN", "tok")
        backend = EnvironmentBackend()

        assert backend.get(URL, "username") == "jdoe"
        assert backend.get(URL, "password") == "s3cret"
        assert backend.get(URL, "token") == "tok"

    def test_unset_and_empty_are_none(self, monkeypatch):
        monkeypatch.setenv("GITEA_PASSWORD", "")
        backend = EnvironmentBackend()

        assert backend.get(URL, "username") is None
        assert backend.get(URL, "password") is None

    def test_unknown_key(self):
        assert EnvironmentBackend().get(URL, "ssh_key") is None

    def test_always_available(self):
        backend = EnvironmentBackend()
        assert backend.available is True
        assert backend.name == "environment"


# =============================================================================
# KeyringBackend
# =============================================================================


class TestKeyringBackend:
    @pytest.mark.parametrize(
        ("url", "service"),
        [
            ("https://gitea.example.com", "gitea-cli/gitea.example.com"),
            ("http://gitea.example.com/", "gitea-cli/gitea.example.com"),
            ("https://gitea.example.com:3000/sub", "gitea-cli/gitea.example.com:3000"),
            ("https://jdoe@gitea.example.com", "gitea-cli/gitea.example.com"),
        ],
    )
    def test_service_name(self, url, service):
        assert keyring_service(url) == service

    @patch("gitea_cli.credentials.keyring_backend.keyring")
    def test_get(self, mock_keyring):
        mock_keyring.get_password.return_value = "s3cret"

        assert KeyringBackend().get(URL, "password") == "s3cret"
        mock_keyring.get_password.assert_called_once_with("gitea-cli/gitea.example.com", "password")

    @patch("gitea_cli.credentials.keyring_backend.keyring")
    def test_get_missing(self, mock_keyring):
        mock_keyring.get_password.return_value = None
        assert KeyringBackend().get(URL, "username") is None

    @patch("gitea_cli.credentials.keyring_backend.keyring")
    def test_get_error(self, mock_keyring):
        mock_keyring.get_password.side_effect = KeyringError("locked")

        with pytest.raises(CredentialError, match="Keyring lookup failed"):
            KeyringBackend().get(URL, "password")

    @patch("gitea_cli.credentials.keyring_backend.keyring")
    def test_available_with_real_backend(self, mock_keyring):
        mock_keyring.get_keyring.return_value = Mock(priority=5)
        assert KeyringBackend().available is True

    @patch("gitea_cli.credentials.keyring_backend.keyring")
    def test_unavailable_with_fail_backend(self, mock_keyring):
        mock_keyring.get_keyring.return_value = Mock(priority=0)
        assert KeyringBackend().available is False

    @patch("gitea_cli.credentials.keyring_backend.keyring")
    def test_unavailable_on_error(self, mock_keyring):
        mock_keyring.get_keyring.side_effect = RuntimeError("no dbus")
        assert KeyringBackend().available is False


# =============================================================================
# GitCredentialHelperBackend
# =============================================================================


class TestGitCredentialHelper:
    def test_credential_request(self):
        assert credential_request("https://gitea.example.com") == "protocol=https\nhost=gitea.example.com\n\n"

    def test_credential_request_with_port_and_path(self):
        assert credential_request("http://host:3000/gitea/") == "protocol=http\nhost=host:3000\npath=gitea\n\n"

    def test_credential_request_malformed(self):
        with pytest.raises(CredentialError):
            credential_request("gitea.example.com")

    def test_parse_output(self):
        output = "protocol=https\nhost=gitea.example.com\nusername=jdoe\npassword=a=b\n"

        assert parse_credential_output(output) == {
            "protocol": "https",
            "host": "gitea.example.com",
            "username": "jdoe",
            "password": "a=b",
        }

    @patch("gitea_cli.credentials.git_helper_backend.subprocess.run")
    def test_get_runs_helper_once(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="username=jdoe\npassword=s3cret\n", stderr="")
        backend = GitCredentialHelperBackend()

        assert backend.get(URL, "username") == "jdoe"
        assert backend.get(URL, "password") == "s3cret"

        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "credential", "fill"]
        assert kwargs["input"] == "protocol=https\nhost=gitea.example.com\n\n"
        assert kwargs["env"]["GIT_TERMINAL_PROMPT"] == "0"

    @patch("gitea_cli.credentials.git_helper_backend.subprocess.run")
    def test_token_is_never_asked(self, mock_run):
        assert GitCredentialHelperBackend().get(URL, "token") is None
        mock_run.assert_not_called()

    @patch("gitea_cli.credentials.git_helper_backend.subprocess.run")
    def test_helper_without_answer(self, mock_run):
        mock_run.return_value = MagicMock(returncode=128, stdout="", stderr="terminal prompts disabled")

        assert GitCredentialHelperBackend().get(URL, "username") is None

    @patch("gitea_cli.credentials.git_helper_backend.subprocess.run")
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="git", timeout=30)

        with pytest.raises(CredentialError, match="timed out"):
            GitCredentialHelperBackend().get(URL, "username")

    @patch("gitea_cli.credentials.git_helper_backend.subprocess.run")
    def test_git_missing(self, mock_run):
        mock_run.side_effect = FileNotFoundError("git")

        with pytest.raises(CredentialError, match="Failed to run"):
            GitCredentialHelperBackend().get(URL, "username")

    @patch("gitea_cli.credentials.git_helper_backend.shutil.which")
    def test_available_depends_on_git(self, mock_which):
        mock_which.return_value = None
        assert GitCredentialHelperBackend().available is False
        mock_which.return_value = "/usr/bin/git"
        assert GitCredentialHelperBackend().available is True


# =============================================================================
# PromptBackend
# =============================================================================


class TestPromptBackend:
    @patch("gitea_cli.credentials.prompt_backend.click.prompt")
    def test_prompts_for_username_and_hidden_password(self, mock_prompt):
        mock_prompt.side_effect = ["jdoe", "s3cret"]
        backend = PromptBackend(interactive=True)

        assert backend.get(URL, "username") == "jdoe"
        assert backend.get(URL, "password") == "s3cret"

        first, second = mock_prompt.call_args_list
        assert first.args[0] == f"Username for {URL}"
        assert first.kwargs["hide_input"] is False
        assert second.kwargs["hide_input"] is True

    @patch("gitea_cli.credentials.prompt_backend.click.prompt")
    def test_token_not_prompted(self, mock_prompt):
        assert PromptBackend(interactive=True).get(URL, "token") is None
        mock_prompt.assert_not_called()

    def test_availability_override(self):
        assert PromptBackend(interactive=False).available is False
        assert PromptBackend(interactive=True).available is True

    @patch("gitea_cli.credentials.prompt_backend.sys.stdin")
    def test_availability_follows_tty(self, mock_stdin):
        mock_stdin.isatty.return_value = False
        assert PromptBackend().available is False


# =============================================================================
# CredentialResolver
# =============================================================================


class TestCredentialResolver:
    def test_default_chain_order(self):
        names = [backend.name for backend in CredentialResolver().backends]
        assert names == ["environment", "keyring", "git-credential", "prompt"]

    def test_first_backend_complete(self):
        first = FakeBackend("first", {"username": "jdoe", "password": "s3cret"})
        second = FakeBackend("second", {"username": "other", "password": "other"})

        credentials = CredentialResolver([first, second]).fill(URL)

        assert credentials.url == URL
        assert credentials.username == "jdoe"
        assert credentials.password == "s3cret"
        assert second.calls == []

    def test_pieces_combined_across_backends(self):
        env = FakeBackend("env", {"username": "jdoe"})
        store = FakeBackend("store", {"username": "ignored", "password": "s3cret"})

        credentials = CredentialResolver([env, store]).fill(URL)

        assert credentials.username == "jdoe"
        assert credentials.password == "s3cret"
        assert (URL, "username") not in store.calls

    def test_token_alone_is_enough(self):
        env = FakeBackend("env", {"token": "abc"})
        later = FakeBackend("later", {"username": "jdoe"})

        credentials = CredentialResolver([env, later]).fill(URL)

        assert credentials.token == "abc"
        assert credentials.username is None
        assert later.calls == []

    def test_unavailable_backend_skipped(self):
        offline = FakeBackend("offline", {"token": "abc"}, available=False)
        env = FakeBackend("env", {"username": "jdoe", "password": "pw"})

        credentials = CredentialResolver([offline, env]).fill(URL)

        assert credentials.token is None
        assert offline.calls == []

    def test_nothing_found(self):
        with pytest.raises(CredentialError) as exc_info:
            CredentialResolver([FakeBackend("empty")]).fill(URL)

        assert exc_info.value.url == URL
        assert "username and password" in exc_info.value.message

    def test_password_missing(self):
        with pytest.raises(CredentialError, match="No password available"):
            CredentialResolver([FakeBackend("env", {"username": "jdoe"})]).fill(URL)

    def test_not_required(self):
        credentials = CredentialResolver([FakeBackend("empty")]).fill(URL, require=False)

        assert credentials.is_complete is False
        assert credentials.url == URL

    def test_backend_error_propagates(self):
        broken = FakeBackend("broken")
        broken.get = Mock(side_effect=CredentialError("Keyring lookup failed: locked"))

        with pytest.raises(CredentialError, match="locked"):
            CredentialResolver([broken]).fill(URL)

    def test_environment_end_to_end(self, monkeypatch):
        monkeypatch.setenv("GITEA_USERNAME", "jdoe")
        monkeypatch.setenv("GITEA_PASSWORD", "s3cret")

        credentials = CredentialResolver([EnvironmentBackend(), PromptBackend(interactive=False)]).fill(URL)

        assert credentials.username == "jdoe"
        assert credentials.has_basic_auth
