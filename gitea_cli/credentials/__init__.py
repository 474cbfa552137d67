"""Credential resolution for Gitea servers.

Credentials are read, never stored: from environment variables, the OS
keyring, Git credential helpers, or an interactive prompt.

Example:
    >>> from gitea_cli.credentials import CredentialResolver
    >>> credentials = CredentialResolver().fill("https://gitea.example.com")
"""

from gitea_cli.exceptions import CredentialError

from .backend import CredentialBackend
from .environment_backend import EnvironmentBackend
from .git_helper_backend import GitCredentialHelperBackend
from .keyring_backend import KeyringBackend
from .prompt_backend import PromptBackend
from .resolver import CredentialResolver

__all__ = [
    "CredentialBackend",
    "CredentialError",
    "CredentialResolver",
    "EnvironmentBackend",
    "GitCredentialHelperBackend",
    "KeyringBackend",
    "PromptBackend",
]
