"""Fill in Gitea credentials from an ordered chain of backends."""

from collections.abc import Sequence

import structlog

from gitea_cli.exceptions import CredentialError
from gitea_cli.models.domain import Credentials

from .backend import CREDENTIAL_KEYS, CredentialBackend
from .environment_backend import EnvironmentBackend
from .git_helper_backend import GitCredentialHelperBackend
from .keyring_backend import KeyringBackend
from .prompt_backend import PromptBackend

log = structlog.get_logger(__name__)


class CredentialResolver:
    """Resolve the credentials for a Gitea server URL.

    Token, username and password are looked up independently: each piece
    still missing is asked of the next backend, so a username from the
    environment can be combined with a password from the keyring. The
    default resolution order is:

    1. environment (GITEA_TOKEN, GITEA_USERNAME, GITEA_PASSWORD)
    2. OS keyring (service ``gitea-cli/<host>``)
    3. Git credential helpers (``git credential fill``)
    4. interactive prompt (only when stdin is a terminal)

    Resolution stops as soon as the set is complete: a token alone, or a
    username with a password.

    Example:
        >>> resolver = CredentialResolver()
        >>> credentials = resolver.fill("https://gitea.example.com")
        >>> credentials.username
        'jdoe'
    """

    def __init__(self, backends: Sequence[CredentialBackend] | None = None) -> None:
        """Initialize credential resolver.

        Args:
            backends: Optional sequence of backends to use instead of the
                default chain, in resolution order.
        """
        if backends is None:
            backends = (
                EnvironmentBackend(),
                KeyringBackend(),
                GitCredentialHelperBackend(),
                PromptBackend(),
            )
        self._backends: tuple[CredentialBackend, ...] = tuple(backends)

    @property
    def backends(self) -> tuple[CredentialBackend, ...]:
        return self._backends

    def fill(self, url: str, require: bool = True) -> Credentials:
        """Resolve credentials for a server.

        Args:
            url: Gitea server URL; the returned Credentials carry it unchanged
            require: Raise if no complete credential set could be found.
                Pass False for calls that work unauthenticated.

        Returns:
            Credentials for url

        Raises:
            CredentialError: If a backend fails, or require is True and
                neither a token nor a username/password pair was found
        """
        found: dict[str, str] = {}

        for backend in self._backends:
            if _is_complete(found):
                break
            if not backend.available:
                log.debug("credential_backend_unavailable", backend=backend.name)
                continue

            for key in CREDENTIAL_KEYS:
                if key in found or _is_complete(found):
                    continue
                value = backend.get(url, key)
                if value is not None:
                    found[key] = value
                    log.debug("credential_resolved", backend=backend.name, key=key)

        credentials = Credentials(
            url=url,
            username=found.get("username"),
            password=found.get("password"),
            token=found.get("token"),
        )

        if require and not credentials.is_complete:
            missing = "password" if credentials.username else "username and password"
            raise CredentialError(
                f"No {missing} available for {url}",
                url=url,
                hint="Set GITEA_TOKEN, or GITEA_USERNAME and GITEA_PASSWORD, or configure a Git credential helper",
            )

        return credentials


def _is_complete(found: dict[str, str]) -> bool:
    return "token" in found or ("username" in found and "password" in found)
