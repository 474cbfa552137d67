"""OS-level keyring backend using system credential stores.

Platform Support:
- Linux: Secret Service API (GNOME Keyring, KWallet)
- macOS: Keychain
- Windows: Windows Credential Locker
"""

from typing import cast
from urllib.parse import urlsplit

import keyring
import structlog
from keyring.errors import KeyringError

from gitea_cli.exceptions import CredentialError

log = structlog.get_logger(__name__)


def keyring_service(url: str) -> str:
    """Keyring service name for a server URL.

    Entries are namespaced under 'gitea-cli' and keyed by host (and port),
    so http and https URLs of the same server share credentials.

    Example:
        >>> keyring_service("https://gitea.example.com:3000/sub")
        'gitea-cli/gitea.example.com:3000'
    """
    netloc = urlsplit(url).netloc or url
    host = netloc.rsplit("@", 1)[-1]
    return f"gitea-cli/{host}"


class KeyringBackend:
    """Read credentials stored in the OS keyring.

    Store them with the keyring CLI, for example::

        keyring set gitea-cli/gitea.example.com username
        keyring set gitea-cli/gitea.example.com password
    """

    @property
    def name(self) -> str:
        return "keyring"

    @property
    def available(self) -> bool:
        """Check if a functional keyring backend is configured.

        Headless systems typically only have the 'fail' keyring, which has
        priority 0 and cannot store anything.
        """
        try:
            return keyring.get_keyring().priority > 0
        except Exception as e:
            log.debug("keyring_unavailable", error=str(e))
            return False

    def get(self, url: str, key: str) -> str | None:
        service = keyring_service(url)
        try:
            credential = cast(str | None, keyring.get_password(service, key))
        except KeyringError as e:
            raise CredentialError(f"Keyring lookup failed: {e}", url=url) from e

        if credential is not None:
            log.debug("credential_from_keyring", service=service, key=key)
        return credential
