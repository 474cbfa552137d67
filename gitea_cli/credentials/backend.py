"""Protocol for credential sources."""

from typing import Protocol

CREDENTIAL_KEYS = ("token", "username", "password")


class CredentialBackend(Protocol):
    """Protocol defining the interface for credential sources.

    All backends must implement these members to be compatible
    with the CredentialResolver. Backends are read-only: gitea-cli never
    stores credentials.
    """

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'keyring', 'environment')."""
        ...

    @property
    def available(self) -> bool:
        """Check if this backend is available on the current system."""
        ...

    def get(self, url: str, key: str) -> str | None:
        """Retrieve one piece of a credential set.

        Args:
            url: Gitea server URL the credential belongs to
            key: One of 'token', 'username', 'password'

        Returns:
            Credential value or None if this backend does not know it

        Raises:
            CredentialError: If the backend fails while looking it up
        """
        ...
