"""Custom exception hierarchy for gitea-cli.

Every failure a command can hit is mapped into this hierarchy at the module
that talks to the failing collaborator (GitPython, httpx, keyring, the Git
credential helper). The command handlers in ``gitea_cli.main`` only ever
catch ``GiteaCliError`` and print its message.

Exception Hierarchy:
    GiteaCliError (base, also used for free-text errors)
    ├── ConfigurationError
    ├── LocalContextError
    │   ├── NotGitRepositoryError
    │   ├── InvalidPathError
    │   └── RemoteAddError
    ├── InvalidGitUrlError
    ├── RemoteNotFoundError
    ├── CredentialError
    ├── ValidationError
    └── ApiError

Example Usage:
    >>> from gitea_cli.exceptions import ConfigurationError
    >>> raise ConfigurationError("Missing Gitea URL", hint="Pass --gitea-url or set GITEA_URL")
"""

from enum import Enum


class GiteaCliError(Exception):
    """Base exception for all gitea-cli errors.

    Attributes:
        message: Human-readable error description
        hint: Optional suggestion for resolution
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            hint: Optional hint for resolution
        """
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


class ConfigurationError(GiteaCliError):
    """Configuration-related errors.

    Examples:
        - No Gitea URL given and GITEA_URL unset
        - Invalid value in a GITEA_CLI_* environment variable
    """

    pass


class LocalContextError(GiteaCliError):
    """The local working copy could not be used.

    Base class for errors raised while resolving or mutating the local
    Git repository (not a repository, unusable path, remote add failed).
    """

    pass


class NotGitRepositoryError(LocalContextError):
    """Raised when a path is not inside a Git working copy.

    Attributes:
        path: The path that was inspected
    """

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Not a Git repository: {path}",
            hint="Run 'git init' or pass --path pointing inside a working copy",
        )
        self.path = path


class InvalidPathError(LocalContextError):
    """Raised when a repository name cannot be derived from a path.

    Attributes:
        path: The top-level path without a usable final segment
    """

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Cannot derive a repository name from path: {path}",
            hint="Pass --gitea-name explicitly",
        )
        self.path = path


class RemoteAddError(LocalContextError):
    """Raised when the local remote tracking entry could not be added.

    Attributes:
        remote_name: Alias that was being added
        url: Clone URL the alias should have pointed to
    """

    def __init__(self, remote_name: str, url: str, reason: str) -> None:
        super().__init__(
            f"Failed to add remote '{remote_name}': {reason}",
            hint=f"Add it manually with: git remote add {remote_name} {url}",
        )
        self.remote_name = remote_name
        self.url = url


class RemoteNotFoundError(GiteaCliError):
    """Raised when no remote with the given alias is configured locally.

    Attributes:
        remote_name: The alias that was looked up
    """

    def __init__(self, remote_name: str, available: list[str] | None = None) -> None:
        hint = None
        if available:
            hint = f"Available remotes: {', '.join(available)}"
        super().__init__(f"No remote named '{remote_name}'", hint=hint)
        self.remote_name = remote_name
        self.available = available or []


class CredentialError(GiteaCliError):
    """Credentials for the Gitea server could not be obtained.

    Attributes:
        url: The server URL credentials were requested for
    """

    def __init__(self, message: str, url: str | None = None, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.url = url


class ValidationError(GiteaCliError):
    """A command-line supplied option is malformed.

    Examples:
        - Unknown --trust-model value
        - Empty --branch
    """

    pass


class ApiErrorKind(str, Enum):
    """Classification of remote service failures."""

    NETWORK = "network"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    SERVER = "server"

    def __str__(self) -> str:
        return self.value


class ApiError(GiteaCliError):
    """The Gitea API call failed.

    Attributes:
        kind: Failure classification
        status_code: HTTP status code (if a response was received)
    """

    def __init__(
        self,
        message: str,
        kind: ApiErrorKind,
        status_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        if status_code:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message, hint=hint)


class InvalidGitUrlError(GiteaCliError):
    """Raised when a remote URL is not in a recognised Git URL format.

    Attributes:
        url: The URL that failed to parse
    """

    def __init__(self, url: str, reason: str | None = None) -> None:
        message = f"Invalid Git URL '{url}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url
