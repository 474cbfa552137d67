"""Environment variable backend for CI/CD and scripted use."""

import os

import structlog

log = structlog.get_logger(__name__)


class EnvironmentBackend:
    """Credentials from ``GITEA_TOKEN``, ``GITEA_USERNAME`` and ``GITEA_PASSWORD``.

    The variables apply to whichever server is being contacted; the url
    argument is ignored.

    Example:
        >>> os.environ['GITEA_USERNAME'] = 'jdoe'
        >>> EnvironmentBackend().get('https://gitea.example.com', 'username')
        'jdoe'
    """

    VARIABLES = {
        "token": "GITEA_TOKEN",
        "username": "GITEA_USERNAME",
        "password": "GITEA_PASSWORD",
    }

    @property
    def name(self) -> str:
        return "environment"

    @property
    def available(self) -> bool:
        """Environment backend is always available."""
        return True

    def get(self, url: str, key: str) -> str | None:
        var_name = self.VARIABLES.get(key)
        if var_name is None:
            return None

        value = os.getenv(var_name)
        if not value:
            return None

        log.debug("credential_from_environment", variable=var_name)
        return value
