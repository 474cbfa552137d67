"""Backend that asks Git's configured credential helpers.

Runs ``git credential fill`` with the server's protocol, host and path, the
same lookup ``git push`` would do. Terminal prompting by Git itself is
disabled; interactive prompting is left to PromptBackend.
"""

import os
import shutil
import subprocess  # nosec B404
from urllib.parse import urlsplit

import structlog

from gitea_cli.exceptions import CredentialError

log = structlog.get_logger(__name__)


def credential_request(url: str) -> str:
    """Build the ``git credential`` input description for a URL.

    Example:
        >>> credential_request("https://gitea.example.com/sub")
        'protocol=https\\nhost=gitea.example.com\\npath=sub\\n\\n'
    """
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise CredentialError(f"Cannot look up credentials for malformed URL: {url}", url=url)

    lines = [f"protocol={parts.scheme}", f"host={parts.netloc.rsplit('@', 1)[-1]}"]
    path = parts.path.strip("/")
    if path:
        lines.append(f"path={path}")
    return "\n".join(lines) + "\n\n"


def parse_credential_output(output: str) -> dict[str, str]:
    """Parse ``key=value`` lines printed by ``git credential fill``."""
    values: dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            values[key.strip()] = value
    return values


class GitCredentialHelperBackend:
    """Credentials from ``git credential fill``.

    The helper is run at most once per instance; the answer is kept for the
    rest of the invocation.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout
        self._answers: dict[str, dict[str, str]] = {}

    @property
    def name(self) -> str:
        return "git-credential"

    @property
    def available(self) -> bool:
        return shutil.which("git") is not None

    def get(self, url: str, key: str) -> str | None:
        if key not in ("username", "password"):
            return None
        if url not in self._answers:
            self._answers[url] = self._fill(url)
        return self._answers[url].get(key) or None

    def _fill(self, url: str) -> dict[str, str]:
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0", "GCM_INTERACTIVE": "never"}
        try:
            result = subprocess.run(  # nosec B603 B607 # Git command with controlled input
                ["git", "credential", "fill"],
                input=credential_request(url),
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=env,
            )
        except subprocess.TimeoutExpired as e:
            raise CredentialError("git credential fill timed out", url=url) from e
        except OSError as e:
            raise CredentialError(f"Failed to run git credential fill: {e}", url=url) from e

        if result.returncode != 0:
            # no helper knows this host; prompting is disabled so Git gives up
            log.debug("git_credential_not_found", url=url, stderr=result.stderr.strip())
            return {}

        values = parse_credential_output(result.stdout)
        log.debug("credential_from_git_helper", url=url, keys=sorted(values))
        return values
