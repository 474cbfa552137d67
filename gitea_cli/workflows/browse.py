"""Open a remote's repository page in the default browser."""

from collections.abc import Callable
from dataclasses import dataclass

import click
import structlog

from gitea_cli.exceptions import GiteaCliError, InvalidGitUrlError
from gitea_cli.git.local import LocalRepository
from gitea_cli.git.parser import GitUrlParser
from gitea_cli.utils.console import print_info

log = structlog.get_logger(__name__)

Opener = Callable[[str], int]


@dataclass(frozen=True)
class BrowseArgs:
    """Arguments of ``repo browse``."""

    remote: str = "origin"
    path: str | None = None


def web_url(remote_url: str) -> str:
    """Web page for a remote URL, or the URL itself if it cannot be parsed."""
    try:
        return GitUrlParser(remote_url).web_url
    except InvalidGitUrlError:
        log.debug("remote_url_not_parsed", url=remote_url)
        return remote_url


def resolve_and_open(
    remote_name: str,
    path: str | None = None,
    opener: Opener = click.launch,
    local_factory: Callable[[str | None], LocalRepository] = LocalRepository,
) -> str:
    """Look up a remote's URL and open its web page.

    Args:
        remote_name: Remote alias, e.g. 'origin'
        path: Any path inside the working copy (default: current directory)
        opener: Callable that opens a URL and returns 0 on success

    Returns:
        The URL that was opened

    Raises:
        NotGitRepositoryError: If path is not inside a working copy
        RemoteNotFoundError: If no remote has that alias; nothing is opened
        GiteaCliError: If the opener reports a failure
    """
    remote_url = local_factory(path).remote_url(remote_name)
    url = web_url(remote_url)

    log.info("opening_remote", remote=remote_name, url=url)
    status = opener(url)
    if status != 0:
        raise GiteaCliError(f"Error opening '{url}': opener exited with status {status}")

    print_info(f"Opened '{url}'")
    return url
