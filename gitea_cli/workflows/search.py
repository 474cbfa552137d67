"""Search repositories on a Gitea server and print the matches."""

from dataclasses import dataclass

import structlog

from gitea_cli.models.domain import SearchReposResult
from gitea_cli.providers.gitea_rest import GiteaRestClient
from gitea_cli.utils.console import print_error, print_info

log = structlog.get_logger(__name__)

NO_DESCRIPTION = "(no description)"
NO_MATCHES = "No matching repositories"


@dataclass(frozen=True)
class SearchArgs:
    """Arguments of ``repo search``."""

    gitea_url: str | None
    contains: str | None = None


async def search(client: GiteaRestClient, contains: str | None = None) -> SearchReposResult:
    """Run an anonymous search and print the result.

    Raises:
        ApiError: On network or transport failure
    """
    if contains:
        print_info(f"Searching {client.base_url} for '{contains}'")
    else:
        print_info(f"Listing repositories on {client.base_url}")

    result = await client.search_repositories(contains)
    render(result)
    return result


def render_rows(result: SearchReposResult) -> list[str]:
    """Format a result as ``full_name | clone_url | description`` rows.

    A failed search yields no rows; a successful empty one yields the
    single no-matches line.
    """
    if not result.ok:
        return []
    if not result.repositories:
        return [NO_MATCHES]
    return [
        f"{repo.full_name} | {repo.clone_url} | {repo.description or NO_DESCRIPTION}"
        for repo in result.repositories
    ]


def render(result: SearchReposResult) -> None:
    for row in render_rows(result):
        print_info(row)
    if not result.ok and result.message:
        print_error(f"Search failed: {result.message}")
