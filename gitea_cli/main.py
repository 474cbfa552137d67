"""CLI entry point for gitea-cli."""

import asyncio
import sys
from collections.abc import Callable
from typing import Any

import click
import structlog

from gitea_cli.config.settings import CliSettings
from gitea_cli.credentials import CredentialResolver
from gitea_cli.exceptions import ConfigurationError, GiteaCliError
from gitea_cli.models.domain import TRUST_MODEL_CHOICES, Credentials
from gitea_cli.options import RepoFields
from gitea_cli.providers.gitea_rest import GiteaRestClient
from gitea_cli.utils.console import print_error
from gitea_cli.utils.logging_config import configure_logging
from gitea_cli.workflows import browse, provisioning
from gitea_cli.workflows import search as search_workflow

log = structlog.get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _run_command(name: str, func: Callable[[], Any]) -> Any:
    """Run a command body, turning every failure into one stderr line."""
    try:
        return func()
    except GiteaCliError as e:
        print_error(str(e))
        log.debug(f"{name}_error", exc_info=True)
        sys.exit(1)
    except (KeyboardInterrupt, click.Abort):
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        log.error(f"{name}_unexpected", exc_info=True)
        sys.exit(1)


def create_cli(settings: CliSettings) -> click.Group:
    """Build the command tree with defaults taken from settings.

    ``--gitea-url`` defaults to ``settings.gitea_url`` and becomes a
    required flag when that is unset.
    """

    def client_factory(url: str, credentials: Credentials | None = None) -> GiteaRestClient:
        return GiteaRestClient(url, credentials, timeout=settings.timeout)

    # click treats an explicit default=None as satisfying required
    url_kwargs: dict[str, Any] = {"required": True}
    if settings.gitea_url is not None:
        url_kwargs = {"default": settings.gitea_url, "show_default": True}
    gitea_url_option = click.option(
        "--gitea-url",
        "gitea_url",
        help="Gitea server URL [env: GITEA_URL]",
        **url_kwargs,
    )
    path_option = click.option(
        "--path",
        type=click.Path(file_okay=False),
        default=None,
        help="Local path [default: current folder]",
    )
    remote_option = click.option(
        "--remote",
        default=settings.default_remote,
        show_default=True,
        help="Remote name",
    )

    @click.group()
    @click.option(
        "--log-level",
        type=click.Choice(LOG_LEVELS, case_sensitive=False),
        default=settings.log_level,
        show_default=True,
        help="Logging level",
    )
    @click.version_option(package_name="gitea-cli")
    def cli(log_level: str) -> None:
        """gitea-cli: create, browse and search Gitea repositories."""
        configure_logging(log_level)

    @cli.group()
    def repo() -> None:
        """Work with Gitea repositories."""

    @repo.command(name="search")
    @gitea_url_option
    @click.option("--contains", default=None, help="Only repositories whose name contains TEXT")
    def search_command(gitea_url: str, contains: str | None) -> None:
        """Search repositories on the Gitea server."""
        args = search_workflow.SearchArgs(gitea_url=gitea_url, contains=contains)

        async def _search() -> bool:
            async with client_factory(gitea_url) as client:
                result = await search_workflow.search(client, args.contains)
            return result.ok

        if not _run_command("search", lambda: asyncio.run(_search())):
            sys.exit(1)

    @repo.command(name="browse")
    @remote_option
    @path_option
    def browse_command(remote: str, path: str | None) -> None:
        """Open a remote's repository page in the default browser."""
        args = browse.BrowseArgs(remote=remote, path=path)
        _run_command(
            "browse",
            lambda: browse.resolve_and_open(args.remote, args.path, opener=click.launch),
        )

    @repo.command(name="create")
    @path_option
    @gitea_url_option
    @click.option("-d", "--description", default=None, help="Description")
    @click.option("--gitea-name", default=None, help="Gitea repository name [default: top-level Git folder]")
    @click.option("-b", "--branch", default=settings.default_branch, show_default=True, help="Default branch")
    @remote_option
    @click.option("--private", is_flag=True, help="Make repository private")
    @click.option("--template", is_flag=True, help="Make repository a template")
    @click.option(
        "--trust-model",
        default="Default",
        show_default=True,
        help=f"Trust model; one of {', '.join(TRUST_MODEL_CHOICES)}",
    )
    @click.option("--issue-labels", default=None, help="Issue label set")
    def create_command(
        path: str | None,
        gitea_url: str,
        description: str | None,
        gitea_name: str | None,
        branch: str,
        remote: str,
        private: bool,
        template: bool,
        trust_model: str,
        issue_labels: str | None,
    ) -> None:
        """Create a Gitea repository and add it as a local remote."""
        args = provisioning.CreateArgs(
            gitea_url=gitea_url,
            path=path,
            remote=remote,
            fields=RepoFields(
                gitea_name=gitea_name,
                default_branch=branch,
                trust_model=trust_model,
                private=private,
                template=template,
                description=description,
                issue_labels=issue_labels,
            ),
        )
        provisioner = provisioning.RepositoryProvisioner(
            resolver=CredentialResolver(),
            client_factory=client_factory,
        )

        result = _run_command("create", lambda: asyncio.run(provisioner.run(args)))
        provisioning.report(result)
        if not result.succeeded:
            sys.exit(1)

    return cli


def main() -> None:
    """Console script entry point."""
    try:
        settings = CliSettings.load()
    except ConfigurationError as e:
        print_error(str(e))
        sys.exit(1)
    create_cli(settings)()


if __name__ == "__main__":
    main()
