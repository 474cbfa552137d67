"""Repository provisioning: create a Gitea repository and track it locally.

The workflow runs these stages in order, stopping at the first failure::

    resolving context -> resolving credentials -> building options
        -> creating -> adding remote -> done

Nothing local is touched before the repository exists on the server, so any
failure up to and including ``creating`` leaves the checkout unchanged and
the command can simply be rerun. A failure while adding the remote does not
delete the new repository: the result still carries it, and the report
tells the user how to add the remote by hand.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

import structlog

from gitea_cli.credentials import CredentialResolver
from gitea_cli.exceptions import ConfigurationError, GiteaCliError, ValidationError
from gitea_cli.git.local import LocalRepository, suggest_name
from gitea_cli.models.domain import Credentials, Repository
from gitea_cli.options import RepoFields, build_options
from gitea_cli.providers.gitea_rest import GiteaRestClient
from gitea_cli.utils.console import print_error, print_info

log = structlog.get_logger(__name__)

ClientFactory = Callable[[str, Credentials | None], GiteaRestClient]
LocalFactory = Callable[[str | None], LocalRepository]


class Stage(str, Enum):
    """Stage at which provisioning failed."""

    MISSING_URL = "missing-url"
    LOCAL_CONTEXT = "local-context"
    CREDENTIALS = "credentials"
    OPTIONS = "options"
    REMOTE_CREATE = "remote-create"
    REMOTE_ADD = "remote-add"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CreateArgs:
    """Arguments of ``repo create``."""

    gitea_url: str | None
    path: str | None = None
    remote: str = "origin"
    fields: RepoFields = field(default_factory=RepoFields)


@dataclass
class ProvisioningResult:
    """Outcome of one provisioning run.

    ``repository`` is set whenever the server created the repository, even
    if a later stage failed.
    """

    repository: Repository | None = None
    remote_name: str | None = None
    branch: str | None = None
    failed_stage: Stage | None = None
    error: GiteaCliError | None = None

    @property
    def succeeded(self) -> bool:
        return self.failed_stage is None

    @property
    def partial(self) -> bool:
        """Repository created but not tracked locally."""
        return self.repository is not None and self.failed_stage is not None

    @property
    def push_command(self) -> str | None:
        if self.repository is None or self.remote_name is None:
            return None
        branch = self.repository.default_branch or self.branch
        return f"git push -u {self.remote_name} {branch}"


class RepositoryProvisioner:
    """Runs the ``repo create`` workflow.

    Collaborators are injectable so tests can substitute them; the
    defaults talk to the real Git checkout and Gitea server.
    """

    def __init__(
        self,
        resolver: CredentialResolver | None = None,
        client_factory: ClientFactory | None = None,
        local_factory: LocalFactory = LocalRepository,
    ) -> None:
        self.resolver = resolver or CredentialResolver()
        self.client_factory: ClientFactory = client_factory or (lambda url, creds: GiteaRestClient(url, creds))
        self.local_factory = local_factory

    async def run(self, args: CreateArgs) -> ProvisioningResult:
        """Execute the workflow.

        Never raises GiteaCliError: every failure is captured in the
        returned result together with the stage it happened in.
        """
        result = ProvisioningResult()

        if not args.gitea_url:
            return self._fail(
                result,
                Stage.MISSING_URL,
                ConfigurationError("Missing Gitea URL", hint="Pass --gitea-url or set GITEA_URL"),
            )
        url = args.gitea_url

        local = self.local_factory(args.path)
        try:
            top_level = local.top_level()
        except GiteaCliError as e:
            return self._fail(result, Stage.LOCAL_CONTEXT, e)

        try:
            credentials = self.resolver.fill(url)
        except GiteaCliError as e:
            return self._fail(result, Stage.CREDENTIALS, e)

        try:
            if not args.remote.strip():
                raise ValidationError("Remote name must not be empty")
            name = args.fields.gitea_name if args.fields.gitea_name is not None else suggest_name(top_level)
            options = build_options(name, args.fields)
        except GiteaCliError as e:
            return self._fail(result, Stage.OPTIONS, e)
        result.branch = options.default_branch

        try:
            async with self.client_factory(url, credentials) as client:
                result.repository = await client.create_repository(options)
        except GiteaCliError as e:
            return self._fail(result, Stage.REMOTE_CREATE, e)

        try:
            local.remote_add(args.remote, result.repository.clone_url)
        except GiteaCliError as e:
            # the new repository stays; only local tracking is missing
            return self._fail(result, Stage.REMOTE_ADD, e)

        result.remote_name = args.remote
        log.info("provisioning_complete", full_name=result.repository.full_name, remote=args.remote)
        return result

    @staticmethod
    def _fail(result: ProvisioningResult, stage: Stage, error: GiteaCliError) -> ProvisioningResult:
        log.info("provisioning_failed", stage=str(stage), error=error.message)
        result.failed_stage = stage
        result.error = error
        return result


def report(result: ProvisioningResult) -> None:
    """Print the outcome: what succeeded first, then the failure if any."""
    if result.repository is not None:
        print_info(f"Created remote repository: {result.repository.clone_url}")

    if result.succeeded:
        print_info(f"Tracking remote repository locally as: {result.remote_name}")
        print_info(f"Push: {result.push_command}")
        return

    if result.error is not None:
        print_error(str(result.error))
