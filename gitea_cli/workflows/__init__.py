"""Command workflows: create, browse and search."""

from gitea_cli.workflows.browse import BrowseArgs, resolve_and_open
from gitea_cli.workflows.provisioning import CreateArgs, ProvisioningResult, RepositoryProvisioner, Stage
from gitea_cli.workflows.search import SearchArgs

__all__ = [
    "BrowseArgs",
    "CreateArgs",
    "ProvisioningResult",
    "RepositoryProvisioner",
    "SearchArgs",
    "Stage",
    "resolve_and_open",
]
