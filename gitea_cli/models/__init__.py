"""Core domain models for gitea-cli.

Key Models:
    - Credentials: Authentication material for one Gitea server
    - CreateRepoOptions: Validated repository creation request
    - Repository: Repository returned by the Gitea API
    - SearchReposResult: Outcome of a repository search

Enums:
    - TrustModel: Commit signature trust policy
"""

from gitea_cli.models.domain import (
    TRUST_MODEL_CHOICES,
    CreateRepoOptions,
    Credentials,
    Repository,
    SearchReposResult,
    TrustModel,
)

__all__ = [
    "TRUST_MODEL_CHOICES",
    "CreateRepoOptions",
    "Credentials",
    "Repository",
    "SearchReposResult",
    "TrustModel",
]
