"""Build the repository creation request from command-line fields."""

from dataclasses import dataclass

import pydantic

from gitea_cli.exceptions import ValidationError
from gitea_cli.models.domain import CreateRepoOptions, TrustModel

DEFAULT_BRANCH = "main"


@dataclass(frozen=True)
class RepoFields:
    """Repository fields as supplied on the command line.

    ``None`` means the flag was not given; defaults are applied by
    build_options, not here.
    """

    gitea_name: str | None = None
    default_branch: str | None = None
    trust_model: str | None = None
    private: bool = False
    template: bool = False
    description: str | None = None
    gitignores: str | None = None
    issue_labels: str | None = None
    license: str | None = None
    readme: str | None = None


def build_options(name: str, fields: RepoFields) -> CreateRepoOptions:
    """Assemble a validated CreateRepoOptions.

    Rules:
        - default_branch defaults to 'main'
        - trust_model defaults to Default; a given value must match a
          variant name exactly, there is no fallback
        - auto_init is always false
        - optional text fields pass through unchanged

    Args:
        name: Resolved repository name (explicit --gitea-name or the name
            suggested from the top-level directory)
        fields: Command-line fields

    Returns:
        CreateRepoOptions ready to send

    Raises:
        ValidationError: If the trust model is unknown or name/branch is empty
    """
    trust_model = TrustModel.DEFAULT
    if fields.trust_model is not None:
        trust_model = TrustModel.parse(fields.trust_model)

    default_branch = DEFAULT_BRANCH if fields.default_branch is None else fields.default_branch

    try:
        return CreateRepoOptions(
            name=name,
            default_branch=default_branch,
            trust_model=trust_model,
            auto_init=False,
            private=fields.private,
            template=fields.template,
            description=fields.description,
            gitignores=fields.gitignores,
            issue_labels=fields.issue_labels,
            license=fields.license,
            readme=fields.readme,
        )
    except pydantic.ValidationError as e:
        problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise ValidationError(f"Invalid repository options: {problems}") from e
