"""
Domain models for gitea-cli.

These are the normalized internal representations passed between the
workflows and the Gitea REST adapter. Request/response models are Pydantic
models so that Gitea JSON is validated on the way in and serialized on the
way out; credentials are a plain frozen dataclass that never leaves the
process.

Example:
    Building a creation request::

        options = CreateRepoOptions(
            name="myproj",
            default_branch="main",
            trust_model=TrustModel.DEFAULT,
        )
        payload = options.to_payload()
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gitea_cli.exceptions import ValidationError


@dataclass(frozen=True)
class Credentials:
    """Authentication material for one Gitea endpoint.

    Scoped to a single command invocation and never persisted. Either piece
    may be missing; a token, when present, takes precedence over basic auth.

    Attributes:
        url: Server URL the credentials belong to
        username: Login name
        password: Password (or access token used as password)
        token: Gitea access token
    """

    url: str
    username: str | None = None
    password: str | None = None
    token: str | None = None

    @property
    def has_basic_auth(self) -> bool:
        return bool(self.username) and self.password is not None

    @property
    def is_complete(self) -> bool:
        """True when enough material is present to authenticate."""
        return bool(self.token) or self.has_basic_auth

    def __repr__(self) -> str:
        return f"Credentials(url={self.url!r}, username={self.username!r}, password=***, token=***)"


class TrustModel(str, Enum):
    """Gitea trust model for commit signature verification.

    Member names mirror the names users type on the command line; values are
    the strings the Gitea API expects.
    """

    DEFAULT = "default"
    COLLABORATOR = "collaborator"
    COMMITTER = "committer"
    COLLABORATOR_COMMITTER = "collaboratorcommitter"

    def __str__(self) -> str:
        return self.display_name

    @property
    def display_name(self) -> str:
        return _TRUST_MODEL_NAMES[self]

    @classmethod
    def parse(cls, text: str) -> "TrustModel":
        """Parse a trust model name exactly as shown in help text.

        Args:
            text: One of Default, Collaborator, Committer, CollaboratorCommitter

        Returns:
            Matching TrustModel

        Raises:
            ValidationError: If text is not one of the known names (matching
                is case-sensitive)
        """
        for member, name in _TRUST_MODEL_NAMES.items():
            if name == text:
                return member
        raise ValidationError(
            f"Invalid trust model: {text!r}",
            hint=f"Use one of {', '.join(_TRUST_MODEL_NAMES.values())}",
        )


_TRUST_MODEL_NAMES = {
    TrustModel.DEFAULT: "Default",
    TrustModel.COLLABORATOR: "Collaborator",
    TrustModel.COMMITTER: "Committer",
    TrustModel.COLLABORATOR_COMMITTER: "CollaboratorCommitter",
}

TRUST_MODEL_CHOICES = tuple(_TRUST_MODEL_NAMES.values())


class CreateRepoOptions(BaseModel):
    """Repository creation request sent to ``POST /user/repos``.

    ``auto_init`` is always false: the local checkout already holds the
    content, so the server must not pre-populate the repository.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    default_branch: str = Field(default="main", min_length=1)
    trust_model: TrustModel = TrustModel.DEFAULT
    auto_init: bool = False
    private: bool = False
    template: bool = False
    description: str | None = None
    gitignores: str | None = None
    issue_labels: str | None = None
    license: str | None = None
    readme: str | None = None

    @field_validator("name", "default_branch")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("auto_init")
    @classmethod
    def validate_no_auto_init(cls, v: bool) -> bool:
        if v:
            raise ValueError("auto_init is not supported for an existing checkout")
        return v

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body expected by the Gitea API.

        Optional text fields that are absent are omitted rather than sent
        as null.
        """
        return self.model_dump(mode="json", exclude_none=True)


class Repository(BaseModel):
    """Repository as returned by the Gitea API.

    Only the fields this tool reads are modelled; Gitea sends many more,
    which are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    clone_url: str
    default_branch: str = ""
    full_name: str
    description: str = ""
    html_url: str = ""

    @field_validator("description", "default_branch", "html_url", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class SearchReposResult(BaseModel):
    """Result of ``GET /repos/search``.

    ``ok`` is false when the server reported a failure even though the HTTP
    call succeeded; ``repositories`` is then empty and ``message`` carries
    the server's reason, if it sent one.
    """

    ok: bool
    repositories: list[Repository] = Field(default_factory=list)
    message: str | None = None
