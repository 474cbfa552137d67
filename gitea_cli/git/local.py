"""Local Git working copy access.

This module wraps the three Git operations gitea-cli needs from the local
checkout: finding the top-level directory, adding a remote tracking entry,
and reading an existing remote's URL. It also derives the default remote
repository name from the top-level directory.

Key Exports:
    LocalRepository: Lazy wrapper around a GitPython ``Repo``.
    suggest_name: Derive a repository name from a top-level path.

Example:
    >>> from gitea_cli.git.local import LocalRepository, suggest_name
    >>> local = LocalRepository("/work/myproj/src")
    >>> top = local.top_level()
    >>> suggest_name(top)
    'myproj'

Dependencies:
    Requires GitPython (gitpython) package for repository access.
"""

from pathlib import Path

import git
import structlog
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from gitea_cli.exceptions import (
    InvalidPathError,
    NotGitRepositoryError,
    RemoteAddError,
    RemoteNotFoundError,
)

log = structlog.get_logger(__name__)


class LocalRepository:
    """A local Git working copy, located from any path inside it.

    The ``git.Repo`` object is opened on first use, so constructing a
    LocalRepository never fails; the first operation raises
    NotGitRepositoryError if the path is not inside a working copy.

    Attributes:
        path: Resolved absolute path the repository is searched from.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize for a path.

        Args:
            path: Any path inside the working copy. Defaults to the current
                directory. Parent directories are searched automatically.
        """
        self.path = Path(path if path is not None else ".").resolve()
        self._repo: git.Repo | None = None

    def _get_repo(self) -> git.Repo:
        if self._repo is None:
            try:
                repo = git.Repo(self.path, search_parent_directories=True)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise NotGitRepositoryError(str(self.path)) from e
            if repo.bare or repo.working_tree_dir is None:
                raise NotGitRepositoryError(str(self.path))
            self._repo = repo
        return self._repo

    def top_level(self) -> Path:
        """Return the top-level directory of the working copy.

        Raises:
            NotGitRepositoryError: If the path is not inside a working copy.
        """
        top = Path(self._get_repo().working_tree_dir)
        log.debug("top_level_resolved", path=str(self.path), top_level=str(top))
        return top

    def remote_names(self) -> list[str]:
        return [remote.name for remote in self._get_repo().remotes]

    def remote_add(self, name: str, url: str) -> None:
        """Add a remote tracking entry.

        Args:
            name: Remote alias (e.g. 'origin')
            url: Clone URL the alias points to

        Raises:
            NotGitRepositoryError: If not inside a working copy.
            RemoteAddError: If Git refuses, e.g. the alias already exists.
        """
        repo = self._get_repo()
        if name in self.remote_names():
            raise RemoteAddError(name, url, "remote already exists")
        try:
            repo.create_remote(name, url)
        except GitCommandError as e:
            reason = (e.stderr or str(e)).strip()
            raise RemoteAddError(name, url, reason) from e
        log.info("remote_added", remote=name, url=url)

    def remote_url(self, name: str) -> str:
        """Return the URL configured for a remote alias.

        Raises:
            NotGitRepositoryError: If not inside a working copy.
            RemoteNotFoundError: If no remote has that alias.
        """
        remotes = self._get_repo().remotes
        for remote in remotes:
            if remote.name == name:
                return remote.url
        raise RemoteNotFoundError(name, available=[remote.name for remote in remotes])


def suggest_name(top_level: str | Path) -> str:
    """Derive the default remote repository name from a top-level path.

    The name is the final path segment. This is a pure function: the same
    path always yields the same name.

    Args:
        top_level: Top-level directory of a working copy.

    Returns:
        Final path segment, e.g. 'myproj' for '/work/myproj'.

    Raises:
        InvalidPathError: If the path has no final segment (filesystem root)
            or the segment is not valid Unicode.
    """
    name = Path(top_level).name
    if not name or name in (".", ".."):
        raise InvalidPathError(str(top_level))
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        # undecodable bytes surface as lone surrogates
        raise InvalidPathError(repr(top_level)) from e
    return name
