"""Local Git working copy access and remote URL parsing.

Example:
    >>> from gitea_cli.git import LocalRepository, suggest_name
    >>> local = LocalRepository()
    >>> suggest_name(local.top_level())
    'myproj'
"""

from gitea_cli.git.local import LocalRepository, suggest_name
from gitea_cli.git.parser import GitUrlParser

__all__ = [
    "LocalRepository",
    "suggest_name",
    "GitUrlParser",
]
