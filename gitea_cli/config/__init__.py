"""Configuration for gitea-cli.

Example:
    >>> from gitea_cli.config import CliSettings
    >>> settings = CliSettings.load()
    >>> settings.gitea_url
"""

from gitea_cli.config.settings import CliSettings

__all__ = ["CliSettings"]
