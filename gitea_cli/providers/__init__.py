"""Remote service clients.

Key Components:
    - GiteaRestClient: Gitea REST API (create and search repositories)
"""

from gitea_cli.providers.gitea_rest import GiteaRestClient

__all__ = ["GiteaRestClient"]
