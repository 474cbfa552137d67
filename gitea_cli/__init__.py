"""gitea-cli: create, browse and search Gitea repositories from a local checkout.

``repo create`` creates a repository on a Gitea server and adds it as a
remote of the local working copy; ``repo browse`` opens a remote's web
page; ``repo search`` lists repositories on the server.
"""

__version__ = "0.1.0"
