"""Interactive prompt backend, the last resort when nothing else knows."""

import sys

import click


class PromptBackend:
    """Ask the user on the terminal.

    Only available when stdin is a terminal, so scripted runs fail with a
    CredentialError instead of hanging.
    """

    PROMPTS = {
        "username": ("Username for {url}", False),
        "password": ("Password for {url}", True),
    }

    def __init__(self, interactive: bool | None = None) -> None:
        self._interactive = interactive

    @property
    def name(self) -> str:
        return "prompt"

    @property
    def available(self) -> bool:
        if self._interactive is not None:
            return self._interactive
        return sys.stdin.isatty()

    def get(self, url: str, key: str) -> str | None:
        if key not in self.PROMPTS:
            return None
        text, hide_input = self.PROMPTS[key]
        value = click.prompt(text.format(url=url), hide_input=hide_input, err=True)
        return value or None
