"""User-facing report lines.

Info lines go to stdout behind a green ``->`` marker, error lines to stderr
behind a red one.
"""

import click

MARKER = "->"


def print_info(message: str) -> None:
    click.echo(f"{click.style(MARKER, fg='bright_green')} {message}")


def print_error(message: str) -> None:
    click.echo(f"{click.style(MARKER, fg='bright_red')} {message}", err=True)
