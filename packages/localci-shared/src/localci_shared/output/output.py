"""Output helpers separating user-facing messages from machine-readable results."""

from typing import Any

import click


def user_output(message: Any = None, nl: bool = True) -> None:
    """Write a user-facing message to stderr.

    Status lines, progress and errors go here so stdout stays clean for
    results that may be piped into other tools.
    """
    click.echo(message, nl=nl, err=True)


def machine_output(message: Any = None, nl: bool = True) -> None:
    """Write a result to stdout."""
    click.echo(message, nl=nl)
