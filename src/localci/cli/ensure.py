"""CLI error handling for user-facing failures."""

from typing import IO, Any

import click

from localci_shared.output.output import user_output


class UserFacingCliError(click.ClickException):
    """Error shown to the user as a red `Error:` line, exiting with status 1.

    Commands raise this instead of printing and calling SystemExit themselves,
    so the message format stays the same across commands.
    """

    def show(self, file: IO[Any] | None = None) -> None:
        user_output(click.style("Error: ", fg="red") + self.format_message())
