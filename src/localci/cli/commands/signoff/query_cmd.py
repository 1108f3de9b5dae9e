"""Single-value queries against the clone and the GitHub repository."""

import click

from localci.cli.commands.signoff.common import signoff_service, user_facing_errors
from localci.core.context import LocalciContext
from localci_shared.output.output import machine_output


@click.command("sha")
@click.pass_obj
def sha_cmd(ctx: LocalciContext) -> None:
    """Print the commit SHA of HEAD."""
    with user_facing_errors():
        machine_output(signoff_service(ctx).sha())


@click.command("whoami")
@click.pass_obj
def whoami_cmd(ctx: LocalciContext) -> None:
    """Print the GitHub login the token authenticates as."""
    with user_facing_errors():
        machine_output(signoff_service(ctx).whois())


@click.command("current-branch")
@click.pass_obj
def current_branch_cmd(ctx: LocalciContext) -> None:
    with user_facing_errors():
        machine_output(signoff_service(ctx).current_branch())


@click.command("default-branch")
@click.pass_obj
def default_branch_cmd(ctx: LocalciContext) -> None:
    """Print the default branch configured on GitHub."""
    with user_facing_errors():
        machine_output(signoff_service(ctx).default_branch())
