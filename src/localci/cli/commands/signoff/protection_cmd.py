"""Install or remove the sign-off requirement on a branch."""

import click

from localci.cli.commands.signoff.common import signoff_service, user_facing_errors
from localci.core.context import LocalciContext
from localci_shared.output.output import user_output


@click.command("install")
@click.option(
    "--branch",
    "-b",
    default=None,
    help="Branch to protect. If not set, the repository's default branch is used",
)
@click.pass_obj
def install_cmd(ctx: LocalciContext, branch: str | None) -> None:
    """Require the sign-off check on a branch."""
    service = signoff_service(ctx)
    with user_facing_errors():
        target = service.install(branch)
    user_output(
        click.style("✓", fg="green")
        + f" GitHub branch {target!r} now requires check {service.check_name!r}"
    )


@click.command("uninstall")
@click.option(
    "--branch",
    "-b",
    default=None,
    help="Branch to unprotect. If not set, the repository's default branch is used",
)
@click.pass_obj
def uninstall_cmd(ctx: LocalciContext, branch: str | None) -> None:
    """Remove the sign-off requirement from a branch.

    This deletes all branch protection rules on the selected branch.
    """
    service = signoff_service(ctx)
    with user_facing_errors():
        target = service.uninstall(branch)
    user_output(
        click.style("✓", fg="green")
        + f" GitHub branch {target!r} no longer requires check {service.check_name!r}"
    )
