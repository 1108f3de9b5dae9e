import click

from localci.cli.commands.signoff.common import signoff_service, user_facing_errors
from localci.core.context import LocalciContext
from localci_shared.output.output import user_output


@click.command("is-clean")
@click.pass_obj
def is_clean_cmd(ctx: LocalciContext) -> None:
    """Check that the local clone is safe to sign off.

    \b
    The clone is clean when:
    - there are no uncommitted changes
    - the local branch tracks a remote branch
    - every commit has been pushed
    Only the first failing condition is reported.
    """
    service = signoff_service(ctx)
    with user_facing_errors():
        service.ensure_clean()
    user_output(click.style("✓", fg="green") + " Repository is clean")
