import click

from localci.cli.commands.signoff.common import signoff_service, user_facing_errors
from localci.core.context import LocalciContext
from localci_shared.output.output import user_output


@click.command("create")
@click.pass_obj
def create_cmd(ctx: LocalciContext) -> None:
    """Sign off the current commit.

    Ensures the repository is clean, then marks the configured status
    check as successful on HEAD.
    """
    service = signoff_service(ctx)
    with user_facing_errors():
        result = service.create()
    user_output(click.style("✓", fg="green") + f" Signed off on {result.sha}")
