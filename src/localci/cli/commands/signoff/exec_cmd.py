"""Escape hatches for running arbitrary commands in the sandbox."""

import click

from localci.cli.commands.signoff.common import signoff_service, user_facing_errors
from localci.core.context import LocalciContext
from localci_shared.output.output import machine_output


@click.command("exec", context_settings={"ignore_unknown_options": True})
@click.option(
    "--show",
    type=click.Choice(["out", "stdout", "stderr", "exit-code"]),
    default="out",
    show_default=True,
    help="What to print: combined output, one stream, or the exit code",
)
@click.argument("args", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
def exec_cmd(ctx: LocalciContext, show: str, args: tuple[str, ...]) -> None:
    """Run any command in the sandbox, e.g. `exec -- git log -1`.

    With --show out (the default) the command must succeed. With the other
    modes its exit status is reported, not enforced.
    """
    service = signoff_service(ctx)
    with user_facing_errors():
        if show == "out":
            machine_output(service.run(args).strip())
            return
        result = service.exec(args)

    if show == "stdout":
        machine_output(result.stdout, nl=False)
    elif show == "stderr":
        machine_output(result.stderr, nl=False)
    else:
        machine_output(str(result.exit_code))


@click.command("terminal")
@click.pass_obj
def terminal_cmd(ctx: LocalciContext) -> None:
    """Open an interactive shell in the sandbox with git and gh."""
    with user_facing_errors():
        signoff_service(ctx).terminal()
