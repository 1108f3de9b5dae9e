import click

from localci.cli.commands.signoff.common import signoff_service, user_facing_errors
from localci.core.context import LocalciContext
from localci_shared.output.output import machine_output, user_output


@click.command("pr-url")
@click.pass_obj
def pr_url_cmd(ctx: LocalciContext) -> None:
    """Print the open pull request URL of the current branch, if any."""
    with user_facing_errors():
        url = signoff_service(ctx).pull_request()
    if not url:
        user_output("No open pull request for the current branch")
        raise SystemExit(1)
    machine_output(url)


@click.command("open-pr")
@click.option("--verbose", "-v", is_flag=True, help="Fill the body with full commit messages")
@click.pass_obj
def open_pr_cmd(ctx: LocalciContext, verbose: bool) -> None:
    """Open a pull request for the current branch."""
    with user_facing_errors():
        out = signoff_service(ctx).open_pr(verbose=verbose)
    machine_output(out.strip())
