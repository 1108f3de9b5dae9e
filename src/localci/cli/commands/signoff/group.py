"""Signoff command group: sign off commits from the developer machine.

Moving the final CI verdict back to the developer's machine saves CI time:
once local checks pass on a clean, pushed clone, the developer posts a
successful commit status that branch protection can require.
"""

from dataclasses import replace
from pathlib import Path

import click

from localci.cli.commands.signoff.check_cmd import is_clean_cmd
from localci.cli.commands.signoff.create_cmd import create_cmd
from localci.cli.commands.signoff.exec_cmd import exec_cmd, terminal_cmd
from localci.cli.commands.signoff.pr_cmd import open_pr_cmd, pr_url_cmd
from localci.cli.commands.signoff.protection_cmd import install_cmd, uninstall_cmd
from localci.cli.commands.signoff.query_cmd import (
    current_branch_cmd,
    default_branch_cmd,
    sha_cmd,
    whoami_cmd,
)
from localci.core.context import LocalciContext, create_sandbox


@click.group("signoff")
@click.option(
    "--source",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Local git clone to work on (defaults to the current directory)",
)
@click.option(
    "--token",
    envvar=["GITHUB_TOKEN", "GH_TOKEN"],
    show_envvar=True,
    default=None,
    help="GitHub token used by gh inside the sandbox",
)
@click.option(
    "--check-name",
    envvar="LOCALCI_CHECK_NAME",
    show_envvar=True,
    default=None,
    help="Status check name (defaults to signoff.check_name from config, then 'signoff')",
)
@click.option("--image", default=None, help="Container image providing git and gh")
@click.pass_context
def signoff_group(
    click_ctx: click.Context,
    source: Path | None,
    token: str | None,
    check_name: str | None,
    image: str | None,
) -> None:
    """Sign off commits and require sign-off on branches."""
    ctx: LocalciContext = click_ctx.obj

    config = ctx.config
    if check_name:
        config = replace(config, check_name=check_name)
    if image:
        config = replace(config, image=image)

    # Only build a real sandbox if not already provided (e.g., by tests)
    sandbox = ctx.sandbox
    if sandbox is None:
        sandbox = create_sandbox(
            source_dir=source if source is not None else ctx.cwd,
            token=token,
            image=config.image,
        )

    click_ctx.obj = replace(ctx, config=config, sandbox=sandbox)


signoff_group.add_command(is_clean_cmd)
signoff_group.add_command(create_cmd)
signoff_group.add_command(install_cmd)
signoff_group.add_command(uninstall_cmd)
signoff_group.add_command(sha_cmd)
signoff_group.add_command(whoami_cmd)
signoff_group.add_command(current_branch_cmd)
signoff_group.add_command(default_branch_cmd)
signoff_group.add_command(pr_url_cmd)
signoff_group.add_command(open_pr_cmd)
signoff_group.add_command(exec_cmd)
signoff_group.add_command(terminal_cmd)
