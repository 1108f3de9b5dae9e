import logging

import click

from localci.cli.commands.config import config_group
from localci.cli.commands.glow import glow_group
from localci.cli.commands.signoff.group import signoff_group
from localci.cli.ensure import UserFacingCliError
from localci.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="localci")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Run CI chores locally: render markdown and sign off commits."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context()
        except ValueError as e:
            raise UserFacingCliError(f"Invalid .localci/config.toml: {e}") from e


cli.add_command(config_group)
cli.add_command(glow_group)
cli.add_command(signoff_group)


def main() -> None:
    """CLI entry point used by the `localci` console script."""
    cli()
