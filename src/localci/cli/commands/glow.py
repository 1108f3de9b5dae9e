"""Markdown rendering commands."""

from pathlib import Path

import click

from localci.cli.ensure import UserFacingCliError
from localci.core.context import LocalciContext
from localci.core.markdown import (
    MIN_WIDTH,
    MarkdownSourceError,
    render_markdown,
    render_markdown_file,
)
from localci_shared.output.output import machine_output

_width_option = click.option(
    "--width",
    type=click.IntRange(min=MIN_WIDTH),
    default=None,
    help="Render width in columns (defaults to glow.width from config)",
)


@click.group("glow")
def glow_group() -> None:
    """Render markdown for display on a terminal."""
    pass


@glow_group.command("render")
@click.argument("text")
@_width_option
@click.pass_obj
def render_cmd(ctx: LocalciContext, text: str, width: int | None) -> None:
    """Render a markdown TEXT string. Use '-' to read from stdin."""
    if text == "-":
        text = click.get_text_stream("stdin").read()
    machine_output(
        render_markdown(text, width=width or ctx.config.markdown_width),
        nl=False,
    )


@glow_group.command("readme")
@click.argument("file", type=click.Path(path_type=Path), default="README.md")
@_width_option
@click.pass_obj
def readme_cmd(ctx: LocalciContext, file: Path, width: int | None) -> None:
    """Print a markdown FILE (README.md by default) in the terminal."""
    path = file if file.is_absolute() else ctx.cwd / file
    try:
        rendered = render_markdown_file(path, width=width or ctx.config.markdown_width)
    except MarkdownSourceError as e:
        raise UserFacingCliError(str(e)) from e
    machine_output(rendered, nl=False)
