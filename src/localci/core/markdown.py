"""Render markdown as styled terminal text."""

import io
from pathlib import Path

from rich.console import Console
from rich.markdown import Markdown
from rich.theme import Theme

DEFAULT_WIDTH = 80

MIN_WIDTH = 20

DARK_CODE_THEME = "monokai"

# Fixed dark palette; every render uses it regardless of the user's terminal.
DARK_THEME = Theme(
    {
        "markdown.h1": "bold #ffff87 on #5f5fff",
        "markdown.h1.border": "#5f5fff",
        "markdown.h2": "bold #00afff",
        "markdown.h3": "bold #00afff",
        "markdown.h4": "bold #00afff",
        "markdown.h5": "#00afff",
        "markdown.h6": "#00af5f",
        "markdown.code": "#ff5f87 on #303030",
        "markdown.block_quote": "italic #8a8a8a",
        "markdown.link": "#00af87",
        "markdown.link_url": "underline #00af87",
        "markdown.item.bullet": "bold #d0d0d0",
        "markdown.item.number": "bold #d0d0d0",
        "markdown.hr": "#585858",
        "markdown.em": "italic",
        "markdown.strong": "bold",
        "markdown.text": "#d0d0d0",
    }
)


class MarkdownSourceError(RuntimeError):
    """Error raised when markdown input cannot be read."""


def render_markdown(text: str, *, width: int = DEFAULT_WIDTH) -> str:
    """Render a markdown string for display on a terminal.

    Output is deterministic for a given input and width: colors are forced
    to truecolor and the width is fixed, so nothing depends on the current
    terminal.
    """
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width,
        theme=DARK_THEME,
        force_terminal=True,
        color_system="truecolor",
        highlight=False,
        legacy_windows=False,
    )
    # Terminal hyperlinks carry a random id, so links render as plain styled text.
    console.print(Markdown(text, code_theme=DARK_CODE_THEME, hyperlinks=False))
    return buffer.getvalue()


def read_markdown(path: Path) -> str:
    """Read a markdown file.

    Raises:
        MarkdownSourceError: If the file cannot be read
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MarkdownSourceError(f"could not read {path.name}: {e}") from e


def render_markdown_file(path: Path, *, width: int = DEFAULT_WIDTH) -> str:
    return render_markdown(read_markdown(path), width=width)
