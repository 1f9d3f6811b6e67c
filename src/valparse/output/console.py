"""Rich Console factory and theme for valparse output.

Consoles render to a StringIO buffer so renderers keep a ``-> str``
contract. In non-TTY environments (tests, pipes) Rich disables color.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

VP_THEME = Theme(
    {
        "vp.ok": "bold green",
        "vp.error": "bold red",
        "vp.warning": "bold yellow",
        "vp.op": "bold cyan",
        "vp.key": "dim",
        "vp.label": "bold",
        "vp.name": "bold blue",
        "vp.value": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=VP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
