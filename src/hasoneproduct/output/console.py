"""Rich Console factory and theme for hasoneproduct output.

Consoles render to a StringIO buffer, preserving the
``format_result() -> str`` contract.  In non-TTY environments (tests,
pipes) Rich disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "hop.ok": "bold green",
        "hop.error": "bold red",
        "hop.warning": "bold yellow",
        "hop.op": "bold cyan",
        "hop.key": "dim",
        "hop.valid": "bold green",
        "hop.invalid": "bold red",
        "hop.product": "bold blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
