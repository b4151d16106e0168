"""Rich Console factory and theme for countryws output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Rich drops color codes when not attached to a TTY.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

COUNTRYWS_THEME = Theme(
    {
        "cws.ok": "bold green",
        "cws.error": "bold red",
        "cws.op": "bold cyan",
        "cws.key": "dim",
        "cws.name": "bold",
        "cws.number": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    return Console(
        file=StringIO(),
        theme=COUNTRYWS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
