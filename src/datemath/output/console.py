"""Rich Console factory and theme for datemath output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DM_THEME = Theme(
    {
        "dm.ok": "bold green",
        "dm.error": "bold red",
        "dm.warning": "bold yellow",
        "dm.op": "bold cyan",
        "dm.key": "dim",
        "dm.value": "bold",
        "dm.outcome.date": "bold green",
        "dm.outcome.difference": "bold magenta",
        "dm.outcome.time": "bold blue",
    }
)

_OUTCOME_STYLES: dict[str, str] = {
    "date": "dm.outcome.date",
    "difference": "dm.outcome.difference",
    "time": "dm.outcome.time",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=DM_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_outcome(kind: str) -> str:
    """Return the Rich style name for an outcome kind."""
    return _OUTCOME_STYLES.get(kind, "dm.value")
