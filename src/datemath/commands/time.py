"""time — parse a clock time."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datemath.commands._base import DmCommand

if TYPE_CHECKING:
    from datemath.commands._context import AppContext


@click.command(
    cls=DmCommand,
    context_settings={"ignore_unknown_options": True},
    examples="""\
  datemath time 3pm
  datemath time 1530
  datemath time 9:30
  datemath time 12:00:30 pm
  datemath --json time 7:05am""",
)
@click.argument("value", nargs=-1, required=True)
@click.pass_obj
def time(app: AppContext, value: tuple[str, ...]) -> None:
    """Parse a clock time VALUE and print it as HH:MM:SS."""
    from datemath.services.calculator import CalculatorService

    app.emit(CalculatorService(app.settings).parse_time(" ".join(value)))
