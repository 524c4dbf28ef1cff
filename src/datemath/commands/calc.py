"""calc — evaluate a date expression."""

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
  datemath calc today
  datemath calc 2022-01-31 -1 day
  datemath calc "Mar 31, 2021 + 15 weeks + 2 days"
  datemath calc 2 weeks and 3 days before July 11, 2022
  datemath calc 3 days from now
  datemath calc "2022-01-01 - 2022-01-08"
  datemath --today 2022-01-31 calc 2 weeks and 1 day ago
  datemath --json calc tomorrow + 1 month""",
)
@click.argument("expression", nargs=-1, required=True)
@click.pass_obj
def calc(app: AppContext, expression: tuple[str, ...]) -> None:
    """Evaluate a date EXPRESSION and print the date or day count.

    Words are joined with single spaces, so quoting is optional.
    """
    from datemath.services.calculator import CalculatorService

    app.emit(CalculatorService(app.settings).calculate(" ".join(expression)))
