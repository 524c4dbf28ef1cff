"""Expression evaluation — fold operations onto anchors, or count days.

Evaluation is pure: given an expression and a reference date it produces
an outcome unless a date leaves years 1 to 9999. Dates are shifted with
fixed-length periods (see :mod:`datemath.domain.periods`), so
``+ 1 month`` is exactly 30 days.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from datemath.domain.expressions import (
    AnchorDiff,
    AnchorOnly,
    AnchorWithChain,
    Expression,
    PeriodChain,
)
from datemath.domain.periods import apply_all


@dataclass(frozen=True)
class ResolvedDate:
    """A concrete calendar date."""

    value: date

    def __str__(self) -> str:
        return self.value.isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "date", "date": self.value.isoformat()}


@dataclass(frozen=True)
class DayDifference:
    """An unsigned day count; which date was earlier is not kept."""

    days: int

    def __post_init__(self) -> None:
        if self.days < 0:
            msg = f"Day difference must be non-negative, got {self.days}"
            raise ValueError(msg)

    def __str__(self) -> str:
        unit = "day" if self.days == 1 else "days"
        return f"{self.days} {unit}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "difference", "days": self.days}


Outcome = ResolvedDate | DayDifference


def evaluate(expression: Expression, today: date) -> Outcome:
    """Compute the outcome of *expression* relative to *today*.

    Total over the dates ``datetime.date`` can hold (years 1 to 9999).

    Raises:
        OverflowError: A shifted date falls outside that range.
    """
    if isinstance(expression, AnchorOnly):
        return ResolvedDate(expression.anchor.resolve(today))
    if isinstance(expression, AnchorWithChain):
        start = expression.anchor.resolve(today)
        return ResolvedDate(apply_all(start, expression.operations))
    if isinstance(expression, PeriodChain):
        # The base period is always additive.
        start = today + expression.base.to_timedelta()
        return ResolvedDate(apply_all(start, expression.rest))
    if isinstance(expression, AnchorDiff):
        delta = expression.start.resolve(today) - expression.end.resolve(today)
        return DayDifference(abs(delta.days))
    msg = f"Unknown expression type: {type(expression).__name__}"
    raise TypeError(msg)
