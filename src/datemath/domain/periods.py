"""Periods and signed period operations.

A period is a typed count of days, weeks, months or years. Conversion to
elapsed time uses fixed approximations: a month is always 30 days and a
year always 365 days. There is no calendar-aware month/year arithmetic.

Grammar::

    quantity  := digits | one | two | ... | twelve
    period    := quantity WS+ ("day" | "week" | "month" | "year") "s"?
    period_op := WS* ("+" | "-") WS* period
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import StrEnum
from typing import Any, Self

from datemath.domain.grammar import GrammarMismatch, digits, space0, space1


class PeriodUnit(StrEnum):
    """Units a period can be expressed in."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class Sign(StrEnum):
    """Direction of a period operation."""

    ADD = "+"
    SUBTRACT = "-"


UNIT_DAYS: dict[PeriodUnit, int] = {
    PeriodUnit.DAY: 1,
    PeriodUnit.WEEK: 7,
    PeriodUnit.MONTH: 30,
    PeriodUnit.YEAR: 365,
}

# Case-sensitive, exactly as written.
QUANTITY_WORDS: dict[str, int] = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
}


@dataclass(frozen=True)
class Period:
    """A non-negative count of one unit."""

    unit: PeriodUnit
    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            msg = f"Period count must be non-negative, got {self.count}"
            raise ValueError(msg)

    @classmethod
    def days(cls, count: int) -> Self:
        return cls(PeriodUnit.DAY, count)

    @classmethod
    def weeks(cls, count: int) -> Self:
        return cls(PeriodUnit.WEEK, count)

    @classmethod
    def months(cls, count: int) -> Self:
        return cls(PeriodUnit.MONTH, count)

    @classmethod
    def years(cls, count: int) -> Self:
        return cls(PeriodUnit.YEAR, count)

    def to_timedelta(self) -> timedelta:
        """Elapsed time for this period (30-day months, 365-day years)."""
        return timedelta(days=UNIT_DAYS[self.unit] * self.count)

    def __str__(self) -> str:
        suffix = "" if self.count == 1 else "s"
        return f"{self.count} {self.unit}{suffix}"

    def to_dict(self) -> dict[str, Any]:
        return {"unit": str(self.unit), "count": self.count}


@dataclass(frozen=True)
class PeriodOp:
    """A period tagged with addition or subtraction."""

    sign: Sign
    period: Period

    @classmethod
    def add(cls, period: Period) -> Self:
        return cls(Sign.ADD, period)

    @classmethod
    def subtract(cls, period: Period) -> Self:
        return cls(Sign.SUBTRACT, period)

    def apply(self, value: date) -> date:
        """Shift *value* by the period in this operation's direction."""
        if self.sign is Sign.ADD:
            return value + self.period.to_timedelta()
        return value - self.period.to_timedelta()

    def __str__(self) -> str:
        return f"{self.sign} {self.period}"

    def to_dict(self) -> dict[str, Any]:
        return {"sign": str(self.sign), **self.period.to_dict()}


def apply_all(value: date, operations: tuple[PeriodOp, ...]) -> date:
    """Fold *operations* onto *value* left to right, in input order."""
    for operation in operations:
        value = operation.apply(value)
    return value


# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------


def parse_quantity(text: str, pos: int) -> tuple[int, int]:
    """Match a count: digits, or one of the spelled words one..twelve."""
    try:
        return digits(text, pos)
    except GrammarMismatch:
        pass
    for word, value in QUANTITY_WORDS.items():
        if text.startswith(word, pos):
            return value, pos + len(word)
    raise GrammarMismatch(text, pos, "quantity")


def parse_unit(text: str, pos: int) -> tuple[PeriodUnit, int]:
    """Match a unit keyword with an optional plural ``s``."""
    for unit in PeriodUnit:
        if text.startswith(unit.value, pos):
            end = pos + len(unit.value)
            if text.startswith("s", end):
                end += 1
            return unit, end
    raise GrammarMismatch(text, pos, "day, week, month or year")


def parse_period(text: str, pos: int) -> tuple[Period, int]:
    """Match ``<quantity> <unit>``; the separating whitespace is required."""
    count, pos = parse_quantity(text, pos)
    pos = space1(text, pos)
    unit, pos = parse_unit(text, pos)
    return Period(unit, count), pos


def parse_period_op(text: str, pos: int) -> tuple[PeriodOp, int]:
    """Match ``+ <period>`` or ``- <period>`` with optional surrounding spaces."""
    pos = space0(text, pos)
    for sign in Sign:
        if text.startswith(sign.value, pos):
            period, end = parse_period(text, space0(text, pos + 1))
            return PeriodOp(sign, period), end
    raise GrammarMismatch(text, pos, "'+' or '-'")


def parse_period_ops(text: str, pos: int) -> tuple[tuple[PeriodOp, ...], int]:
    """Match zero or more signed period operations."""
    operations: list[PeriodOp] = []
    while True:
        try:
            operation, pos = parse_period_op(text, pos)
        except GrammarMismatch:
            break
        operations.append(operation)
    return tuple(operations), pos
