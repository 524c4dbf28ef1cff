"""Clock-time grammar — military, 12-hour and 24-hour forms.

Independent of date arithmetic. Forms, tried in order:

1. ``HHMM`` military time, no separator, no am/pm (``1330``, ``0030``).
2. ``H am`` / ``HH pm`` — bare 12-hour hour with a suffix (``3pm``).
3. ``H:MM``/``HHMM`` 12-hour with a suffix (``12:15pm``, ``930a``).
4. ``H:MM``/``HH:MM`` 24-hour without a suffix, only at end of input.
5. ``H:MM:SS`` 12-hour with a suffix (``12:00:30pm``).

Suffixes: ``am``, ``AM``, ``Am``, ``aM``, ``a``, ``A`` and the ``p``
equivalents, optionally preceded by spaces. 12-hour forms take hours
1–12; 24-hour and military forms take 0–23. Minutes and seconds are
0–59. Out-of-range parts fail; nothing is clamped. ``12am`` is midnight
(00:00) and ``12pm`` is noon; 12am is deliberately not read as noon.
"""

from __future__ import annotations

import re
from datetime import time
from enum import StrEnum

from datemath.domain.grammar import (
    GrammarMismatch,
    ParseResult,
    first_match,
    run_rule,
    space0,
)

_TWO_DIGITS = re.compile(r"[0-9]{2}")
_ONE_DIGIT = re.compile(r"[0-9]")
_ONE_OR_TWO_DIGITS = re.compile(r"[0-9]{1,2}")
_MERIDIEM = re.compile(r"([aApP])[mM]?")


class Meridiem(StrEnum):
    AM = "am"
    PM = "pm"


def _fixed_digits(pattern: re.Pattern[str], text: str, pos: int) -> tuple[int, int]:
    match = pattern.match(text, pos)
    if match is None:
        raise GrammarMismatch(text, pos, "digits")
    return int(match.group()), match.end()


def _bounded(value: int, low: int, high: int, text: str, pos: int, what: str) -> int:
    if not low <= value <= high:
        raise GrammarMismatch(text, pos, f"{what} between {low} and {high}")
    return value


def _hour_12(text: str, pos: int) -> tuple[int, int]:
    """A 12-hour clock hour: two digits if they fit, else one."""
    try:
        value, end = _fixed_digits(_TWO_DIGITS, text, pos)
        return _bounded(value, 1, 12, text, pos, "hour"), end
    except GrammarMismatch:
        value, end = _fixed_digits(_ONE_DIGIT, text, pos)
        return _bounded(value, 1, 12, text, pos, "hour"), end


def _minute(text: str, pos: int) -> tuple[int, int]:
    value, end = _fixed_digits(_TWO_DIGITS, text, pos)
    return _bounded(value, 0, 59, text, pos, "minute"), end


def _optional_colon(text: str, pos: int) -> int:
    return pos + 1 if text.startswith(":", pos) else pos


def _meridiem(text: str, pos: int) -> tuple[Meridiem, int]:
    pos = space0(text, pos)
    match = _MERIDIEM.match(text, pos)
    if match is None:
        raise GrammarMismatch(text, pos, "am or pm")
    meridiem = Meridiem.AM if match.group(1) in "aA" else Meridiem.PM
    return meridiem, match.end()


def to_24_hour(hour: int, meridiem: Meridiem) -> int:
    """Convert a 1–12 clock hour; 12am is midnight and 12pm is noon."""
    if meridiem is Meridiem.AM:
        return 0 if hour == 12 else hour
    return hour if hour == 12 else hour + 12


# ---------------------------------------------------------------------------
# Forms
# ---------------------------------------------------------------------------


def _military(text: str, pos: int) -> tuple[time, int]:
    hour, end = _fixed_digits(_TWO_DIGITS, text, pos)
    _bounded(hour, 0, 23, text, pos, "hour")
    minute, end = _minute(text, end)
    return time(hour, minute), end


def _hour_meridiem(text: str, pos: int) -> tuple[time, int]:
    hour, pos = _hour_12(text, pos)
    meridiem, pos = _meridiem(text, pos)
    return time(to_24_hour(hour, meridiem)), pos


def _hour_minute_meridiem(text: str, pos: int) -> tuple[time, int]:
    hour, pos = _hour_12(text, pos)
    minute, pos = _minute(text, _optional_colon(text, pos))
    meridiem, pos = _meridiem(text, pos)
    return time(to_24_hour(hour, meridiem), minute), pos


def _hour_minute_24(text: str, pos: int) -> tuple[time, int]:
    start = pos
    hour, pos = _fixed_digits(_ONE_OR_TWO_DIGITS, text, pos)
    _bounded(hour, 0, 23, text, start, "hour")
    minute, pos = _minute(text, _optional_colon(text, pos))
    if pos != len(text):
        raise GrammarMismatch(text, pos, "end of input")
    return time(hour, minute), pos


def _hour_minute_second_meridiem(text: str, pos: int) -> tuple[time, int]:
    hour, pos = _hour_12(text, pos)
    if not text.startswith(":", pos):
        raise GrammarMismatch(text, pos, "':'")
    minute, pos = _minute(text, pos + 1)
    if not text.startswith(":", pos):
        raise GrammarMismatch(text, pos, "':'")
    second, end = _fixed_digits(_TWO_DIGITS, text, pos + 1)
    _bounded(second, 0, 59, text, pos + 1, "second")
    meridiem, end = _meridiem(text, end)
    return time(to_24_hour(hour, meridiem), minute, second), end


TIME_FORMS = (
    ("military time", _military),
    ("hour with am/pm", _hour_meridiem),
    ("hour and minute with am/pm", _hour_minute_meridiem),
    ("24-hour time", _hour_minute_24),
    ("hour, minute and second with am/pm", _hour_minute_second_meridiem),
)


def parse_time(text: str, pos: int = 0) -> tuple[time, int]:
    """Match one clock time at *pos*."""
    return first_match(text, pos, TIME_FORMS)


def parse_clock_time(text: str) -> ParseResult[time]:
    """Parse *text* as a clock time, classifying leftover input."""
    return run_rule(parse_time, text)
