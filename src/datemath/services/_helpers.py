"""Shared service-layer helper functions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from datemath.domain.anchors import parse_literal_date
from datemath.domain.grammar import GrammarMismatch

logger = logging.getLogger(__name__)


def resolve_reference_date(
    override: str | None,
    *,
    warnings: list[str] | None = None,
    clock: Callable[[], date] = date.today,
) -> date:
    """Reference "today" for an evaluation.

    *override* is read with the same literal-date formats as anchors in
    expressions (``2022-01-31``, ``Jan 31, 2022``, ``01/31/2022``, ...).
    When it is absent or does not parse, the local date from *clock* is
    used and, for an unparseable value, a warning is appended.
    """
    today = clock()
    if not override or not override.strip():
        return today
    try:
        return parse_literal_date(override.strip(), reference=today)
    except GrammarMismatch as exc:
        logger.debug("Ignoring unparseable reference date %r: %s", override, exc)
        if warnings is not None:
            warnings.append(f"Ignoring unparseable reference date {override!r}; using {today}")
        return today
