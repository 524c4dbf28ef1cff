"""CalculatorService — parse and evaluate date expressions and clock times.

Pipeline: REFERENCE → PARSE → CHECK LEFTOVERS → EVALUATE → RESPOND

Parse failures and out-of-range results come back as ``ok=False``
results; trailing unparsed input is a warning unless strict parsing is
configured.
"""

from __future__ import annotations

import logging
from typing import Any

from datemath.domain.clock import parse_clock_time
from datemath.domain.evaluator import evaluate
from datemath.domain.expressions import parse_expression
from datemath.domain.grammar import Failed, GrammarMismatch, Partial
from datemath.services.base import BaseService
from datemath.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def _parse_failure(op: str, text: str, error: GrammarMismatch) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="PARSE_FAILED",
            message=f"Could not parse {text!r}: {error}",
            detail={"input": text, **error.to_dict()},
        ),
    )


def _unparsed(op: str, text: str, remaining: str) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="UNPARSED_INPUT",
            message=f"Unparsed input: {remaining!r}",
            detail={"input": text, "remaining": remaining},
        ),
    )


class CalculatorService(BaseService):
    """Evaluates date expressions and parses clock times."""

    def calculate(self, text: str) -> ServiceResult:
        """Parse *text* as a date expression and evaluate it.

        On success ``data`` holds the rendered ``result`` (ISO date or
        ``"N days"``), the outcome ``kind`` with its ``date`` or ``days``,
        and the parsed ``expression`` structure.
        """
        op = "calculate"
        warnings: list[str] = []
        today = self._reference_date(warnings)

        parsed = parse_expression(text, reference=today)
        if isinstance(parsed, Failed):
            logger.debug("Parse failed for %r: %s", text, parsed.error)
            return _parse_failure(op, text, parsed.error)
        if isinstance(parsed, Partial):
            if self._settings.parse.strict:
                return _unparsed(op, text, parsed.remaining)
            warnings.append(f"Unparsed input: '{parsed.remaining}'")

        expression = parsed.value
        try:
            outcome = evaluate(expression, today)
        except OverflowError:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="OUT_OF_RANGE",
                    message=f"Result of {text!r} is outside the supported calendar range",
                    detail={"input": text},
                ),
            )
        logger.debug("Evaluated %r as %s against %s", text, outcome, today)

        data: dict[str, Any] = {
            "input": text,
            "result": str(outcome),
            **outcome.to_dict(),
            "expression": expression.to_dict(),
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=warnings,
            meta={"reference_date": today.isoformat()},
        )

    def parse_time(self, text: str) -> ServiceResult:
        """Parse *text* as a clock time (``3pm``, ``1530``, ``12:00:30pm``)."""
        op = "parse_time"
        warnings: list[str] = []

        parsed = parse_clock_time(text)
        if isinstance(parsed, Failed):
            logger.debug("Time parse failed for %r: %s", text, parsed.error)
            return _parse_failure(op, text, parsed.error)
        if isinstance(parsed, Partial):
            if self._settings.parse.strict:
                return _unparsed(op, text, parsed.remaining)
            warnings.append(f"Unparsed input: '{parsed.remaining}'")

        value = parsed.value
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "input": text,
                "result": value.isoformat(),
                "hour": value.hour,
                "minute": value.minute,
                "second": value.second,
            },
            warnings=warnings,
        )
