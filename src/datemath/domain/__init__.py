"""Domain layer — date expression grammar, clock-time grammar and evaluation.

This layer depends only on the standard library.
It must never import from services, config, commands, or output.
"""

from datemath.domain.anchors import Anchor, AnchorKind, parse_literal_date
from datemath.domain.clock import parse_clock_time
from datemath.domain.evaluator import DayDifference, Outcome, ResolvedDate, evaluate
from datemath.domain.expressions import (
    AnchorDiff,
    AnchorOnly,
    AnchorWithChain,
    Expression,
    PeriodChain,
    parse_expression,
)
from datemath.domain.grammar import Failed, Full, GrammarMismatch, ParseResult, Partial
from datemath.domain.periods import Period, PeriodOp, PeriodUnit, Sign

__all__ = [
    "Anchor",
    "AnchorDiff",
    "AnchorKind",
    "AnchorOnly",
    "AnchorWithChain",
    "DayDifference",
    "Expression",
    "Failed",
    "Full",
    "GrammarMismatch",
    "Outcome",
    "ParseResult",
    "Partial",
    "Period",
    "PeriodChain",
    "PeriodOp",
    "PeriodUnit",
    "ResolvedDate",
    "Sign",
    "evaluate",
    "parse_clock_time",
    "parse_expression",
    "parse_literal_date",
]
