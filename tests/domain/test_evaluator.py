"""Tests for expression evaluation."""

from __future__ import annotations

from datetime import date

import pytest

from datemath.domain.anchors import TODAY, YESTERDAY, Anchor
from datemath.domain.evaluator import DayDifference, ResolvedDate, evaluate
from datemath.domain.expressions import AnchorDiff, AnchorOnly, AnchorWithChain, PeriodChain
from datemath.domain.periods import Period, PeriodOp

REF = date(2022, 1, 31)


class TestEvaluate:
    def test_anchor_only(self) -> None:
        assert evaluate(AnchorOnly(YESTERDAY), REF) == ResolvedDate(date(2022, 1, 30))

    def test_chain_folds_in_order(self) -> None:
        expression = AnchorWithChain(
            Anchor.literal(date(2021, 3, 31)),
            PeriodOp.add(Period.weeks(15)),
            (PeriodOp.add(Period.days(2)), PeriodOp.subtract(Period.days(1))),
        )
        assert evaluate(expression, REF) == ResolvedDate(date(2021, 7, 15))

    def test_literal_chain_ignores_reference(self) -> None:
        expression = AnchorWithChain(
            Anchor.literal(date(2021, 3, 31)), PeriodOp.add(Period.days(1))
        )
        assert evaluate(expression, REF) == evaluate(expression, date(1970, 1, 1))

    def test_period_chain_base_is_additive(self) -> None:
        expression = PeriodChain(Period.days(1), (PeriodOp.subtract(Period.days(3)),))
        assert evaluate(expression, REF) == ResolvedDate(date(2022, 1, 29))

    def test_period_chain_without_rest(self) -> None:
        assert evaluate(PeriodChain(Period.weeks(1)), REF) == ResolvedDate(date(2022, 2, 7))

    def test_overflow_propagates(self) -> None:
        with pytest.raises(OverflowError):
            evaluate(PeriodChain(Period.years(10_000)), REF)

    def test_underflow_propagates(self) -> None:
        expression = AnchorWithChain(
            Anchor.literal(date(1, 1, 1)), PeriodOp.subtract(Period.days(1))
        )
        with pytest.raises(OverflowError):
            evaluate(expression, REF)

    def test_unknown_expression(self) -> None:
        with pytest.raises(TypeError):
            evaluate("today", REF)  # type: ignore[arg-type]


class TestDayDifference:
    def test_seven_days(self) -> None:
        diff = AnchorDiff(Anchor.literal(date(2021, 3, 31)), Anchor.literal(date(2021, 3, 24)))
        outcome = evaluate(diff, REF)
        assert outcome == DayDifference(7)
        assert str(outcome) == "7 days"

    def test_symmetric(self) -> None:
        a = Anchor.literal(date(2021, 3, 31))
        b = Anchor.literal(date(2020, 2, 1))
        assert evaluate(AnchorDiff(a, b), REF) == evaluate(AnchorDiff(b, a), REF)

    def test_zero(self) -> None:
        a = Anchor.literal(date(2021, 3, 31))
        assert str(evaluate(AnchorDiff(a, a), REF)) == "0 days"

    def test_single_day(self) -> None:
        diff = AnchorDiff(Anchor.literal(date(2021, 3, 31)), Anchor.literal(date(2021, 3, 30)))
        assert str(evaluate(diff, REF)) == "1 day"

    def test_keyword_against_reference(self) -> None:
        diff = AnchorDiff(TODAY, Anchor.literal(date(2022, 1, 1)))
        assert evaluate(diff, REF) == DayDifference(30)

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            DayDifference(-1)


class TestOutcomeDicts:
    def test_resolved_date(self) -> None:
        assert ResolvedDate(date(2022, 1, 31)).to_dict() == {"kind": "date", "date": "2022-01-31"}

    def test_day_difference(self) -> None:
        assert DayDifference(3).to_dict() == {"kind": "difference", "days": 3}
