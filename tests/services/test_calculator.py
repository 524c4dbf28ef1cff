"""Tests for CalculatorService — parse, evaluate, and wrap in ServiceResult."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from datemath.config.settings import DateMathSettings
from datemath.services.calculator import CalculatorService


def _clock() -> date:
    return date(2022, 1, 31)


def _service(tmp_path: Path, **overrides: object) -> CalculatorService:
    settings = DateMathSettings.from_cli(start=tmp_path, **overrides)
    return CalculatorService(settings, clock=_clock)


class TestCalculate:
    def test_date_result(self, tmp_path: Path) -> None:
        result = _service(tmp_path).calculate("2 weeks and 1 day ago")
        assert result.ok
        assert result.op == "calculate"
        assert result.data["result"] == "2022-01-16"
        assert result.data["kind"] == "date"
        assert result.data["date"] == "2022-01-16"
        assert result.data["input"] == "2 weeks and 1 day ago"
        assert result.meta == {"reference_date": "2022-01-31"}
        assert result.warnings == []

    def test_difference_result(self, tmp_path: Path) -> None:
        result = _service(tmp_path).calculate("Mar 31, 2021 - Mar 24, 2021")
        assert result.ok
        assert result.data["result"] == "7 days"
        assert result.data["kind"] == "difference"
        assert result.data["days"] == 7
        assert result.data["expression"]["shape"] == "difference"

    def test_expression_structure(self, tmp_path: Path) -> None:
        result = _service(tmp_path).calculate("2 weeks and 3 days before July 11, 2022")
        assert result.data["result"] == "2022-06-24"
        expression = result.data["expression"]
        assert expression["shape"] == "anchor_with_operations"
        assert expression["anchor"] == {"kind": "literal", "date": "2022-07-11"}
        assert [op["sign"] for op in expression["operations"]] == ["-", "-"]

    def test_parse_failure(self, tmp_path: Path) -> None:
        result = _service(tmp_path).calculate("next fortnight")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "PARSE_FAILED"
        assert result.error.detail["input"] == "next fortnight"
        assert result.error.detail["position"] == 0
        assert "remaining" in result.error.detail
        assert "expected" in result.error.detail

    def test_invalid_calendar_date_fails(self, tmp_path: Path) -> None:
        result = _service(tmp_path).calculate("2021-13-40 + 1 day")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "PARSE_FAILED"

    def test_partial_is_warning(self, tmp_path: Path) -> None:
        result = _service(tmp_path).calculate("tomorrow please")
        assert result.ok
        assert result.data["result"] == "2022-02-01"
        assert result.warnings == ["Unparsed input: ' please'"]

    def test_strict_rejects_partial(self, tmp_path: Path) -> None:
        result = _service(tmp_path, parse={"strict": True}).calculate("tomorrow please")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNPARSED_INPUT"
        assert result.error.detail["remaining"] == " please"

    def test_out_of_range(self, tmp_path: Path) -> None:
        result = _service(tmp_path).calculate("9999-12-31 + 1 day")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "OUT_OF_RANGE"

    def test_today_override(self, tmp_path: Path) -> None:
        result = _service(tmp_path, today="2021-03-31").calculate("today + 1 day")
        assert result.data["result"] == "2021-04-01"
        assert result.meta == {"reference_date": "2021-03-31"}

    def test_today_override_from_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DATEMATH_TODAY", "Jan 1, 2000")
        result = _service(tmp_path).calculate("yesterday")
        assert result.data["result"] == "1999-12-31"

    def test_bad_today_override_warns(self, tmp_path: Path) -> None:
        result = _service(tmp_path, today="not a date").calculate("today")
        assert result.ok
        assert result.data["result"] == "2022-01-31"
        assert len(result.warnings) == 1
        assert "not a date" in result.warnings[0]

    def test_month_day_uses_reference_year(self, tmp_path: Path) -> None:
        result = _service(tmp_path, today="2019-06-01").calculate("Jan 15 + 1 week")
        assert result.data["result"] == "2019-01-22"


class TestParseTime:
    def test_ok(self, tmp_path: Path) -> None:
        result = _service(tmp_path).parse_time("3pm")
        assert result.ok
        assert result.op == "parse_time"
        assert result.data == {
            "input": "3pm",
            "result": "15:00:00",
            "hour": 15,
            "minute": 0,
            "second": 0,
        }

    def test_seconds(self, tmp_path: Path) -> None:
        result = _service(tmp_path).parse_time("12:00:30 pm")
        assert result.data["result"] == "12:00:30"

    def test_failure(self, tmp_path: Path) -> None:
        result = _service(tmp_path).parse_time("13pm")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "PARSE_FAILED"

    def test_partial_warning(self, tmp_path: Path) -> None:
        result = _service(tmp_path).parse_time("3pm sharp")
        assert result.ok
        assert result.warnings == ["Unparsed input: ' sharp'"]

    def test_strict(self, tmp_path: Path) -> None:
        result = _service(tmp_path, parse={"strict": True}).parse_time("3pm sharp")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNPARSED_INPUT"
