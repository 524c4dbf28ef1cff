"""Tests for operation-specific Rich renderers."""

from datemath.output.renderers import render_quiet, render_result
from datemath.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, meta: dict[str, object] | None = None, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data), meta=meta)


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


def _chain() -> ServiceResult:
    return _ok(
        "calculate",
        meta={"reference_date": "2022-01-31"},
        input="2 weeks and 1 day ago",
        result="2022-01-16",
        kind="date",
        date="2022-01-16",
        expression={
            "shape": "anchor_with_operations",
            "anchor": {"kind": "today"},
            "operations": [
                {"sign": "-", "unit": "week", "count": 2},
                {"sign": "-", "unit": "day", "count": 1},
            ],
        },
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("calculate", "PARSE_FAILED", "Could not parse 'x'"))
        assert "ERROR" in output
        assert "calculate" in output
        assert "Could not parse 'x'" in output

    def test_verbose_shows_detail(self) -> None:
        result = _err("calculate", "PARSE_FAILED", "Bad", position=3, expected="digits")
        output = render_result(result, verbose=True)
        assert "detail" in output
        assert "position: 3" in output
        assert "expected: digits" in output

    def test_detail_hidden_by_default(self) -> None:
        result = _err("calculate", "PARSE_FAILED", "Bad", position=3)
        assert "position" not in render_result(result)

    def test_no_error_object(self) -> None:
        output = render_result(ServiceResult(ok=False, op="calculate"))
        assert "Unknown error" in output


# ── Calculate renderer ───────────────────────────────────────────────


class TestCalculateRenderer:
    def test_value_only_by_default(self) -> None:
        assert render_result(_chain()) == "2022-01-16"

    def test_difference(self) -> None:
        result = _ok("calculate", result="7 days", kind="difference", days=7)
        assert render_result(result) == "7 days"

    def test_show_expression(self) -> None:
        lines = render_result(_chain(), show_expression=True).splitlines()
        assert lines[0] == "2022-01-16"
        assert "  input: 2 weeks and 1 day ago" in lines
        assert "  shape: anchor_with_operations" in lines
        assert "  anchor: today" in lines
        assert "  then: - 2 weeks" in lines
        assert "  then: - 1 day" in lines
        assert not any("reference_date" in line for line in lines)

    def test_verbose_includes_meta(self) -> None:
        output = render_result(_chain(), verbose=True)
        assert "reference_date: 2022-01-31" in output
        assert "shape: anchor_with_operations" in output

    def test_difference_expression(self) -> None:
        result = _ok(
            "calculate",
            input="Mar 31, 2021 - Mar 24, 2021",
            result="7 days",
            kind="difference",
            days=7,
            expression={
                "shape": "difference",
                "start": {"kind": "literal", "date": "2021-03-31"},
                "end": {"kind": "literal", "date": "2021-03-24"},
            },
        )
        output = render_result(result, show_expression=True)
        assert "from: 2021-03-31" in output
        assert "to: 2021-03-24" in output

    def test_period_chain_expression(self) -> None:
        result = _ok(
            "calculate",
            input="1 day + 2 months",
            result="2022-04-02",
            kind="date",
            expression={
                "shape": "period_chain",
                "base": {"unit": "day", "count": 1},
                "operations": [{"sign": "+", "unit": "month", "count": 2}],
            },
        )
        output = render_result(result, show_expression=True)
        assert "base: + 1 day" in output
        assert "then: + 2 months" in output


# ── Parse-time renderer ──────────────────────────────────────────────


class TestParseTimeRenderer:
    def test_value(self) -> None:
        result = _ok("parse_time", input="3pm", result="15:00:00", hour=15, minute=0, second=0)
        assert render_result(result) == "15:00:00"

    def test_verbose(self) -> None:
        result = _ok("parse_time", input="3pm", result="15:00:00")
        assert "input: 3pm" in render_result(result, verbose=True)


# ── Generic / quiet ──────────────────────────────────────────────────


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("mystery", answer=42))
        assert "OK" in output
        assert "mystery" in output
        assert "answer: 42" in output


class TestQuiet:
    def test_value(self) -> None:
        assert render_quiet(_chain()) == "2022-01-16"

    def test_error(self) -> None:
        output = render_quiet(_err("parse_time", "PARSE_FAILED", "nope"))
        assert output.startswith("ERROR: parse_time")
        assert "nope" in output

    def test_no_value(self) -> None:
        assert render_quiet(_ok("mystery")) == "OK: mystery"
