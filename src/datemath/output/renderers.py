"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.

INVARIANT: the first line of a successful ``calculate`` or ``parse_time``
rendering is the bare result value, so ``datemath calc ... | head -1``
is always usable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from datemath.output.console import create_console, get_output, style_for_outcome

if TYPE_CHECKING:
    from rich.console import Console

    from datemath.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    show_expression: bool = False,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose, show_expression=show_expression)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: the value or the error."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    value = result.data.get("result")
    if value is None:
        return f"OK: {result.op}"
    return str(value)


# ── Helpers ───────────────────────────────────────────────────────────


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    console.print(Text.assemble((f"  {key}: ", "dm.key"), str(value)))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    for k, v in result.meta.items():
        _field(console, k, v)


def _describe_operation(op: dict[str, Any]) -> str:
    unit = op["unit"] if op["count"] == 1 else f"{op['unit']}s"
    return f"{op['sign']} {op['count']} {unit}"


def _describe_anchor(anchor: dict[str, Any]) -> str:
    return str(anchor.get("date", anchor["kind"]))


def _render_expression(console: Console, expression: dict[str, Any]) -> None:
    """Print the parsed expression as one indented line per part."""
    shape = expression.get("shape", "?")
    _field(console, "shape", shape)
    if shape == "difference":
        _field(console, "from", _describe_anchor(expression["start"]))
        _field(console, "to", _describe_anchor(expression["end"]))
        return
    if "anchor" in expression:
        _field(console, "anchor", _describe_anchor(expression["anchor"]))
    if "base" in expression:
        _field(console, "base", _describe_operation({"sign": "+", **expression["base"]}))
    for op in expression.get("operations", []):
        _field(console, "then", _describe_operation(op))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dm.error")
    op = Text(f"  {result.op}", style="dm.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_calculate(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    show_expression: bool = False,
) -> None:
    """Render an evaluated date expression."""
    data = result.data
    console.print(Text(str(data.get("result", "")), style=style_for_outcome(data.get("kind", ""))))
    if verbose or show_expression:
        _field(console, "input", data.get("input", ""))
        expression = data.get("expression")
        if expression:
            _render_expression(console, expression)
    if verbose:
        _render_meta(console, result)


def _render_parse_time(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    show_expression: bool = False,
) -> None:
    """Render a parsed clock time."""
    data = result.data
    console.print(Text(str(data.get("result", "")), style=style_for_outcome("time")))
    if verbose:
        _field(console, "input", data.get("input", ""))


def _render_generic(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    show_expression: bool = False,
) -> None:
    """Fallback: status line plus key-value data."""
    console.print(Text("OK", style="dm.ok"), Text(f"  {result.op}", style="dm.op"))
    for k, v in result.data.items():
        _field(console, k, v)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "calculate": _render_calculate,
    "parse_time": _render_parse_time,
}
