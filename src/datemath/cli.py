"""Root CLI group for datemath with global flags and command registration."""

from __future__ import annotations

import click

from datemath import __version__
from datemath.commands import register_commands
from datemath.commands._context import AppContext
from datemath.config.settings import DateMathSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="datemath")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the result value.")
@click.option("-v", "--verbose", is_flag=True, help="Show the parsed expression and debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--today", default=None, help="Reference date to use instead of the local date.")
@click.option("--strict", is_flag=True, help="Reject input with unparsed trailing text.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    today: str | None,
    strict: bool,
    config_path: str | None,
) -> None:
    """datemath — evaluate natural-language date arithmetic."""
    ctx.ensure_object(dict)
    # Unset flags become None; from_cli drops them.
    settings = DateMathSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
        today=today,
        parse={"strict": True} if strict else None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
