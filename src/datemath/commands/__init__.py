"""Subcommand modules for datemath.

Provides register_commands() which uses deferred imports to keep
``datemath --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from datemath.commands.calc import calc
    from datemath.commands.time import time

    cli.add_command(calc)
    cli.add_command(time)
