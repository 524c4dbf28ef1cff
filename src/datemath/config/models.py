"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, datemath.toml only contains
overrides. A missing file is equivalent to an empty one; unknown keys
are rejected.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ParseConfig(BaseModel):
    """[parse] section."""

    model_config = {"frozen": True, "extra": "forbid"}

    # Treat leftover input after a valid expression as an error.
    strict: bool = False


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True, "extra": "forbid"}

    show_expression: bool = False  # include the parsed structure in human output


class DateMathConfig(BaseModel):
    """Top-level datemath.toml schema."""

    model_config = {"frozen": True, "extra": "forbid"}

    today: str | None = None
    parse: ParseConfig = Field(default_factory=ParseConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
