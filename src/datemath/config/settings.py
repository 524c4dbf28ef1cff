"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``DATEMATH_*`` prefix (``DATEMATH_TODAY``,
     ``DATEMATH_PARSE__STRICT``, ...)
  3. TOML file    — ``datemath.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
finds the file with ``find_config`` and validates it with ``load_config``
from :mod:`datemath.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from datemath.config.discovery import find_config, load_config
from datemath.config.models import OutputConfig, ParseConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``datemath.toml`` file discovered via walk-up.

    The file is validated against :class:`DateMathConfig` first; only the
    keys it actually sets are handed on, so env vars and defaults still
    fill the rest.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                config = load_config(toml_path)
            except (tomllib.TOMLDecodeError, ValidationError) as exc:
                import click

                msg = f"Invalid config in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
            self._data = config.model_dump(exclude_unset=True)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class DateMathSettings(BaseSettings):
    """Unified settings for the datemath CLI.

    Stored on the :class:`~datemath.commands._context.AppContext` at the
    CLI root level.

    Attributes:
        today: Override for the reference date, in any literal date format
            the expression grammar accepts. ``None`` means the local date.
        config_path: Discovered or explicit ``datemath.toml``, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DATEMATH_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    today: str | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    parse: ParseConfig = Field(default_factory=ParseConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> DateMathSettings:
        """Construct settings from CLI invocation.

        Discovers ``datemath.toml`` via walk-up from *start* (or uses the
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides. Flags passed as ``None`` are dropped so they do not
        shadow env vars or TOML values.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        overrides = {key: value for key, value in cli_flags.items() if value is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
