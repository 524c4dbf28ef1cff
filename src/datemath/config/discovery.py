"""Locate and validate ``datemath.toml``.

Lookup order: the ``DATEMATH_CONFIG`` env var, then a walk up from the
working directory (the way git finds ``.git/``). The file is validated
against :class:`DateMathConfig` before any of it reaches the settings.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from datemath.config.models import DateMathConfig

CONFIG_FILENAME = "datemath.toml"
CONFIG_ENV_VAR = "DATEMATH_CONFIG"


def _ancestors(start: Path) -> list[Path]:
    start = start.resolve()
    return [start, *start.parents]


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), if any.

    A ``DATEMATH_CONFIG`` pointing at a missing file disables discovery
    rather than falling back to the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> DateMathConfig:
    """Read and validate a config file.

    With no *path*, the file is discovered from *cwd*; no file at all
    yields the all-defaults config.

    Raises:
        tomllib.TOMLDecodeError: The file is not valid TOML.
        pydantic.ValidationError: A key is unknown or has the wrong type.
    """
    path = path or find_config(cwd)
    if path is None:
        return DateMathConfig()
    with path.open("rb") as fh:
        return DateMathConfig.model_validate(tomllib.load(fh))
