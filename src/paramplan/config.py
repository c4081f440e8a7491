"""Project configuration loading.

Settings live under ``[tool.paramplan]`` in the nearest ``pyproject.toml``.
A missing file or table applies all defaults. Invalid values raise
:class:`~paramplan.errors.ConfigError`.

Precedence (low → high):
  built-in defaults < pyproject.toml < env vars < CLI flags (handled in the CLI)
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from paramplan.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "PARAMPLAN_"
_ENV_FIELDS = ("selector", "log_level")


class PlanConfig(BaseModel):
    """Settings for discovering and running plans."""

    model_config = {"extra": "forbid"}

    test_paths: list[str] = Field(default_factory=lambda: ["."])
    selector: str = Field(default="all", description="Registry name or import path of the parameter selector")
    pins: dict[str, list[str]] = Field(
        default_factory=dict, description="Parameters restricted to fixed values"
    )
    log_level: str = Field(default="ERROR", description="Severity for per-scope loggers")
    verbosity: int = 0
    include_tags: list[str] = Field(default_factory=list)
    exclude_tags: list[str] = Field(default_factory=list)
    keyword: str | None = None
    reporters: list[str] = Field(default_factory=lambda: ["ConsoleReporter"])

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def find_pyproject(start: Path | None = None) -> Path | None:
    """Return the nearest pyproject.toml at or above ``start``."""
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def _read_tool_table(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    return data.get("tool", {}).get("paramplan", {})


def load_config(start: Path | None = None) -> PlanConfig:
    """Load settings from pyproject.toml and ``PARAMPLAN_*`` environment variables."""
    raw: dict[str, Any] = {}
    pyproject = find_pyproject(start)
    if pyproject is not None:
        raw = dict(_read_tool_table(pyproject))
        logger.debug("loaded [tool.paramplan] from %s", pyproject)

    for field_name in _ENV_FIELDS:
        value = os.environ.get(ENV_PREFIX + field_name.upper())
        if value:
            raw[field_name] = value

    try:
        return PlanConfig.model_validate(raw)
    except ValidationError as exc:
        source = pyproject or "environment"
        raise ConfigError(f"Invalid paramplan configuration ({source}):\n{exc}") from exc


__all__ = ["ENV_PREFIX", "PlanConfig", "find_pyproject", "load_config"]
