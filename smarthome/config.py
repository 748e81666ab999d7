"""
Settings for the smart home simulator.

Settings come from three places, later ones winning:

- built-in defaults
- an optional YAML file (a flat mapping of setting names to values)
- ``SMARTHOME_*`` environment variables
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from smarthome.devices.models import DEFAULT_BRIGHTNESS, DEFAULT_KELVIN, DEFAULT_VOLTAGE

ENV_PREFIX = "SMARTHOME_"


@dataclass(frozen=True)
class Settings:
    voltage: int = DEFAULT_VOLTAGE
    kelvin: int = DEFAULT_KELVIN
    brightness: int = DEFAULT_BRIGHTNESS
    encoding: str = "utf-8"
    log_level: str = "WARNING"


def _coerce(name: str, value: Any) -> Any:
    expected = type(getattr(Settings(), name))
    try:
        return expected(value)
    except (TypeError, ValueError):
        raise ValueError(f"Setting '{name}' must be of type {expected.__name__}") from None


def _from_mapping(settings: Settings, data: dict[str, Any]) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")

    return replace(settings, **{key: _coerce(key, value) for key, value in data.items()})


def _from_environment(settings: Settings, environ: dict[str, str]) -> Settings:
    overrides = {}
    for f in fields(Settings):
        value = environ.get(ENV_PREFIX + f.name.upper())
        if value is not None:
            overrides[f.name] = value

    return _from_mapping(settings, overrides)


def check_log_level(name: str) -> str:
    """Upper-case a logging level name, rejecting names logging does not know."""
    level = str(name).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def load_settings(path: Path | None = None, environ: dict[str, str] | None = None) -> Settings:
    """
    Build the effective settings.

    Args:
        path: Optional YAML settings file.
        environ: Environment to read overrides from (defaults to ``os.environ``).

    Raises:
        ValueError: if the file is not a mapping, names an unknown setting,
            has a value of the wrong type or an unknown log level.
    """
    settings = Settings()

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        if not isinstance(data, dict):
            raise ValueError("Settings file must be a YAML mapping (dict)")

        settings = _from_mapping(settings, data)

    env = dict(os.environ) if environ is None else environ
    settings = _from_environment(settings, env)
    settings = replace(settings, log_level=check_log_level(settings.log_level))
    return settings
