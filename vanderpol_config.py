"""
Configuration loading for Van der Pol runs.

A configuration file holds the damping coefficient `u`, the initial
condition `v0` = [x0, y0] and the end time `tend`, plus an optional step
size `h`. JSON and YAML files are accepted.
"""

import json
import math
from dataclasses import dataclass
from numbers import Real
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from vanderpol_rk4 import State

DEFAULT_STEP = 0.01

REQUIRED_FIELDS = ("u", "v0", "tend")


class ConfigError(ValueError):
    """Raised when a configuration file is missing, unreadable or invalid."""


@dataclass(frozen=True)
class VdpConfig:
    mu: float
    v0: State
    t_end: float
    h: float = DEFAULT_STEP

    def to_dict(self) -> Dict[str, Any]:
        return {"u": self.mu, "v0": [self.v0.x, self.v0.y], "tend": self.t_end, "h": self.h}


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _type_name(value: Any) -> str:
    return type(value).__name__


def _to_float(field: str, value: Real) -> float:
    # JSON integers are unbounded; float() overflows past ~1.8e308
    try:
        return float(value)
    except OverflowError as e:
        raise ConfigError(f"Field '{field}' is too large to represent as a float") from e


def _read(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


def parse_config(data: Any) -> VdpConfig:
    """
    Validate raw configuration data and convert it to a VdpConfig.

    Raises:
        ConfigError: If a field is missing or has the wrong type or range.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got {_type_name(data)}")

    for field in REQUIRED_FIELDS:
        if field not in data:
            raise ConfigError(f"Missing required field '{field}' in configuration file")

    u, v0, tend = data["u"], data["v0"], data["tend"]

    if not _is_number(u):
        raise ConfigError(f"Field 'u' must be a number, got {_type_name(u)}")

    if not isinstance(v0, list):
        raise ConfigError(f"Field 'v0' must be an array, got {_type_name(v0)}")
    if len(v0) != 2:
        raise ConfigError(f"Field 'v0' must be an array of length 2, got length {len(v0)}")
    if not all(_is_number(item) for item in v0):
        raise ConfigError("All elements in 'v0' must be numbers")

    if not _is_number(tend):
        raise ConfigError(f"Field 'tend' must be a number, got {_type_name(tend)}")
    t_end = _to_float("tend", tend)
    if not math.isfinite(t_end) or t_end < 0:
        raise ConfigError(f"Field 'tend' must be a finite number >= 0, got {tend}")

    h = data.get("h", DEFAULT_STEP)
    if not _is_number(h):
        raise ConfigError(f"Field 'h' must be a number, got {_type_name(h)}")
    h = _to_float("h", h)
    if not math.isfinite(h) or h <= 0:
        raise ConfigError(f"Field 'h' must be a finite number > 0, got {h}")

    return VdpConfig(
        mu=_to_float("u", u),
        v0=State(_to_float("v0", v0[0]), _to_float("v0", v0[1])),
        t_end=t_end,
        h=h,
    )


def load_config(config_path: Union[str, Path]) -> VdpConfig:
    """
    Load and validate a configuration file.

    Raises:
        ConfigError: If the file does not exist, cannot be parsed, or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        data = _read(config_path)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigError(
            f"Failed to parse configuration file: {config_path}\n  {_type_name(e)}: {e}"
        ) from e

    return parse_config(data)
