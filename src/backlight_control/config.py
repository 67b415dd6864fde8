from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from backlight_control.paths import default_config_path
from backlight_control.system.backlight import DEFAULT_SYSFS_ROOT

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULTS: dict[str, Any] = {
    "sysfs_root": str(DEFAULT_SYSFS_ROOT),
    "device": None,
    "log_level": "WARNING",
}


class ConfigError(ValueError):
    pass


def load(path: str | Path | None = None) -> dict[str, Any]:
    """Load and validate a config file.

    Without an explicit path the per-user file is used if present, otherwise
    the defaults.
    """

    if path is None:
        p = default_config_path()
        if not p.is_file():
            return normalize({})
    else:
        p = Path(path)

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config {p}: {e.strerror or e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping")
    normalize(data)
    validate(data)
    return data


def normalize(cfg: dict[str, Any]) -> dict[str, Any]:
    for key, value in DEFAULTS.items():
        cfg.setdefault(key, value)

    for key in ("sysfs_root", "device", "log_level"):
        if isinstance(cfg.get(key), str):
            cfg[key] = cfg[key].strip()
    if isinstance(cfg["log_level"], str):
        cfg["log_level"] = cfg["log_level"].upper()
    if cfg["device"] == "":
        cfg["device"] = None
    return cfg


def validate(cfg: dict[str, Any]) -> None:
    unknown = sorted(map(str, set(cfg) - set(DEFAULTS)))
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    if not isinstance(cfg["sysfs_root"], str) or not cfg["sysfs_root"]:
        raise ConfigError("sysfs_root must be a non-empty string")

    if cfg["device"] is not None and not isinstance(cfg["device"], str):
        raise ConfigError("device must be a string")
    if cfg["device"] is not None and "/" in cfg["device"]:
        raise ConfigError(f"device must be a device name, not a path: {cfg['device']}")

    if cfg["log_level"] not in LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
