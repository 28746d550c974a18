"""Configuration loading with layered overrides."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

SYSTEM_CONFIG = Path("/etc/kdumpctl.yaml")

DEFAULTS: dict[str, Any] = {
    "log_dir": "~/var/log/kdumpctl",
    "format": "plain",
    "boot_dir": "/boot",
    "crash_dir": "/var/crash",
}


@dataclass
class Settings:
    """Resolved runtime settings."""

    log_dir: Path
    format: str
    boot_dir: str
    crash_dir: str


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file if it exists."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def user_config_path() -> Path:
    """Per-user config file location."""
    return Path.home() / ".config" / "kdumpctl" / "config.yaml"


def config_layers(explicit: Path | None = None) -> list[Path]:
    """Config files in increasing order of precedence."""
    layers = [SYSTEM_CONFIG, user_config_path()]
    if explicit is not None:
        layers.append(explicit)
    return layers


def load_settings(explicit: Path | None = None) -> Settings:
    """
    Merge defaults with system, user and explicit config files.

    Args:
        explicit: Config file given on the command line, if any

    Returns:
        Settings with later layers overriding earlier ones
    """
    merged = dict(DEFAULTS)
    for path in config_layers(explicit):
        data = load_config_file(path)
        merged.update({k: v for k, v in data.items() if k in DEFAULTS})

    fmt = merged["format"] if merged["format"] in ("plain", "json") else "plain"
    return Settings(
        log_dir=Path(str(merged["log_dir"])).expanduser(),
        format=fmt,
        boot_dir=str(merged["boot_dir"]),
        crash_dir=str(merged["crash_dir"]),
    )
