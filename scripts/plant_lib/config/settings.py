"""
Settings loading for plant.

Settings are resolved in order, later sources winning:
1. Defaults (constants.py)
2. JSON config file (PLANT_CONFIG or ~/.config/plant/config.json)
3. Environment variables (PLANT_MOUSE)
4. CLI flags (applied by the caller)
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from plant_lib.common import warn

from .constants import CONFIG_FILE, DEFAULT_STYLE


@dataclass
class Settings:
    """Runtime settings for the tree view."""
    mouse: bool = True
    style: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_STYLE))


def get_config_path() -> Path:
    """Get config file path, honoring PLANT_CONFIG."""
    override = os.environ.get("PLANT_CONFIG")
    if override:
        return Path(override)
    return CONFIG_FILE


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _apply_file(settings: Settings, data: dict) -> Settings:
    """Apply values from the JSON config file."""
    if "mouse" in data:
        settings.mouse = bool(data["mouse"])
    style = data.get("style")
    if isinstance(style, dict):
        settings.style.update({str(k): str(v) for k, v in style.items()})
    return settings


def _apply_env(settings: Settings) -> Settings:
    """Apply environment variable overrides."""
    mouse = os.environ.get("PLANT_MOUSE")
    if mouse is not None:
        settings.mouse = _parse_bool(mouse)
    return settings


def load_settings(config_file: Optional[Path] = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        config_file: Explicit config path (default: get_config_path())

    Returns:
        Resolved Settings. A missing file yields defaults; a malformed
        file yields defaults with a warning.
    """
    settings = Settings()
    path = config_file or get_config_path()

    if path.exists():
        try:
            with open(path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            warn(f"Ignoring config file {path}: {e}")
        else:
            if isinstance(data, dict):
                settings = _apply_file(settings, data)
            else:
                warn(f"Ignoring config file {path}: expected a JSON object")

    return _apply_env(settings)
