"""
plant_lib.config - Settings for plant.

This package contains:
- constants: Paths and default values (CONFIG_FILE, ROOT_LABEL, DEFAULT_STYLE)
- settings: Settings dataclass and loading from file and environment
"""

from .constants import (
    CONFIG_FILE,
    ROOT_LABEL,
    DEFAULT_STYLE,
)

from .settings import (
    Settings,
    get_config_path,
    load_settings,
)

__all__ = [
    # Constants
    'CONFIG_FILE',
    'ROOT_LABEL',
    'DEFAULT_STYLE',
    # Settings
    'Settings',
    'get_config_path',
    'load_settings',
]
