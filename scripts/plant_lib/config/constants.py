"""
Configuration constants for plant.

Paths and default values used across the configuration system.
"""

import os
from pathlib import Path


def _config_home() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


# Settings file, overridable with PLANT_CONFIG
CONFIG_FILE = _config_home() / "plant" / "config.json"

# Label of the synthetic tree root (never displayed)
ROOT_LABEL = "Terraform plan"

# prompt_toolkit style classes used by the tree view and the dialog
DEFAULT_STYLE = {
    'tree.selected': 'reverse',
    'tree.prompt': 'bold',
    'dialog': 'bg:default',
    'dialog.body': 'bg:#303030 #ffffff',
    'dialog frame.label': 'bold',
    'button.focused': 'reverse',
}
