"""
plant_lib.ui - Interactive components for plant

This package contains:
- controller: Focus movement and expand/collapse over the plan tree
- dialog: Confirmation question state and answer delivery
- app: prompt_toolkit application wiring both to the terminal
"""

from .controller import TreeController, first_selectable_node
from .dialog import ConfirmationDialog, dialog_buttons, YES, NO
from .app import PlanViewer

__all__ = [
    'TreeController',
    'first_selectable_node',
    'ConfirmationDialog',
    'dialog_buttons',
    'YES',
    'NO',
    'PlanViewer',
]
