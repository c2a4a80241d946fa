"""
plant_lib.common - Shared utilities for plant

This module provides:
- colors: ANSI color codes and diagnostic functions
- ansi: Color code removal for structural analysis (prompt_toolkit parser)
"""

from .colors import Colors, warn, error
from .ansi import strip_ansi

__all__ = [
    'Colors', 'warn', 'error',
    'strip_ansi',
]
