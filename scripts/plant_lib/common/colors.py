"""
ANSI color codes and diagnostic utilities for plant.

Diagnostics go to stderr: stdout carries the echoed Terraform output.
"""

import sys


class Colors:
    """ANSI color escape codes for terminal output."""
    RED = "\033[0;31m"
    YELLOW = "\033[1;33m"
    BOLD = "\033[1m"
    NC = "\033[0m"  # No Color / Reset


def warn(msg: str) -> None:
    """Report a warning in yellow."""
    print(f"{Colors.YELLOW}plant:{Colors.NC} {msg}", file=sys.stderr)


def error(msg: str) -> None:
    """Report an error in red."""
    print(f"{Colors.RED}plant:{Colors.NC} {msg}", file=sys.stderr)
