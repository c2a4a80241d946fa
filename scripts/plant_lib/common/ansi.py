"""
Color code handling for Terraform output.

Structural analysis works on the visible text only, so color codes are
removed before a line is classified. The same ANSI parser renders the tree,
so what is classified is exactly what is shown.
"""

from prompt_toolkit.formatted_text import ANSI, to_plain_text

# Characters that start something the ANSI parser does not display as-is
ESCAPE_STARTS = ("\x1b", "\x9b", "\x01")


def strip_ansi(line: str) -> str:
    """Return the visible text of a line with ANSI escape codes removed."""
    if not any(start in line for start in ESCAPE_STARTS):
        return line
    return to_plain_text(ANSI(line))
