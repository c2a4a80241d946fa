"""
Line classification for Terraform plan output.

Every function here works on the visible text of a single line (color
codes already removed) and is total: any string is a valid input.
"""

# Lines that mark the start of the plan section of Terraform's output
REGION_START_PREFIXES = (
    "Terraform detected the following changes",
    "Terraform used the selected providers",
    "Terraform will perform the following actions",
)
REGION_START_SUFFIXES = (
    "Objects have changed outside of Terraform",
)

# Questions Terraform asks before it reads an answer from stdin
PROMPTS = (
    "Do you want to perform these actions?",
    "Do you really want to destroy all resources?",
)

OPENING_BRACKETS = "([{"
CLOSING_BRACKETS = ")]}"


def is_region_start(line: str) -> bool:
    """True if the line begins the part of the output that holds the plan."""
    return line.startswith(REGION_START_PREFIXES) or line.endswith(REGION_START_SUFFIXES)


def is_prompt(line: str) -> bool:
    """True if Terraform is waiting for a yes/no answer after this line."""
    return line in PROMPTS


def is_opener(line: str) -> bool:
    """True if the line opens a nested block (last character is a bracket)."""
    return line != "" and line[-1] in OPENING_BRACKETS


def is_closer(line: str) -> bool:
    """True if the line closes a nested block (first non-blank character is a bracket)."""
    trimmed = line.strip()
    return trimmed != "" and trimmed[0] in CLOSING_BRACKETS
