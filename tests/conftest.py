"""
Shared fixtures for plant tests.
"""

import pytest

from plant_lib.tree import new_root, read_tree


ESC = "\x1b"

# Output of `terraform plan` for a single new instance, colors removed
PLAN_LINES = [
    "",
    "Terraform used the selected providers to generate the following execution",
    "plan. Resource actions are indicated with the following symbols:",
    "  + create",
    "",
    "Terraform will perform the following actions:",
    "",
    "  # aws_instance.web will be created",
    '  + resource "aws_instance" "web" {',
    '      + ami           = "ami-0123456789"',
    '      + instance_type = "t3.micro"',
    "      + tags          = {",
    '          + "Name" = "web"',
    "        }",
    "      + ebs_block_device {",
    '          + volume_size = 8',
    "        }",
    "    }",
    "",
    "Plan: 1 to add, 0 to change, 0 to destroy.",
]

# Preamble of `terraform apply` up to the confirmation question
APPLY_LINES = PLAN_LINES + [
    "",
    "Do you want to perform these actions?",
    "  Terraform will perform the actions described above.",
    "  Only 'yes' will be accepted to approve.",
]


@pytest.fixture
def plan_lines() -> list[str]:
    return list(PLAN_LINES)


@pytest.fixture
def apply_lines() -> list[str]:
    return list(APPLY_LINES)


@pytest.fixture
def plan_tree():
    """Root of the tree built from PLAN_LINES."""
    root = new_root()
    read_tree(root, PLAN_LINES)
    return root


@pytest.fixture
def colored():
    """Wrap text in an ANSI color code, e.g. colored("+", 32)."""
    def wrap(text: str, code: int = 32) -> str:
        return f"{ESC}[{code}m{text}{ESC}[0m"
    return wrap
