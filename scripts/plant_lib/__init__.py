"""
plant_lib - Collapsible tree viewer for Terraform plan output

This package contains the components behind the `plant` command, which
turns the line-oriented output of `terraform plan`/`apply`/`destroy` into
an interactive tree and answers Terraform's confirmation prompt.
"""

__version__ = "1.0.0"
