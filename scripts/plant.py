#!/usr/bin/env python3
"""
plant.py - Collapsible tree viewer for Terraform plan output

Reads `terraform plan` output from stdin, or runs the given Terraform
command and answers its confirmation prompt from the tree view.
"""

import sys

from plant_lib.cli import main


if __name__ == "__main__":
    sys.exit(main())
