"""
plant_lib.tree - Tree model for Terraform plan output

This package contains:
- classify: Per-line checks for block openers/closers, plan start and prompts
- node: Node with its expanded/collapsed display state
- builder: Single-pass tree builder driven by a parent stack
"""

from .classify import (
    is_region_start,
    is_prompt,
    is_opener,
    is_closer,
)

from .node import (
    Node,
    NodeState,
    collapse_text,
    expand_text,
    new_root,
    new_prompt_node,
)

from .builder import (
    ParentStack,
    TreeBuilder,
    read_tree,
)

__all__ = [
    # Classification
    'is_region_start',
    'is_prompt',
    'is_opener',
    'is_closer',
    # Nodes
    'Node',
    'NodeState',
    'collapse_text',
    'expand_text',
    'new_root',
    'new_prompt_node',
    # Building
    'ParentStack',
    'TreeBuilder',
    'read_tree',
]
