"""
Tree building for Terraform plan output.

Lines are consumed in a single pass. A stack of still-open block nodes
decides where each new node is attached: a line ending in an opening
bracket opens a block, a line starting with a closing bracket ends one.
"""

from collections.abc import Iterable
from typing import Optional

from plant_lib.common import strip_ansi

from .classify import is_closer, is_opener, is_prompt, is_region_start
from .node import Node


class ParentStack:
    """Open block nodes, innermost last. The root is never popped."""

    def __init__(self, root: Node):
        self._nodes: list[Node] = [root]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def peek(self) -> Node:
        return self._nodes[-1]

    def push(self, node: Node) -> None:
        self._nodes.append(node)

    def pop(self) -> Optional[Node]:
        """Pop the innermost block; a stray closer at the root is ignored."""
        if len(self._nodes) == 1:
            return None
        return self._nodes.pop()


class TreeBuilder:
    """
    Builds the tree below `root` from Terraform's output lines.

    Lines up to and including the one that starts the plan section are
    skipped. Building stops at Terraform's confirmation question, whose
    text is returned.
    """

    def __init__(self, root: Node):
        self.root = root
        self.stack = ParentStack(root)
        self.started = False
        self.node_count = 0

    def feed(self, line: str) -> Optional[str]:
        """
        Process one line of output (color codes included, no line terminator).

        Returns:
            The prompt text if the line is Terraform's confirmation
            question, None otherwise.
        """
        raw = strip_ansi(line)
        if not self.started:
            self.started = is_region_start(raw)
            return None

        if is_prompt(raw):
            return raw

        node = Node(text=line, raw=raw)
        self.stack.peek().add_child(node)
        self.node_count += 1

        if is_opener(raw):
            node.selectable = True
            self.stack.push(node)
        if is_closer(raw):
            self.stack.pop()
        return None

    def build(self, lines: Iterable[str]) -> Optional[str]:
        """
        Consume lines until the input ends or a prompt is seen.

        Returns:
            The prompt text, or None if the input ended without one.
            Errors raised by the line source propagate unchanged.
        """
        for line in lines:
            query = self.feed(line)
            if query is not None:
                return query
        return None


def read_tree(root: Node, lines: Iterable[str]) -> Optional[str]:
    """Populate `root` from `lines`; return the pending prompt text, if any."""
    return TreeBuilder(root).build(lines)
