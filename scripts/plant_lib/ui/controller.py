"""
Navigation over the plan tree.

Translates key and mouse events into focus changes and expand/collapse
calls. Only selectable nodes (block openers and the prompt node) ever
receive focus.
"""

from typing import Callable, Optional

from plant_lib.tree import Node


def first_selectable_node(root: Node) -> Optional[Node]:
    """First top-level node that has children, i.e. the first real block."""
    for child in root.children:
        if child.children:
            return child
    return None


class TreeController:
    """Focus and expansion state of a tree being browsed."""

    def __init__(self, root: Node, on_prompt: Optional[Callable[[], None]] = None):
        self.root = root
        self.current: Optional[Node] = first_selectable_node(root)
        self.on_prompt = on_prompt
        self.finished = False

    def finish(self) -> None:
        """End the session; later events are ignored."""
        self.finished = True

    # =========================================================================
    # Display order
    # =========================================================================

    def visible_nodes(self) -> list[Node]:
        """Nodes in display order, descending only into expanded nodes."""
        visible: list[Node] = []

        def walk(node: Node) -> None:
            for child in node.children:
                visible.append(child)
                if child.is_expanded:
                    walk(child)

        walk(self.root)
        return visible

    def selectable_nodes(self) -> list[Node]:
        return [node for node in self.visible_nodes() if node.selectable]

    # =========================================================================
    # Focus movement
    # =========================================================================

    def move(self, delta: int) -> None:
        """Move focus `delta` selectable nodes down (negative: up)."""
        if self.finished or delta == 0:
            return
        candidates = self.selectable_nodes()
        if not candidates:
            return
        if self.current not in candidates:
            self.current = candidates[0] if delta > 0 else candidates[-1]
            return
        index = candidates.index(self.current) + delta
        self.current = candidates[max(0, min(index, len(candidates) - 1))]

    def move_first(self) -> None:
        if self.finished:
            return
        candidates = self.selectable_nodes()
        if candidates:
            self.current = candidates[0]

    def move_last(self) -> None:
        if self.finished:
            return
        candidates = self.selectable_nodes()
        if candidates:
            self.current = candidates[-1]

    def expand_or_descend(self) -> None:
        """Expand a collapsed block, or step to the next node if already open."""
        node = self.current
        if self.finished or node is None:
            return
        if node.is_opener and not node.is_expanded:
            node.set_expanded(True)
        else:
            self.move(1)

    def collapse_or_ascend(self) -> None:
        """Collapse an open block, or step up to the enclosing block."""
        node = self.current
        if self.finished or node is None:
            return
        if node.is_opener and node.is_expanded:
            node.set_expanded(False)
            return
        parent = node.parent
        if parent is not None and parent is not self.root:
            self.current = parent

    # =========================================================================
    # Activation
    # =========================================================================

    def activate(self, node: Optional[Node] = None) -> None:
        """Toggle a block, or open the confirmation dialog for the prompt node."""
        node = node or self.current
        if self.finished or node is None or not node.selectable:
            return
        if node.is_prompt:
            if self.on_prompt is not None:
                self.on_prompt()
            return
        node.toggle()

    def select(self, node: Node) -> None:
        """Mouse click: focus a node, or activate it if it already has focus."""
        if self.finished or not node.selectable:
            return
        if node is self.current:
            self.activate(node)
        else:
            self.current = node
