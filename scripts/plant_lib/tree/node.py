"""
Tree nodes for Terraform plan output.

A node's displayed text is never edited in place. Each node keeps the text
of its line and a two-state expansion flag; the displayed text is derived
from both, so expanding and collapsing are exact inverses.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from plant_lib.common import strip_ansi
from plant_lib.config import ROOT_LABEL

from .classify import OPENING_BRACKETS, CLOSING_BRACKETS


# "(" -> "...)", "[" -> "...]", "{" -> "...}"
COLLAPSED_SUFFIXES = {
    opening: "..." + closing
    for opening, closing in zip(OPENING_BRACKETS, CLOSING_BRACKETS)
}


class NodeState(Enum):
    EXPANDED = "expanded"
    COLLAPSED = "collapsed"


def collapsed_suffix(visible: str) -> str:
    """Suffix shown after a collapsed line, or "" if it opens no block."""
    if visible and visible[-1] in COLLAPSED_SUFFIXES:
        return COLLAPSED_SUFFIXES[visible[-1]]
    return ""


def collapse_text(text: str) -> str:
    """Collapsed form of a line: `+ resource {` becomes `+ resource {...}`."""
    return text + collapsed_suffix(strip_ansi(text))


def expand_text(text: str) -> str:
    """Expanded form of a line; inverse of collapse_text()."""
    for opening, suffix in COLLAPSED_SUFFIXES.items():
        if text.endswith(suffix):
            head = text[:-len(suffix)]
            if strip_ansi(head).endswith(opening):
                return head
    return text


@dataclass(eq=False)
class Node:
    """A line of plan output in the tree."""
    text: str  # Line as printed by Terraform, color codes included
    raw: str = ""  # Visible text used for structure
    selectable: bool = False
    state: NodeState = NodeState.COLLAPSED
    children: list[Node] = field(default_factory=list)
    is_prompt: bool = False
    _parent: Optional[weakref.ref] = field(default=None, repr=False)

    @property
    def parent(self) -> Optional[Node]:
        """Enclosing node; a non-owning reference used to move focus up."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def is_opener(self) -> bool:
        return collapsed_suffix(self.raw) != ""

    @property
    def is_expanded(self) -> bool:
        return self.state is NodeState.EXPANDED

    @property
    def display_text(self) -> str:
        if self.state is NodeState.COLLAPSED:
            return self.text + collapsed_suffix(self.raw)
        return self.text

    def add_child(self, child: Node) -> Node:
        """Append a child node and return it for chaining."""
        self.children.append(child)
        child._parent = weakref.ref(self)
        return child

    def set_expanded(self, expanded: bool) -> None:
        """Expand or collapse an opener node; other nodes keep their state."""
        if not self.is_opener:
            return
        self.state = NodeState.EXPANDED if expanded else NodeState.COLLAPSED

    def toggle(self) -> None:
        self.set_expanded(not self.is_expanded)

    def depth_first(self) -> Iterator[Node]:
        """Traverse tree depth-first, yielding self then children."""
        yield self
        for child in self.children:
            yield from child.depth_first()


def new_root() -> Node:
    """Synthetic root that owns the tree; it is never displayed."""
    return Node(text=ROOT_LABEL, raw=ROOT_LABEL, state=NodeState.EXPANDED)


def new_prompt_node(query: str) -> Node:
    """Focusable node standing for Terraform's pending confirmation question."""
    return Node(text=query, raw=query, selectable=True,
                state=NodeState.EXPANDED, is_prompt=True)
