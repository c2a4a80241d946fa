"""
Full-screen tree view for Terraform plan output.

Renders the plan tree with prompt_toolkit and, when Terraform is waiting
for confirmation, the yes/no dialog. All state changes go through the
TreeController and ConfirmationDialog; this module only wires them to the
terminal.
"""

import functools
import random
from typing import Callable, Optional, TextIO

from prompt_toolkit import Application
from prompt_toolkit.data_structures import Point
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import ANSI, StyleAndTextTuples, to_formatted_text
from prompt_toolkit.input import create_input
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import DynamicContainer, Layout, Window
from prompt_toolkit.layout.containers import Container
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.mouse_events import MouseEvent, MouseEventType
from prompt_toolkit.output import create_output
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Button, Dialog, Label

from plant_lib.config import Settings
from plant_lib.tree import Node, new_prompt_node

from .controller import TreeController
from .dialog import ConfirmationDialog

PAGE_SIZE = 10


class PlanViewer:
    """Interactive session over a built plan tree."""

    def __init__(
        self,
        root: Node,
        settings: Settings,
        query: Optional[str] = None,
        answer_sink: Optional[TextIO] = None,
        rng: Optional[random.Random] = None,
        tty_in: Optional[TextIO] = None,
        tty_out: Optional[TextIO] = None,
    ):
        self.controller = TreeController(root, on_prompt=self._open_dialog)
        self.dialog: Optional[ConfirmationDialog] = None
        if query is not None:
            if answer_sink is None:
                raise ValueError("a pending prompt needs a process to answer")
            root.add_child(new_prompt_node(query))
            self.dialog = ConfirmationDialog(query, answer_sink, rng, on_done=self._finish)

        self._cursor_line = 0
        self._dialog_container: Optional[Container] = None

        self.tree_window = Window(
            content=FormattedTextControl(
                self._get_tree_text,
                focusable=True,
                show_cursor=False,
                get_cursor_position=lambda: Point(0, self._cursor_line),
            ),
            wrap_lines=False,
        )

        self.app = Application(
            layout=Layout(DynamicContainer(self._get_container), focused_element=self.tree_window),
            key_bindings=self._create_key_bindings(),
            style=Style.from_dict(settings.style),
            full_screen=True,
            mouse_support=settings.mouse,
            input=create_input(tty_in) if tty_in is not None else None,
            output=create_output(tty_out) if tty_out is not None else None,
        )

    @property
    def answered(self) -> bool:
        return self.dialog is not None and self.dialog.answered

    @property
    def dialog_open(self) -> bool:
        return self.dialog is not None and self.dialog.visible

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    def run(self, pre_run: Optional[Callable[[], None]] = None) -> None:
        """Block until the user quits or answers the prompt."""
        self.app.run(pre_run=pre_run)

    def request_exit(self) -> None:
        """End the session from any thread; safe to call more than once."""
        loop = self.app.loop
        if loop is None:
            return
        try:
            loop.call_soon_threadsafe(self._exit)
        except RuntimeError:
            pass  # loop closed, the session is already over

    def _exit(self) -> None:
        if self.app.is_running and not self.app.is_done:
            self.app.exit()

    def _finish(self) -> None:
        self.controller.finish()
        self._exit()

    # =========================================================================
    # Dialog
    # =========================================================================

    def _open_dialog(self) -> None:
        self.dialog.open()
        buttons = [
            Button(text=label, handler=functools.partial(self.dialog.choose, label))
            for label in self.dialog.buttons
        ]
        self._dialog_container = Dialog(
            title="Terraform",
            body=Label(text=self.dialog.query),
            buttons=buttons,
            with_background=True,
        )
        self.app.layout.focus(buttons[0])

    def _close_dialog(self) -> None:
        self.dialog.cancel()
        self.app.layout.focus(self.tree_window)

    def _get_container(self) -> Container:
        if self.dialog_open and self._dialog_container is not None:
            return self._dialog_container
        return self.tree_window

    # =========================================================================
    # Rendering
    # =========================================================================

    def _mouse_handler(self, node: Node):
        def handler(mouse_event: MouseEvent):
            if mouse_event.event_type != MouseEventType.MOUSE_UP:
                return NotImplemented
            self.controller.select(node)
            return None
        return handler

    def _get_tree_text(self) -> StyleAndTextTuples:
        fragments: StyleAndTextTuples = []
        current = self.controller.current
        for index, node in enumerate(self.controller.visible_nodes()):
            if index:
                fragments.append(("", "\n"))
            row_style = "class:tree.prompt" if node.is_prompt else ""
            if node is current:
                row_style += " class:tree.selected"
                self._cursor_line = index
            handler = self._mouse_handler(node)
            for fragment in to_formatted_text(ANSI(node.display_text)):
                fragments.append((f"{fragment[0]} {row_style}", fragment[1], handler))
        return fragments

    # =========================================================================
    # Key bindings
    # =========================================================================

    def _page_size(self) -> int:
        info = self.tree_window.render_info
        if info is None:
            return PAGE_SIZE
        return max(1, info.window_height - 1)

    def _create_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()
        ctl = self.controller

        in_tree = Condition(lambda: not self.dialog_open)
        in_dialog = Condition(lambda: self.dialog_open)

        @kb.add("right", filter=in_tree)
        @kb.add("l", filter=in_tree)
        def expand(e):
            ctl.expand_or_descend()

        @kb.add("left", filter=in_tree)
        @kb.add("h", filter=in_tree)
        def collapse(e):
            ctl.collapse_or_ascend()

        @kb.add("up", filter=in_tree)
        @kb.add("k", filter=in_tree)
        def up(e):
            ctl.move(-1)

        @kb.add("down", filter=in_tree)
        @kb.add("j", filter=in_tree)
        def down(e):
            ctl.move(1)

        @kb.add("pageup", filter=in_tree)
        def page_up(e):
            ctl.move(-self._page_size())

        @kb.add("pagedown", filter=in_tree)
        def page_down(e):
            ctl.move(self._page_size())

        @kb.add("home", filter=in_tree)
        @kb.add("g", filter=in_tree)
        def top(e):
            ctl.move_first()

        @kb.add("end", filter=in_tree)
        @kb.add("G", filter=in_tree)
        def bottom(e):
            ctl.move_last()

        @kb.add("enter", filter=in_tree)
        @kb.add("space", filter=in_tree)
        def activate(e):
            ctl.activate()

        @kb.add("escape", filter=in_dialog)
        def cancel(e):
            self._close_dialog()

        @kb.add("q", filter=in_tree)
        @kb.add("c-c")
        def quit_(e):
            self._exit()

        return kb
