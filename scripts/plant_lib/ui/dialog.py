"""
Confirmation dialog for Terraform's yes/no prompt.

The answer buttons are shuffled every time the dialog opens so that "yes"
is not always in the same place and cannot be confirmed by reflex.
"""

import random
from typing import Callable, Optional, TextIO

from plant_lib.common import warn

YES = "yes"
NO = "no"


def dialog_buttons(rng: random.Random) -> list[str]:
    """
    Button labels for the dialog, left to right.

    The first button is always "no"; "yes" is placed at random among
    the remaining three.
    """
    rest = [NO, NO, YES]
    rng.shuffle(rest)
    return [NO] + rest


class ConfirmationDialog:
    """State of the confirmation question for one session."""

    def __init__(
        self,
        query: str,
        answer_sink: TextIO,
        rng: Optional[random.Random] = None,
        on_done: Optional[Callable[[], None]] = None,
    ):
        self.query = query
        self.answer_sink = answer_sink
        self.rng = rng or random.Random()
        self.on_done = on_done
        self.buttons: list[str] = []
        self.visible = False
        self.answer: Optional[str] = None

    @property
    def answered(self) -> bool:
        return self.answer is not None

    def open(self) -> None:
        """Show the dialog with a fresh button arrangement."""
        if self.answered:
            return
        self.buttons = dialog_buttons(self.rng)
        self.visible = True

    def cancel(self) -> None:
        """Hide the dialog without answering; it can be opened again."""
        self.visible = False

    def choose(self, label: str) -> None:
        """
        Send `label` to Terraform and end the session.

        A Terraform process that has already exited cannot take the answer;
        that is reported and the session ends as usual.
        """
        if self.answered:
            return
        self.answer = label
        self.visible = False
        try:
            self.answer_sink.write(label + "\n")
            self.answer_sink.flush()
        except (OSError, ValueError) as e:
            warn(f"Terraform did not receive the answer: {e}")
        if self.on_done is not None:
            self.on_done()
