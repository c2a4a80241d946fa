"""
Driven Terraform process.

When plant is given a command it runs Terraform itself, reads its stdout
and writes the confirmation answer to its stdin. Stderr is passed through.
"""

import signal
import subprocess
import threading
from typing import Callable, Optional, TextIO

from plant_lib.stream import ENCODING, ERRORS


class ProcessStartError(Exception):
    """Raised when the Terraform command cannot be started."""
    pass


class TerraformProcess:
    """A running command with piped stdin and stdout."""

    def __init__(self, popen: subprocess.Popen):
        self.popen = popen
        self._interrupted = False
        self._watcher: Optional[threading.Thread] = None

    @classmethod
    def start(cls, command: list[str]) -> "TerraformProcess":
        """
        Start a command, e.g. ["terraform", "apply"].

        Raises:
            ProcessStartError: if the command is empty or cannot be executed
        """
        if not command:
            raise ProcessStartError("no command given")
        try:
            popen = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
                encoding=ENCODING,
                errors=ERRORS,
            )
        except OSError as e:
            raise ProcessStartError(f"failed to exec command {command}: {e}") from e
        return cls(popen)

    @property
    def stdin(self) -> TextIO:
        return self.popen.stdin

    @property
    def stdout(self) -> TextIO:
        return self.popen.stdout

    @property
    def running(self) -> bool:
        return self.popen.poll() is None

    def watch(self, on_stop: Callable[[], None], query: Optional[str]) -> threading.Thread:
        """
        Wait for the process in the background.

        `on_stop` is called once the process has exited if it failed, or
        if Terraform was waiting for an answer that can no longer be given.
        """
        def wait_for_exit() -> None:
            returncode = self.popen.wait()
            if returncode != 0 or query:
                on_stop()

        self._watcher = threading.Thread(target=wait_for_exit, name="plant-watcher", daemon=True)
        self._watcher.start()
        return self._watcher

    def interrupt(self) -> bool:
        """
        Send SIGINT, at most once and only while the process runs.

        Returns:
            True if the signal was sent by this call
        """
        if self._interrupted or not self.running:
            return False
        self._interrupted = True
        self.popen.send_signal(signal.SIGINT)
        return True

    def wait(self) -> int:
        """Reap the process and return its exit code."""
        return self.popen.wait()


def exit_status(returncode: int) -> int:
    """
    Shell exit status for a process return code.

    subprocess reports death by signal N as -N; shells report 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode
