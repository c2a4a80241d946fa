"""
Pass-through of Terraform output.

Everything read from Terraform is forwarded unmodified so that the output
seen without plant is preserved, including lines outside the plan. Bytes
that are not valid UTF-8 travel as surrogate escapes and are written back
out as the same bytes.
"""

from collections.abc import Iterator
from typing import TextIO

ENCODING = "utf-8"
ERRORS = "surrogateescape"


def keep_bytes(stream: TextIO) -> TextIO:
    """
    Make a standard stream decode or encode Terraform output losslessly.

    Streams that cannot be reconfigured (e.g. io.StringIO) are returned
    unchanged.
    """
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(encoding=ENCODING, errors=ERRORS)
    return stream


def echo_lines(stream: TextIO, sink: TextIO) -> Iterator[str]:
    """
    Yield lines of `stream` after forwarding each one to `sink`.

    Yielded lines have their line terminator removed.
    """
    for line in stream:
        sink.write(line)
        sink.flush()
        yield line.rstrip("\r\n")


def drain(stream: TextIO, sink: TextIO) -> None:
    """Forward the rest of `stream` to `sink` as it arrives."""
    for line in stream:
        sink.write(line)
        sink.flush()
