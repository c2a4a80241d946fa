"""
Command-line entry point for plant.

    terraform plan | plant          browse piped plan output
    plant terraform apply           run Terraform and answer its prompt
"""

import argparse
import random
import sys
from contextlib import ExitStack
from typing import Optional, TextIO

from plant_lib import __version__
from plant_lib.common import error
from plant_lib.config import Settings, load_settings
from plant_lib.process import ProcessStartError, TerraformProcess, exit_status
from plant_lib.stream import drain, echo_lines, keep_bytes
from plant_lib.tree import new_root, read_tree
from plant_lib.ui import PlanViewer

PIPE_WITH_PROMPT_MESSAGE = (
    "Piping only works with `terraform plan | plant`. "
    "For apply or destroy run `plant terraform apply` or `plant terraform destroy`."
)


def parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="plant",
        description="Browse Terraform plan output as a collapsible tree",
        epilog="Without a command, plan output is read from stdin.",
    )
    parser.add_argument(
        "--no-mouse",
        action="store_false",
        dest="mouse",
        default=None,
        help="Disable mouse support",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Terraform command to run, e.g. `terraform apply`",
    )
    return parser.parse_args(args)


def resolve_settings(parsed: argparse.Namespace) -> Settings:
    """Settings from file and environment, with CLI flags applied last."""
    settings = load_settings()
    if parsed.mouse is not None:
        settings.mouse = parsed.mouse
    return settings


def _open_terminal(stack: ExitStack) -> tuple[Optional[TextIO], Optional[TextIO]]:
    """Open the controlling terminal when stdin or stdout is redirected."""
    if sys.stdin.isatty() and sys.stdout.isatty():
        return None, None
    tty_in = stack.enter_context(open("/dev/tty"))
    tty_out = stack.enter_context(open("/dev/tty", "w"))
    return tty_in, tty_out


def main(args: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)
    settings = resolve_settings(parsed)

    keep_bytes(sys.stdout)
    proc: Optional[TerraformProcess] = None
    if parsed.command:
        try:
            proc = TerraformProcess.start(parsed.command)
        except ProcessStartError as e:
            error(str(e))
            return 1
        source = proc.stdout
    else:
        source = keep_bytes(sys.stdin)

    root = new_root()
    try:
        query = read_tree(root, echo_lines(source, sys.stdout))
    except (OSError, UnicodeDecodeError) as e:
        error(f"Failed to read Terraform output: {e}")
        if proc is not None:
            proc.interrupt()
        return 1

    if query is not None and proc is None:
        drain(source, sys.stdout)
        error(PIPE_WITH_PROMPT_MESSAGE)
        return 1

    with ExitStack() as stack:
        try:
            tty_in, tty_out = _open_terminal(stack)
        except OSError as e:
            error(f"No terminal available for the interactive view: {e}")
            if proc is not None:
                proc.interrupt()
            return 1

        viewer = PlanViewer(
            root,
            settings,
            query=query,
            answer_sink=proc.stdin if proc is not None else None,
            rng=random.Random(),
            tty_in=tty_in,
            tty_out=tty_out,
        )

        def start_watcher() -> None:
            if proc is not None:
                proc.watch(viewer.request_exit, query)

        viewer.run(pre_run=start_watcher)

    if proc is not None and not viewer.answered:
        proc.interrupt()

    # Further Terraform output, e.g. the progress of an apply
    drain(source, sys.stdout)

    if proc is not None:
        return exit_status(proc.wait())
    return 0


if __name__ == "__main__":
    sys.exit(main())
