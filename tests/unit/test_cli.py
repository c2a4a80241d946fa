"""
Tests for the plant command, with the interactive view replaced by a stub.
"""

import io
import sys

import pytest

from plant_lib import cli
from plant_lib.process import TerraformProcess
from plant_lib.ui import YES


class StubViewer:
    """Stands in for PlanViewer; answers the prompt with `answer` if set."""
    answer = None
    instances = []

    def __init__(self, root, settings, query=None, answer_sink=None, rng=None,
                 tty_in=None, tty_out=None):
        self.root = root
        self.settings = settings
        self.query = query
        self.answer_sink = answer_sink
        self.answered = False
        self.ran = False
        StubViewer.instances.append(self)

    def request_exit(self):
        pass

    def run(self, pre_run=None):
        self.ran = True
        if pre_run is not None:
            pre_run()
        if self.query is not None and self.answer is not None:
            self.answer_sink.write(self.answer + "\n")
            self.answer_sink.flush()
            self.answered = True


@pytest.fixture(autouse=True)
def stub_terminal(monkeypatch, tmp_path):
    StubViewer.answer = None
    StubViewer.instances = []
    monkeypatch.setattr(cli, "PlanViewer", StubViewer)
    monkeypatch.setattr(cli, "_open_terminal", lambda stack: (None, None))
    monkeypatch.setenv("PLANT_CONFIG", str(tmp_path / "config.json"))
    monkeypatch.delenv("PLANT_MOUSE", raising=False)


def fake_terraform(lines, after_answer=None):
    """
    Command for a child process that prints `lines`.

    With `after_answer` the child then reads an answer and prints
    `after_answer` if it was "yes"; a SIGINT while waiting is reported as
    "Interrupt received.". Without `after_answer` the child ignores SIGINT
    so its exit code does not depend on when it is reaped.
    """
    script = (
        "import signal, sys\n"
        f"if {after_answer!r} is None:\n"
        "    signal.signal(signal.SIGINT, signal.SIG_IGN)\n"
        "else:\n"
        "    signal.signal(signal.SIGINT, signal.default_int_handler)\n"
        f"for line in {lines!r}:\n"
        "    print(line, flush=True)\n"
        f"if {after_answer!r} is None:\n"
        "    sys.exit(0)\n"
        "try:\n"
        "    answer = sys.stdin.readline().strip()\n"
        "except KeyboardInterrupt:\n"
        "    print('Interrupt received.', flush=True)\n"
        "    sys.exit(1)\n"
        "if answer != 'yes':\n"
        "    print('Apply cancelled.', flush=True)\n"
        "    sys.exit(1)\n"
        f"print({after_answer!r}, flush=True)\n"
    )
    return [sys.executable, "-c", script]


class TestParseArgs:
    def test_no_command(self):
        parsed = cli.parse_args([])
        assert parsed.command == []
        assert parsed.mouse is None

    def test_command_with_flags(self):
        parsed = cli.parse_args(["terraform", "apply", "-var", "x=1"])
        assert parsed.command == ["terraform", "apply", "-var", "x=1"]

    def test_no_mouse(self):
        parsed = cli.parse_args(["--no-mouse", "terraform", "plan"])
        assert parsed.mouse is False
        assert parsed.command == ["terraform", "plan"]
        assert cli.resolve_settings(parsed).mouse is False


class TestPipedInput:
    def test_plan_is_echoed_and_browsed(self, monkeypatch, capsys, plan_lines):
        text = "\n".join(plan_lines) + "\n"
        monkeypatch.setattr(sys, "stdin", io.StringIO(text))
        assert cli.main([]) == 0
        assert capsys.readouterr().out == text
        viewer, = StubViewer.instances
        assert viewer.ran
        assert viewer.query is None
        assert viewer.root.children[6].selectable

    def test_prompt_is_unsupported(self, monkeypatch, capsys, apply_lines):
        text = "\n".join(apply_lines) + "\n  Enter a value: "
        monkeypatch.setattr(sys, "stdin", io.StringIO(text))
        assert cli.main([]) == 1
        captured = capsys.readouterr()
        assert captured.out == text
        assert "Piping only works with `terraform plan | plant`" in captured.err
        assert StubViewer.instances == []


class TestDrivenProcess:
    def test_start_failure(self, capsys):
        assert cli.main(["/nonexistent/terraform-binary", "apply"]) == 1
        assert "failed to exec command" in capsys.readouterr().err

    def test_answer_yes(self, capsys, apply_lines):
        StubViewer.answer = YES
        command = fake_terraform(apply_lines, "Apply complete! Resources: 1 added.")
        assert cli.main(command) == 0
        out = capsys.readouterr().out
        assert "Do you want to perform these actions?" in out
        assert out.rstrip().endswith("Apply complete! Resources: 1 added.")
        viewer, = StubViewer.instances
        assert viewer.query == "Do you want to perform these actions?"

    def test_answer_no(self, capsys, apply_lines):
        StubViewer.answer = "no"
        command = fake_terraform(apply_lines, "Apply complete! Resources: 1 added.")
        assert cli.main(command) == 1
        assert "Apply cancelled." in capsys.readouterr().out

    def test_plan_without_prompt(self, capsys, plan_lines):
        assert cli.main(fake_terraform(plan_lines)) == 0
        assert "Plan: 1 to add, 0 to change, 0 to destroy." in capsys.readouterr().out
        viewer, = StubViewer.instances
        assert viewer.query is None

    def test_unanswered_prompt_is_interrupted_once(self, monkeypatch, capsys, apply_lines):
        sent = []
        interrupt = TerraformProcess.interrupt

        def recording_interrupt(proc):
            result = interrupt(proc)
            sent.append(result)
            return result

        monkeypatch.setattr(TerraformProcess, "interrupt", recording_interrupt)
        command = fake_terraform(apply_lines, "Apply complete! Resources: 1 added.")
        assert cli.main(command) == 1
        assert sent.count(True) == 1
        out = capsys.readouterr().out
        assert out.count("Interrupt received.") == 1
        assert "Apply complete!" not in out

    def test_killed_by_signal_exit_status(self, capsys):
        command = [sys.executable, "-c", "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"]
        assert cli.main(command) == 143


class TestByteExactEcho:
    RAW = b"Terraform will perform the following actions:\n  + name = \"caf\xe9\"\n"

    def test_driven_output(self, capsysbinary):
        code = (
            "import signal, sys\n"
            "signal.signal(signal.SIGINT, signal.SIG_IGN)\n"
            f"sys.stdout.buffer.write({self.RAW!r})\n"
        )
        assert cli.main([sys.executable, "-c", code]) == 0
        assert capsysbinary.readouterr().out == self.RAW

    def test_piped_output(self, monkeypatch, capsysbinary):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(self.RAW)))
        assert cli.main([]) == 0
        assert capsysbinary.readouterr().out == self.RAW
        viewer, = StubViewer.instances
        assert viewer.root.children[0].raw.encode("utf-8", "surrogateescape") == b'  + name = "caf\xe9"'
