"""Tests for the REPL, one-shot and script execution."""

import pytest

from cmdinterp.lib.config_parser import DEFAULT_FAREWELL, ShellConfig
from cmdinterp.shell import builtins, repl
from cmdinterp.shell.builtins import execute_builtin, get_registry, is_builtin
from cmdinterp.shell.interpreter import ExecutionContext
from cmdinterp.shell.repl import REPL, run_command, run_script


def feed(monkeypatch, lines):
    """Replace input() with a reader over ``lines`` that ends with EOF."""
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


class TestREPL:
    """Test the interactive loop."""

    def test_exit_keyword(self, workdir, monkeypatch, capsys):
        """Test the exit keyword stops the loop before later lines."""
        feed(monkeypatch, ["mkdir a", "exit", "mkdir b"])
        REPL().run()
        assert (workdir / "a").is_dir()
        assert not (workdir / "b").exists()
        assert DEFAULT_FAREWELL in capsys.readouterr().out

    def test_eof_ends_session(self, workdir, monkeypatch, capsys):
        """Test EOF ends the loop."""
        feed(monkeypatch, ["mkdir a; cd a; touch f"])
        REPL().run()
        assert (workdir / "a" / "f").exists()
        assert DEFAULT_FAREWELL in capsys.readouterr().out

    def test_errors_reported_session_continues(self, workdir, monkeypatch, capsys):
        """Test failures go to stderr and later lines still run."""
        feed(monkeypatch, ["rm -rf", "mkdir d; mkdir d", "touch ok"])
        REPL().run()
        err = capsys.readouterr().err
        assert "Syntax error for rm -rf" in err
        assert "mkdir error: File exists" in err
        assert (workdir / "ok").exists()

    def test_custom_exit_keyword(self, monkeypatch, capsys):
        """Test configured exit keyword and farewell."""
        config = ShellConfig(exit_keyword="quit", farewell="bye")
        feed(monkeypatch, ["exit", "quit"])
        REPL(ExecutionContext(config=config)).run()
        assert capsys.readouterr().out.strip() == "bye"

    def test_builtin_exit(self, monkeypatch, capsys):
        """Test .exit stops the loop."""
        feed(monkeypatch, [".exit", "mkdir never"])
        REPL().run()
        assert "never" not in capsys.readouterr().out

    def test_builtin_pwd(self, workdir, monkeypatch, capsys):
        """Test .pwd prints the working directory after cd."""
        (workdir / "sub").mkdir()
        feed(monkeypatch, ["cd sub", ".pwd"])
        REPL().run()
        assert str(workdir / "sub") in capsys.readouterr().out

    def test_ctrl_c_abandons_line(self, workdir, monkeypatch, capsys):
        """Test Ctrl+C drops the current line and the loop keeps reading."""
        lines = iter([KeyboardInterrupt, "mkdir after", "exit"])

        def fake_input(prompt=""):
            line = next(lines)
            if line is KeyboardInterrupt:
                raise KeyboardInterrupt
            return line

        monkeypatch.setattr("builtins.input", fake_input)
        REPL().run()
        assert (workdir / "after").is_dir()
        assert DEFAULT_FAREWELL in capsys.readouterr().out

    def test_history_file(self, workdir, monkeypatch):
        """Test readline history is loaded, saved at exit and sized."""
        calls = []

        class FakeReadline:
            def read_history_file(self, path):
                calls.append(("read", path))
                raise FileNotFoundError(path)

            def write_history_file(self, path):
                calls.append(("write", path))

            def set_history_length(self, length):
                calls.append(("length", length))

        fake = FakeReadline()
        registered = []
        monkeypatch.setattr(repl, "readline", fake, raising=False)
        monkeypatch.setattr(repl, "HAS_READLINE", True)
        monkeypatch.setattr("atexit.register", lambda func, *args: registered.append((func, args)))

        history = workdir / "h"
        config = ShellConfig(history_file=history, history_length=5)
        REPL(ExecutionContext(config=config))

        assert calls == [("read", str(history)), ("length", 5)]
        assert registered == [(fake.write_history_file, (str(history),))]

    def test_no_history_file(self, monkeypatch):
        """Test readline is left alone without a history file."""
        monkeypatch.setattr(repl, "HAS_READLINE", True)
        monkeypatch.setattr(REPL, "_setup_readline", lambda self: pytest.fail("readline set up"))
        REPL()


class TestRunCommand:
    """Test one-shot execution."""

    def test_outcomes(self, workdir, capsys):
        """Test one outcome per command."""
        outcomes = run_command("mkdir a; cd missing; ; ls")
        assert [o.ok for o in outcomes] == [True, False, True, True]
        assert "cd error" in capsys.readouterr().err

    def test_builtin(self, capsys):
        """Test built-ins print and produce no outcomes."""
        context = ExecutionContext()
        context.execute("mkdir a")
        assert run_command(".history", context) == []
        assert "1. mkdir a" in capsys.readouterr().out

    def test_unknown_dot_command_ignored(self):
        """Test unknown dot commands are dispatched and ignored."""
        outcomes = run_command(".nothing here")
        assert len(outcomes) == 1
        assert outcomes[0].ignored


class TestRunScript:
    """Test script execution."""

    def test_script(self, workdir):
        """Test comments and blank lines are skipped."""
        script = workdir / "setup.cmds"
        script.write_text(
            "# build a tree\n"
            "mkdir proj\n"
            "\n"
            "cd proj; mkdir src; touch src/main\n"
            "mkdir src\n"
        )
        outcomes = run_script(script)
        assert [o.ok for o in outcomes] == [True, True, True, True, False]
        assert (workdir / "proj" / "src" / "main").exists()

    def test_failure_printed_once(self, workdir, capsys):
        """Test a failing script line is printed to stderr once."""
        script = workdir / "bad.cmds"
        script.write_text("cd nowhere\n")
        run_script(script)
        assert capsys.readouterr().err.count("cd error: No such file or directory") == 1


class TestBuiltins:
    """Test the built-in registry."""

    def test_registered(self):
        """Test default built-ins are available."""
        names = {cmd.name for cmd in get_registry().list_commands()}
        assert {"help", "history", "pwd", "exit"} <= names
        assert is_builtin(".help")
        assert not is_builtin("mkdir")

    def test_help_lists_commands(self):
        """Test help text mentions the dispatched commands."""
        text = execute_builtin("help")
        assert "rm -rf <path>" in text
        assert ".history" in text

    def test_history_empty(self):
        """Test empty history message."""
        assert execute_builtin("history", context=ExecutionContext()) == "No command history"

    def test_unknown(self):
        """Test unknown built-in raises ValueError."""
        with pytest.raises(ValueError):
            execute_builtin("nope")

    def test_exit_raises(self):
        """Test .exit raises SystemExit."""
        with pytest.raises(SystemExit):
            builtins.exit_command()
