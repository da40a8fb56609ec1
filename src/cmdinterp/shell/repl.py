"""REPL (Read-Eval-Print Loop) for interactive shell.

Reads command lines, runs each semicolon-separated command and reports
failures without ending the session.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from cmdinterp.shell.builtins import execute_builtin, is_builtin
from cmdinterp.shell.interpreter import DispatchOutcome, ExecutionContext

logger = logging.getLogger(__name__)

try:
    import readline
    HAS_READLINE = True
except ImportError:
    HAS_READLINE = False
    logger.debug("readline not available - command history disabled")


def _builtin_name(line: str) -> Optional[str]:
    """Name of the built-in a line invokes, if any."""
    if not line.startswith('.'):
        return None
    parts = line[1:].split(None, 1)
    if parts and is_builtin(parts[0]):
        return parts[0]
    return None


def _report(outcomes: List[DispatchOutcome]) -> None:
    for outcome in outcomes:
        if not outcome.ok:
            print(outcome.reason, file=sys.stderr)


class REPL:
    """Read-Eval-Print Loop for interactive shell."""

    def __init__(self, context: Optional[ExecutionContext] = None):
        """Initialize REPL.

        Args:
            context: Execution context (creates new if None)
        """
        self.context = context or ExecutionContext()
        self.config = self.context.config
        self.running = False

        if HAS_READLINE and self.config.history_file is not None:
            self._setup_readline()

    def _setup_readline(self) -> None:
        """Setup readline for command history."""
        history_file = str(self.config.history_file)
        try:
            readline.read_history_file(history_file)
        except FileNotFoundError:
            pass

        import atexit
        atexit.register(readline.write_history_file, history_file)

        readline.set_history_length(self.config.history_length)

    def run(self) -> None:
        """Run the REPL loop until the exit keyword or EOF."""
        self.running = True
        while self.running:
            try:
                line = input(self.config.prompt).strip()
                if line == self.config.exit_keyword:
                    break
                if not line:
                    continue
                self._execute_line(line)
            except EOFError:
                # Ctrl+D
                print()
                break
            except KeyboardInterrupt:
                # Ctrl+C
                print()
                continue
            except SystemExit:
                break
        self.running = False
        print(self.config.farewell)

    def _execute_line(self, line: str) -> None:
        """Execute a single line of input.

        Args:
            line: Input line
        """
        name = _builtin_name(line)
        if name is not None:
            result = execute_builtin(name, context=self.context)
            if result is not None:
                print(result)
            return

        _report(self.context.execute(line))


def run_repl(context: Optional[ExecutionContext] = None) -> None:
    """Run interactive REPL.

    Args:
        context: Optional execution context
    """
    REPL(context=context).run()


def run_command(command: str, context: Optional[ExecutionContext] = None) -> List[DispatchOutcome]:
    """Run a single command line non-interactively.

    Built-in output is printed; built-ins produce no outcomes.

    Args:
        command: Command line to execute
        context: Optional execution context

    Returns:
        One outcome per dispatched command
    """
    if context is None:
        context = ExecutionContext()

    name = _builtin_name(command)
    if name is not None:
        result = execute_builtin(name, context=context)
        if result is not None:
            print(result)
        return []

    outcomes = context.execute(command)
    _report(outcomes)
    return outcomes


def run_script(script_path: Path, context: Optional[ExecutionContext] = None) -> List[DispatchOutcome]:
    """Run command lines from a script file.

    Blank lines and lines starting with # are skipped.

    Args:
        script_path: Path to script file
        context: Optional execution context

    Returns:
        Outcomes of every dispatched command, in order
    """
    if context is None:
        context = ExecutionContext()

    outcomes: List[DispatchOutcome] = []
    with open(script_path) as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()

            if not line or line.startswith('#'):
                continue

            logger.debug(f"Executing line {line_num}: {line}")
            outcomes.extend(run_command(line, context))

    return outcomes
