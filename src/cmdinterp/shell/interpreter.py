"""Shell interpreter for executing parsed commands.

Maps argument vectors to filesystem operations or external processes.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from cmdinterp.lib.config_parser import ShellConfig
from cmdinterp.lib.process import SpawnError, run_external
from cmdinterp.shell.parser import ArgumentVector, CommandLineParser

logger = logging.getLogger(__name__)


class OutcomeStatus(Enum):
    """Result of dispatching one command."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class DispatchOutcome:
    """Outcome of a single dispatched command."""

    status: OutcomeStatus
    command: str = ""
    reason: str = ""
    ignored: bool = False

    @classmethod
    def success(cls, command: str, ignored: bool = False) -> DispatchOutcome:
        return cls(OutcomeStatus.SUCCESS, command=command, ignored=ignored)

    @classmethod
    def failure(cls, command: str, reason: str) -> DispatchOutcome:
        return cls(OutcomeStatus.FAILURE, command=command, reason=reason)

    @property
    def ok(self) -> bool:
        """Whether the command succeeded (or was ignored)."""
        return self.status is OutcomeStatus.SUCCESS

    def __repr__(self) -> str:
        if self.ok:
            return f"DispatchOutcome({self.command!r}, success, ignored={self.ignored})"
        return f"DispatchOutcome({self.command!r}, failure={self.reason!r})"


def _describe(label: str, error: OSError) -> str:
    """Format an OS error as '<label>: <system reason>'."""
    return f"{label}: {error.strerror or error}"


class Dispatcher:
    """Executes argument vectors.

    Known commands are mkdir, cd, touch and rm -rf. Anything else is
    ignored. Every failure is returned as an outcome, never raised.
    """

    def __init__(self, config: Optional[ShellConfig] = None):
        """Initialize dispatcher.

        Args:
            config: Interpreter settings (defaults if None)
        """
        self.config = config or ShellConfig()

    def dispatch(self, args: ArgumentVector) -> DispatchOutcome:
        """Execute one command.

        Args:
            args: Argument vector produced by the tokenizer

        Returns:
            Outcome of the command
        """
        if not isinstance(args, ArgumentVector):
            args = ArgumentVector(args)

        name = args.name
        if name == "mkdir":
            outcome = self._mkdir(args)
        elif name == "cd":
            outcome = self._cd(args)
        elif name == "touch":
            outcome = self._touch(args)
        elif name == "rm" and args.operand(1) == "-rf":
            outcome = self._remove_tree(args)
        else:
            if name:
                logger.debug(f"Ignoring unrecognized command: {name}")
            return DispatchOutcome.success(name, ignored=True)

        if not outcome.ok:
            logger.error(outcome.reason)
        return outcome

    def _missing_operand(self, name: str) -> DispatchOutcome:
        return DispatchOutcome.failure(name, f"{name}: missing operand")

    def _mkdir(self, args: ArgumentVector) -> DispatchOutcome:
        path = args.operand(1)
        if path is None:
            return self._missing_operand("mkdir")
        try:
            os.mkdir(path, self.config.dir_mode)
        except OSError as e:
            return DispatchOutcome.failure("mkdir", _describe("mkdir error", e))
        logger.debug(f"Created directory: {path}")
        return DispatchOutcome.success("mkdir")

    def _cd(self, args: ArgumentVector) -> DispatchOutcome:
        path = args.operand(1)
        if path is None:
            return self._missing_operand("cd")
        try:
            os.chdir(path)
        except OSError as e:
            return DispatchOutcome.failure("cd", _describe("cd error", e))
        logger.debug(f"Changed directory: {os.getcwd()}")
        return DispatchOutcome.success("cd")

    def _touch(self, args: ArgumentVector) -> DispatchOutcome:
        path = args.operand(1)
        if path is None:
            return self._missing_operand("touch")
        try:
            fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, self.config.file_mode)
        except OSError as e:
            return DispatchOutcome.failure("touch", _describe("open error", e))
        os.close(fd)
        logger.debug(f"Touched file: {path}")
        return DispatchOutcome.success("touch")

    def _remove_tree(self, args: ArgumentVector) -> DispatchOutcome:
        if len(args) < 3:
            return DispatchOutcome.failure("rm", "Syntax error for rm -rf")
        try:
            handle = run_external([self.config.rm_executable, "-rf", args[2]])
        except SpawnError as e:
            return DispatchOutcome.failure("rm", _describe("spawn error", e))
        if handle.returncode != 0:
            logger.debug(f"{self.config.rm_executable} exited with status {handle.returncode}")
        return DispatchOutcome.success("rm")


class ExecutionContext:
    """Execution context for interpreter commands.

    Holds the dispatcher, command history and the process working
    directory, which ``cd`` changes for every later command.
    """

    def __init__(
        self,
        config: Optional[ShellConfig] = None,
        start_dir: Union[str, Path, None] = None
    ):
        """Initialize execution context.

        Args:
            config: Interpreter settings (defaults if None)
            start_dir: Directory to change into (config start_dir if None)
        """
        self.config = config or ShellConfig()
        self.parser = CommandLineParser()
        self.dispatcher = Dispatcher(self.config)
        self.history: list[str] = []

        start_dir = start_dir if start_dir is not None else self.config.start_dir
        if start_dir is not None:
            self.chdir(start_dir)

    @property
    def cwd(self) -> Path:
        """Current process working directory."""
        return Path.cwd()

    def chdir(self, path: Union[str, Path]) -> None:
        """Set the working directory directly.

        Raises:
            OSError: If the directory cannot be entered
        """
        os.chdir(path)
        logger.debug(f"Working directory set to {self.cwd}")

    def execute(self, command_line: str) -> List[DispatchOutcome]:
        """Execute every command of a line, in order.

        Args:
            command_line: Semicolon-separated commands

        Returns:
            One outcome per command
        """
        self.history.append(command_line)
        return [self.dispatcher.dispatch(args) for args in self.parser.parse(command_line)]

    def dispatch(self, args: ArgumentVector) -> DispatchOutcome:
        """Dispatch a single pre-tokenized command."""
        return self.dispatcher.dispatch(args)

    def get_history(self) -> list[str]:
        """Get command history.

        Returns:
            List of executed lines
        """
        return self.history.copy()

    def clear_history(self) -> None:
        """Clear command history."""
        self.history.clear()


_context: Optional[ExecutionContext] = None


def get_context() -> ExecutionContext:
    """Get or create global execution context.

    Returns:
        Execution context
    """
    global _context
    if _context is None:
        _context = ExecutionContext()
    return _context


def reset_context(
    config: Optional[ShellConfig] = None,
    start_dir: Union[str, Path, None] = None
) -> ExecutionContext:
    """Reset global execution context.

    Args:
        config: Interpreter settings for the new context
        start_dir: Directory the new context starts in

    Returns:
        The new context
    """
    global _context
    _context = ExecutionContext(config=config, start_dir=start_dir)
    return _context


def dispatch(args: ArgumentVector) -> DispatchOutcome:
    """Dispatch a command with default settings."""
    return Dispatcher().dispatch(args)
