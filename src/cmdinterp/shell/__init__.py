"""Shell module for the command line interpreter.

Provides the quote-aware tokenizer, the command dispatcher, the REPL and
dot-prefixed built-in commands.
"""

from __future__ import annotations

from cmdinterp.shell.builtins import execute_builtin, is_builtin
from cmdinterp.shell.interpreter import (
    DispatchOutcome,
    Dispatcher,
    ExecutionContext,
    dispatch,
    get_context,
    reset_context,
)
from cmdinterp.shell.parser import ArgumentVector, CommandLineParser, parse_line, split_commands, tokenize
from cmdinterp.shell.repl import REPL, run_command, run_repl, run_script

__all__ = [
    "REPL",
    "ArgumentVector",
    "CommandLineParser",
    "Dispatcher",
    "DispatchOutcome",
    "ExecutionContext",
    "run_repl",
    "run_command",
    "run_script",
    "tokenize",
    "split_commands",
    "parse_line",
    "dispatch",
    "get_context",
    "reset_context",
    "is_builtin",
    "execute_builtin",
]
