"""Built-in commands for the shell.

Provides session commands like .help, .history, .pwd and .exit.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)


class BuiltinCommand:
    """A named built-in command."""

    def __init__(self, name: str, description: str, func: Callable):
        """Initialize builtin command.

        Args:
            name: Command name (with or without leading dot)
            description: Help text
            func: Function to execute
        """
        self.name = name.lstrip('.')
        self.description = description
        self.func = func

    def execute(self, *args: Any, **kwargs: Any) -> Any:
        """Execute the command."""
        return self.func(*args, **kwargs)


class BuiltinRegistry:
    """Registry of built-in shell commands."""

    def __init__(self):
        """Initialize registry."""
        self.commands: Dict[str, BuiltinCommand] = {}

    def register(self, name: str, description: str) -> Callable:
        """Decorator to register a built-in command.

        Args:
            name: Command name
            description: Help text

        Returns:
            Decorator function
        """
        def decorator(func: Callable) -> Callable:
            cmd = BuiltinCommand(name, description, func)
            self.commands[cmd.name] = cmd
            logger.debug(f"Registered builtin: .{cmd.name}")
            return func
        return decorator

    def get(self, name: str) -> BuiltinCommand | None:
        """Get a built-in command.

        Args:
            name: Command name (with or without leading dot)

        Returns:
            Command if found, None otherwise
        """
        return self.commands.get(name.lstrip('.'))

    def list_commands(self) -> list[BuiltinCommand]:
        """List all built-in commands."""
        return list(self.commands.values())


_registry = BuiltinRegistry()


def get_registry() -> BuiltinRegistry:
    """Get the global builtin registry."""
    return _registry


def _resolve(context: Any) -> Any:
    if context is None:
        from cmdinterp.shell.interpreter import get_context
        context = get_context()
    return context


@_registry.register("help", "Show help for available commands")
def help_command(context: Any = None) -> str:
    """Show help information.

    Args:
        context: Execution context (unused, for compatibility)

    Returns:
        Help text
    """
    lines = [
        "cmdinterp - minimal command line interpreter",
        "",
        "Commands:",
        "  mkdir <path>       Create a directory",
        "  cd <path>          Change the working directory",
        "  touch <path>       Create or truncate a file",
        "  rm -rf <path>      Recursively delete a path",
        "",
        "Separate commands with ';'. Double quotes keep spaces inside a token.",
        "",
        "Built-in commands (prefix with .):",
        "",
    ]
    for cmd in _registry.list_commands():
        lines.append(f"  .{cmd.name:<15} {cmd.description}")
    return '\n'.join(lines)


@_registry.register("history", "Show command history")
def history_command(context: Any = None) -> str:
    """Show command history.

    Args:
        context: Execution context

    Returns:
        History listing
    """
    history = _resolve(context).get_history()

    if not history:
        return "No command history"

    lines = ["Command history:"]
    for i, cmd in enumerate(history, 1):
        lines.append(f"  {i}. {cmd}")
    return '\n'.join(lines)


@_registry.register("pwd", "Show the current working directory")
def pwd_command(context: Any = None) -> str:
    return str(_resolve(context).cwd)


@_registry.register("exit", "Exit the shell")
def exit_command(context: Any = None) -> None:
    """Exit the shell.

    Raises:
        SystemExit: To exit the shell
    """
    logger.info("Exiting shell...")
    raise SystemExit(0)


def is_builtin(command: str) -> bool:
    """Check if a command is a built-in.

    Args:
        command: Command name

    Returns:
        True if builtin
    """
    return _registry.get(command) is not None


def execute_builtin(command: str, **kwargs: Any) -> Any:
    """Execute a built-in command.

    Args:
        command: Command name
        **kwargs: Keyword arguments (e.g., context)

    Returns:
        Command result

    Raises:
        ValueError: If command not found
    """
    cmd = _registry.get(command)
    if cmd is None:
        raise ValueError(f"Unknown built-in command: {command}")
    return cmd.execute(**kwargs)
