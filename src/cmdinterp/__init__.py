"""cmdinterp - Minimal Command Line Interpreter.

Reads semicolon-separated command lines, splits each command into a
quote-aware argument vector and dispatches it.

Features:
- mkdir, cd and touch handled in-process
- rm -rf delegated to the external utility and waited on
- Per-command error reporting that never ends the session
- YAML configuration validated with pydantic
"""

__version__ = "1.0.0"
__license__ = "MIT"

from cmdinterp.cli import main

__all__ = ["main", "__version__"]
