"""External process execution.

Runs one external program to completion, the way the dispatcher runs
the recursive-delete utility.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)


class SpawnError(OSError):
    """Raised when an external program cannot be started."""


@dataclass
class ChildProcessHandle:
    """A spawned external process and its completion state."""

    argv: List[str]
    pid: Optional[int] = None
    returncode: Optional[int] = None
    waited: bool = field(default=False)

    @property
    def succeeded(self) -> bool:
        """Whether the process was waited on and exited with status 0."""
        return self.waited and self.returncode == 0

    def __repr__(self) -> str:
        return (
            f"ChildProcessHandle({self.argv!r}, pid={self.pid}, "
            f"returncode={self.returncode})"
        )


def run_external(argv: List[str]) -> ChildProcessHandle:
    """Spawn an external program and block until it exits.

    The child inherits the current working directory and standard
    streams. No timeout is applied.

    Args:
        argv: Program name followed by its arguments

    Returns:
        Handle of the finished process

    Raises:
        SpawnError: If the program could not be started
    """
    handle = ChildProcessHandle(argv=list(argv))
    logger.debug(f"Running: {' '.join(handle.argv)}")

    try:
        proc = subprocess.Popen(handle.argv)
    except OSError as e:
        raise SpawnError(e.errno, e.strerror or str(e), handle.argv[0]) from e

    with proc:
        handle.pid = proc.pid
        handle.returncode = proc.wait()
        handle.waited = True

    logger.debug(f"Process {handle.pid} exited with status {handle.returncode}")
    return handle
