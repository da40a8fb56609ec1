"""cmdinterp library modules.

Configuration loading and external process execution.
"""

__all__ = [
    "config_parser",
    "process",
]
