from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

logger = logging.getLogger(__name__)

from cmdinterp.lib.config_parser import load_config


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging.

    Args:
        verbose: Enable debug logging
        quiet: Suppress info logging
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        description="Minimal command line interpreter (mkdir, cd, touch, rm -rf)",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--config', '-c',
        type=Path,
        default=None,
        help='Path to YAML configuration file (default: built-in settings)'
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '--command', '-e',
        metavar='LINE',
        help='Execute a command line (e.g., "mkdir a; cd a") and exit'
    )
    mode.add_argument(
        '--script',
        type=Path,
        metavar='PATH',
        help='Execute command lines from a file and exit'
    )
    parser.add_argument(
        '--start-dir',
        type=Path,
        metavar='DIR',
        help='Directory to start in (overrides start_dir from config)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (debug) logging'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress informational output'
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, yaml.YAMLError, ValidationError, ValueError) as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    from cmdinterp.shell import ExecutionContext, run_command, run_repl, run_script

    try:
        context = ExecutionContext(config=config, start_dir=args.start_dir)
    except OSError as e:
        logger.error(f"Cannot enter start directory: {e}")
        return 1

    if args.command is not None:
        outcomes = run_command(args.command, context)
        return 0 if all(o.ok for o in outcomes) else 1

    if args.script is not None:
        try:
            outcomes = run_script(args.script, context)
        except OSError as e:
            logger.error(f"Cannot read script {args.script}: {e}")
            return 1
        return 0 if all(o.ok for o in outcomes) else 1

    logger.debug("Starting interactive shell...")
    run_repl(context)
    return 0


if __name__ == "__main__":
    sys.exit(main())
