"""Parser for interpreter command lines.

Splits a line like: mkdir "my dir"; cd "my dir"; touch notes.txt
into commands, and each command into an argument vector.
"""

from __future__ import annotations

import logging
from typing import List, Optional

logger = logging.getLogger(__name__)

QUOTE = '"'
SEPARATOR = ' '
COMMAND_DELIMITER = ';'


class ArgumentVector(tuple):
    """Immutable sequence of tokens for one command.

    The first token is the command name, the rest are its operands.
    """

    @property
    def name(self) -> str:
        """Command name, or an empty string when there are no tokens."""
        return self[0] if self else ""

    def operand(self, index: int) -> Optional[str]:
        """Get the token at ``index``, or None past the end of the vector.

        Args:
            index: Position in the vector (1 is the first operand)

        Returns:
            Token text or None
        """
        if 0 <= index < len(self):
            return self[index]
        return None

    def __repr__(self) -> str:
        """String representation."""
        return f"ArgumentVector({list(self)!r})"


class CommandLineParser:
    """Parser for semicolon-separated command lines.

    Quotes only affect how a single command is tokenized; the
    command delimiter is found by a plain scan.
    """

    def parse(self, command_line: str) -> List[ArgumentVector]:
        """Parse a command line into one argument vector per command.

        Args:
            command_line: Line to parse (e.g., "mkdir a; cd a")

        Returns:
            List of argument vectors, in input order
        """
        return [self.tokenize(cmd) for cmd in self.split_commands(command_line)]

    def split_commands(self, command_line: str) -> List[str]:
        """Split a command line on every semicolon.

        Empty pieces are kept; they tokenize to an empty vector.

        Args:
            command_line: Line to split

        Returns:
            List of command strings
        """
        return command_line.split(COMMAND_DELIMITER)

    def tokenize(self, command: str) -> ArgumentVector:
        """Split one command into tokens, respecting double quotes.

        A double quote toggles quoted mode and stays part of the token.
        Outside quoted mode spaces separate tokens and runs of spaces
        collapse. An unmatched quote keeps quoted mode on until the end
        of the command.

        Args:
            command: Command string (e.g., 'mkdir "my dir"')

        Returns:
            Argument vector (empty if the command is blank)
        """
        tokens = []
        current = []
        in_quotes = False

        for char in command:
            if char == QUOTE:
                in_quotes = not in_quotes

            if char == SEPARATOR and not in_quotes:
                if current:
                    tokens.append(''.join(current))
                    current = []
            else:
                current.append(char)

        if current:
            tokens.append(''.join(current))

        if in_quotes:
            logger.debug(f"Unterminated quote in command: {command!r}")

        return ArgumentVector(tokens)


def tokenize(command: str) -> ArgumentVector:
    """Tokenize a single command.

    Convenience function that creates a parser and tokenizes the command.

    Args:
        command: Command string

    Returns:
        Argument vector
    """
    return CommandLineParser().tokenize(command)


def split_commands(command_line: str) -> List[str]:
    """Split a command line into command strings."""
    return CommandLineParser().split_commands(command_line)


def parse_line(command_line: str) -> List[ArgumentVector]:
    """Parse a full command line into argument vectors."""
    return CommandLineParser().parse(command_line)
