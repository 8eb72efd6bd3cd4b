"""
Line protocol spoken between players and the server.

Each request is one newline-terminated line:
    look | help | bye | dig X Y | flag X Y | deflag X Y

X and Y are integers of at most nine digits, optionally negative.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ============================================================================
# Fixed Messages
# ============================================================================

BYE_MESSAGE = "Bye!"
BOOM_MESSAGE = "BOOM!"
INVALID_INPUT_MESSAGE = "Invalid input!"
HELP_MESSAGE = (
    "Commands: look | dig X Y | flag X Y | deflag X Y | help | bye"
    " (X is the column, Y is the row, both from 0)"
)
WELCOME_TEMPLATE = (
    "Welcome to Minesweeper. Players: {players} including you. "
    "Board: {columns} columns by {rows} rows. Type 'help' for help."
)


def welcome_message(players: int, columns: int, rows: int) -> str:
    """Greeting sent as the first line of every connection."""
    return WELCOME_TEMPLATE.format(players=players, columns=columns, rows=rows)


# ============================================================================
# Commands
# ============================================================================

class CommandKind(Enum):
    """Requests a player can send."""

    LOOK = "look"
    HELP = "help"
    BYE = "bye"
    DIG = "dig"
    FLAG = "flag"
    DEFLAG = "deflag"


@dataclass(frozen=True)
class Command:
    """A parsed request. x is the column and y the row, as typed."""

    kind: CommandKind
    x: int = 0
    y: int = 0


_REQUEST = re.compile(
    r"(?P<bare>look|help|bye)"
    r"|(?P<action>dig|flag|deflag) (?P<x>-?[0-9]{1,9}) (?P<y>-?[0-9]{1,9})"
)


def parse_command(line: str) -> Optional[Command]:
    """
    Parse one request line.

    Args:
        line: Raw line, with or without its line terminator.

    Returns:
        The parsed Command, or None if the line is not a valid request.
    """
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]

    match = _REQUEST.fullmatch(line)
    if match is None:
        return None
    if match.group("bare"):
        return Command(CommandKind(match.group("bare")))
    return Command(
        CommandKind(match.group("action")),
        int(match.group("x")),
        int(match.group("y")),
    )
