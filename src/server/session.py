"""
Per-player request/response loop against the shared grid.
"""
import logging
from dataclasses import dataclass
from typing import TextIO

from game import Grid

from .players import PlayerCounter
from .protocol import (
    BOOM_MESSAGE,
    BYE_MESSAGE,
    HELP_MESSAGE,
    INVALID_INPUT_MESSAGE,
    CommandKind,
    parse_command,
    welcome_message,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reply:
    """Response line for one request, and whether the connection ends after it."""

    text: str
    closes: bool = False


class Session:
    """
    One connected player.

    Translates each request line into at most one grid operation. The
    protocol's 'X Y' order is column then row, so coordinates are
    swapped here and nowhere else.
    """

    def __init__(
        self, grid: Grid, players: PlayerCounter, debug: bool = False
    ) -> None:
        self.grid = grid
        self.players = players
        self.debug = debug

    def handle_request(self, line: str) -> Reply:
        """
        Perform the requested operation.

        Args:
            line: One request line from the player.

        Returns:
            The reply to send back.
        """
        command = parse_command(line)
        if command is None:
            return Reply(INVALID_INPUT_MESSAGE)

        kind = command.kind
        if kind == CommandKind.LOOK:
            return Reply(self.grid.render())
        if kind == CommandKind.HELP:
            return Reply(HELP_MESSAGE)
        if kind == CommandKind.BYE:
            return Reply(BYE_MESSAGE, closes=True)

        row, col = command.y, command.x
        if kind == CommandKind.DIG:
            if self.grid.reveal(row, col):
                return Reply(self.grid.render())
            logger.info("Mine triggered at column %d, row %d", col, row)
            return Reply(BOOM_MESSAGE, closes=not self.debug)
        if kind == CommandKind.FLAG:
            self.grid.flag(row, col)
        else:
            self.grid.unflag(row, col)
        return Reply(self.grid.render())

    def run(self, reader: TextIO, writer: TextIO) -> None:
        """
        Serve one player until they disconnect, say bye, or hit a mine.

        I/O errors propagate to the caller; the player is unregistered
        either way.

        Args:
            reader: Text stream of request lines.
            writer: Text stream for replies.
        """
        players = self.players.join()
        try:
            self._send(writer, welcome_message(
                players, self.grid.columns(), self.grid.rows()
            ))
            for line in iter(reader.readline, ""):
                logger.debug("Request: %r", line)
                reply = self.handle_request(line)
                self._send(writer, reply.text)
                if reply.closes:
                    break
        finally:
            self.players.leave()

    @staticmethod
    def _send(writer: TextIO, text: str) -> None:
        writer.write(text + "\n")
        writer.flush()
