"""
Minesweeper server module.

Provides the line protocol, per-player sessions and the
thread-per-connection TCP listener around one shared Grid.
"""
from .config import ServerConfig, DEFAULT_PORT
from .players import PlayerCounter
from .protocol import Command, CommandKind, parse_command
from .session import Reply, Session
from .listener import MinesweeperServer

__all__ = [
    "ServerConfig",
    "DEFAULT_PORT",
    "PlayerCounter",
    "Command",
    "CommandKind",
    "parse_command",
    "Reply",
    "Session",
    "MinesweeperServer",
]
