"""
Server configuration.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4444
DEFAULT_SIZE = 10
MAX_PORT = 65535


@dataclass
class ServerConfig:
    """
    Configuration for a Minesweeper server.

    Attributes:
        host: Interface to listen on.
        port: TCP port, 0 picks a free one.
        debug: Keep sessions open after a mine is triggered.
        width: Columns of a randomly generated grid.
        height: Rows of a randomly generated grid.
        board_file: Grid description to load instead of a random grid.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    debug: bool = False
    width: int = DEFAULT_SIZE
    height: int = DEFAULT_SIZE
    board_file: Optional[Path] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if not 0 <= self.port <= MAX_PORT:
            raise ValueError(f"Port must be between 0 and {MAX_PORT}")
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
