"""
Command-line entry point for the Minesweeper server.

Usage:
    python main.py [--debug | --no-debug] [--port PORT]
                   [--size WIDTH,HEIGHT | --file FILE]
"""
import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

from game import Grid

from .config import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_SIZE, MAX_PORT, ServerConfig
from .listener import MinesweeperServer


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def parse_size(text: str) -> Tuple[int, int]:
    """Parse a 'WIDTH,HEIGHT' option value."""
    parts = text.split(",")
    try:
        width, height = (int(part) for part in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"size must be WIDTH,HEIGHT, got {text!r}"
        ) from None
    if width < 1 or height < 1:
        raise argparse.ArgumentTypeError("size must be positive")
    return width, height


def parse_port(text: str) -> int:
    """Parse a port number in the range 0-65535."""
    try:
        port = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port {text!r}") from None
    if not 0 <= port <= MAX_PORT:
        raise argparse.ArgumentTypeError(f"port must be between 0 and {MAX_PORT}")
    return port


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Multiplayer Minesweeper server"
    )
    parser.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Keep connections open after a mine is triggered",
    )
    parser.add_argument(
        "--host", default=DEFAULT_HOST, help="Interface to listen on"
    )
    parser.add_argument(
        "--port", type=parse_port, default=DEFAULT_PORT, help="Port to listen on"
    )

    board = parser.add_mutually_exclusive_group()
    board.add_argument(
        "--size",
        type=parse_size,
        default=(DEFAULT_SIZE, DEFAULT_SIZE),
        metavar="WIDTH,HEIGHT",
        help="Generate a random board of this size",
    )
    board.add_argument(
        "--file", type=Path, default=None, help="Load the board from a file"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Build a ServerConfig from parsed arguments."""
    width, height = args.size
    return ServerConfig(
        host=args.host,
        port=args.port,
        debug=args.debug,
        width=width,
        height=height,
        board_file=args.file,
    )


def load_grid(config: ServerConfig) -> Grid:
    """Load the configured board file, or generate a random grid."""
    if config.board_file is not None:
        return Grid.from_file(config.board_file)
    return Grid.random(config.width, config.height)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments and serve until interrupted."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=LOG_FORMAT,
    )

    config = config_from_args(args)
    try:
        grid = load_grid(config)
    except (OSError, ValueError) as exc:
        parser.error(f"cannot load board: {exc}")

    server = MinesweeperServer(grid, config)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down server")
        server.shutdown()
    return 0
