"""
Multithreaded TCP server for multiplayer Minesweeper.

Accepts connections and runs one Session per connection in its own
thread, all sharing a single Grid and PlayerCounter.
"""
import logging
import socket
import threading
from typing import Optional

from game import Grid

from .config import ServerConfig
from .players import PlayerCounter
from .session import Session


logger = logging.getLogger(__name__)

ACCEPT_TIMEOUT = 0.5


class MinesweeperServer:
    """
    TCP server that gives every connection its own Session thread.

    All sessions share the same Grid and PlayerCounter.
    """

    def __init__(
        self,
        grid: Grid,
        config: Optional[ServerConfig] = None,
        players: Optional[PlayerCounter] = None,
    ) -> None:
        """Set up the server; nothing is bound until bind() or serve_forever()."""
        self.grid = grid
        self.config = config or ServerConfig()
        self.players = players or PlayerCounter()
        self._server_socket: Optional[socket.socket] = None
        self._stopped = threading.Event()

    @property
    def port(self) -> int:
        """Port actually bound, useful when configured with port 0."""
        if self._server_socket is None:
            raise RuntimeError("Server is not bound")
        return self._server_socket.getsockname()[1]

    def bind(self) -> None:
        """Open the listening socket."""
        server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.config.host, self.config.port))
            server_socket.listen()
            server_socket.settimeout(ACCEPT_TIMEOUT)
        except OSError:
            server_socket.close()
            raise
        self._server_socket = server_socket
        logger.info(
            "Server listening on %s:%d", self.config.host, self.port
        )

    def serve_forever(self) -> None:
        """Accept connections until shutdown() is called."""
        if self._server_socket is None:
            self.bind()
        server_socket = self._server_socket

        try:
            while not self._stopped.is_set():
                try:
                    conn, addr = server_socket.accept()
                except socket.timeout:
                    continue
                logger.info("New connection from %s:%d", *addr[:2])
                # One thread per client
                threading.Thread(
                    target=self._handle_client, args=(conn, addr), daemon=True
                ).start()
        finally:
            server_socket.close()
            logger.info("Server stopped")

    def shutdown(self) -> None:
        """Stop the accept loop; sessions already running finish on their own."""
        self._stopped.set()

    def _handle_client(self, conn: socket.socket, addr) -> None:
        session = Session(self.grid, self.players, debug=self.config.debug)
        try:
            with conn:
                reader = conn.makefile(
                    "r", encoding="utf-8", errors="replace", newline=""
                )
                writer = conn.makefile("w", encoding="utf-8", newline="")
                with reader, writer:
                    session.run(reader, writer)
        except OSError:
            logger.exception("Connection error with %s:%d", *addr[:2])
        else:
            logger.info("Client %s:%d disconnected", *addr[:2])
