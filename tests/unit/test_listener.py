"""
End-to-end tests for MinesweeperServer over localhost sockets.
"""
import socket
import threading
from typing import Iterator, List

import pytest
from game import Grid
from server import MinesweeperServer, PlayerCounter, ServerConfig
from server.protocol import BOOM_MESSAGE, BYE_MESSAGE


TIMEOUT = 5.0


class Client:
    """Minimal line-based test client."""

    def __init__(self, port: int) -> None:
        self.sock = socket.create_connection(("127.0.0.1", port), timeout=TIMEOUT)
        self.reader = self.sock.makefile("r", encoding="utf-8", newline="")

    def send(self, line: str) -> None:
        self.sock.sendall((line + "\n").encode("utf-8"))

    def read_lines(self, count: int) -> List[str]:
        return [self.reader.readline().rstrip("\n") for _ in range(count)]

    def at_eof(self) -> bool:
        return self.reader.readline() == ""

    def close(self) -> None:
        self.reader.close()
        self.sock.close()


def start_server(grid: Grid, debug: bool = False) -> MinesweeperServer:
    server = MinesweeperServer(
        grid, ServerConfig(host="127.0.0.1", port=0, debug=debug), PlayerCounter()
    )
    server.bind()
    threading.Thread(target=server.serve_forever, daemon=True).start()
    return server


@pytest.fixture
def open_server() -> Iterator[MinesweeperServer]:
    """Server over a 2x2 mine-free grid."""
    server = start_server(Grid.from_description("2 2\n0 0\n0 0\n"))
    yield server
    server.shutdown()


class TestServer:
    """Test the server end to end."""

    def test_port_before_bind_raises(self) -> None:
        """The port is unknown until the socket is bound."""
        server = MinesweeperServer(Grid.random(2, 2))
        with pytest.raises(RuntimeError):
            server.port

    def test_welcome_and_flag(self, open_server: MinesweeperServer) -> None:
        """A client is welcomed and sees its flag."""
        client = Client(open_server.port)
        try:
            welcome = client.read_lines(1)[0]
            assert welcome.startswith("Welcome to Minesweeper. Players: 1")
            assert "Board: 2 columns by 2 rows" in welcome
            client.send("flag 0 0")
            assert client.read_lines(2) == ["F -", "- -"]
            client.send("look")
            assert client.read_lines(2) == ["F -", "- -"]
            client.send("bye")
            assert client.read_lines(1) == [BYE_MESSAGE]
            assert client.at_eof()
        finally:
            client.close()

    def test_players_share_grid_and_count(
        self, open_server: MinesweeperServer
    ) -> None:
        """A second client is counted and sees the first one's moves."""
        first = Client(open_server.port)
        second = None
        try:
            first.read_lines(1)
            first.send("flag 1 0")
            assert first.read_lines(2) == ["- F", "- -"]

            second = Client(open_server.port)
            assert "Players: 2 including you" in second.read_lines(1)[0]
            second.send("look")
            assert second.read_lines(2) == ["- F", "- -"]
        finally:
            first.close()
            if second is not None:
                second.close()

    def test_boom_closes_connection(self) -> None:
        """Digging a mine ends the connection."""
        server = start_server(Grid.from_description("1 1\n1\n"))
        client = Client(server.port)
        try:
            client.read_lines(1)
            client.send("dig 0 0")
            assert client.read_lines(1) == [BOOM_MESSAGE]
            assert client.at_eof()
        finally:
            client.close()
            server.shutdown()

    def test_boom_in_debug_mode_keeps_connection(self) -> None:
        """Debug mode keeps the connection after a mine."""
        server = start_server(Grid.from_description("1 1\n1\n"), debug=True)
        client = Client(server.port)
        try:
            client.read_lines(1)
            client.send("dig 0 0")
            assert client.read_lines(1) == [BOOM_MESSAGE]
            client.send("look")
            assert client.read_lines(1) == [" "]
        finally:
            client.close()
            server.shutdown()

    def test_undecodable_bytes_are_invalid_input(
        self, open_server: MinesweeperServer
    ) -> None:
        """Bytes that are not UTF-8 are answered as invalid input."""
        client = Client(open_server.port)
        try:
            client.read_lines(1)
            client.sock.sendall(b"\xff\xfe\n")
            assert client.read_lines(1) == ["Invalid input!"]
        finally:
            client.close()

    def test_server_class_is_documented(self) -> None:
        """The server class describes itself."""
        assert "Session" in MinesweeperServer.__doc__
