"""
Shared count of connected players.
"""
import threading


class PlayerCounter:
    """
    Thread-safe count of live sessions.

    Uses its own lock, never the grid's, so greeting a player does not
    wait on board operations.
    """

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    def join(self) -> int:
        """Register a player and return the new count."""
        with self._lock:
            self._count += 1
            return self._count

    def leave(self) -> int:
        """Unregister a player and return the new count."""
        with self._lock:
            self._count = max(0, self._count - 1)
            return self._count

    @property
    def count(self) -> int:
        """Current number of players."""
        with self._lock:
            return self._count
