"""
Grid module for the shared Minesweeper game.

Implements the mine grid with neighbor counting, flood-fill revealing,
flagging and a cached textual render. A single Grid is shared by every
connected player, so each public operation runs under one lock.
"""
import dataclasses
import logging
import re
import threading
from pathlib import Path
from random import Random
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .cell import Cell


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MINE_PROBABILITY = 0.25

NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)

_INTEGER = re.compile(r"[0-9]+")
_BITS = {"0": False, "1": True}
_NEWLINE = re.compile(r"\r\n|\r|\n")


class GridFormatError(ValueError):
    """Raised when a textual grid description does not match the grammar."""


# ============================================================================
# Description Parsing
# ============================================================================

def _parse_header(line: str) -> Tuple[int, int]:
    """Parse the 'WIDTH HEIGHT' line of a grid description."""
    tokens = line.split(" ")
    if len(tokens) != 2 or not all(_INTEGER.fullmatch(t) for t in tokens):
        raise GridFormatError(f"Invalid size line: {line!r}")
    width, height = int(tokens[0]), int(tokens[1])
    if width < 1 or height < 1:
        raise GridFormatError("Grid dimensions must be positive")
    return width, height


def _parse_row(line: str, width: int, index: int) -> List[bool]:
    """Parse one row of space-separated 0/1 tokens."""
    tokens = line.split(" ")
    if len(tokens) != width:
        raise GridFormatError(
            f"Row {index} has {len(tokens)} values, expected {width}"
        )
    try:
        return [_BITS[token] for token in tokens]
    except KeyError as exc:
        raise GridFormatError(
            f"Row {index} contains invalid value {exc.args[0]!r}"
        ) from None


# ============================================================================
# Grid Class
# ============================================================================

class Grid:
    """
    Shared Minesweeper grid.

    Cells are addressed as (row, col), zero-based. Coordinates outside
    the grid are silently ignored by every operation.

    Invariants:
        - rows > 0 and columns > 0, and every position holds a Cell.
        - Each cell's neighbor_mine_count equals the number of mined
          cells among its in-bounds neighbors.
        - The cached render is never None and matches the cells
          whenever it is not marked dirty.
    """

    def __init__(self, mines: Sequence[Sequence[bool]]) -> None:
        """
        Build a grid from a row-major mine layout.

        Args:
            mines: One sequence per row, True where a mine is placed.

        Raises:
            ValueError: If the layout is empty or ragged.
        """
        if not mines or not mines[0]:
            raise ValueError("Grid dimensions must be positive")
        if any(len(row) != len(mines[0]) for row in mines):
            raise ValueError("All grid rows must have the same length")

        self._rows = len(mines)
        self._columns = len(mines[0])
        self._cells: List[List[Cell]] = [
            [Cell(has_mine=bool(has_mine)) for has_mine in row]
            for row in mines
        ]
        self._lock = threading.Lock()

        self._recount_neighbors()
        self._snapshot = self._build_snapshot()
        self._dirty = False
        assert self._check_rep(), "grid invariant violated"

    # ========================================================================
    # Construction Variants
    # ========================================================================

    @classmethod
    def random(
        cls,
        width: int,
        height: int,
        mine_probability: float = MINE_PROBABILITY,
        rng: Optional[Random] = None,
    ) -> "Grid":
        """
        Create a grid where each cell independently holds a mine.

        Args:
            width: Number of columns.
            height: Number of rows.
            mine_probability: Chance of each cell containing a mine.
            rng: Random source, for reproducible layouts.
        """
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be positive")
        rng = rng or Random()
        mines = [
            [rng.random() < mine_probability for _ in range(width)]
            for _ in range(height)
        ]
        return cls(mines)

    @classmethod
    def from_description(cls, text: str) -> "Grid":
        """
        Create a grid from its textual description.

        The first line is 'WIDTH HEIGHT', followed by exactly HEIGHT rows
        of WIDTH space-separated '0'/'1' values, '1' marking a mine.
        Lines end in LF, CRLF or a lone CR.

        Raises:
            GridFormatError: If the text does not match that format.
        """
        lines = _NEWLINE.split(text)
        if lines[-1] == "":
            lines.pop()
        if not lines:
            raise GridFormatError("Grid description is empty")

        width, height = _parse_header(lines[0])
        rows = lines[1:]
        if len(rows) != height:
            raise GridFormatError(f"Expected {height} rows, found {len(rows)}")

        mines = [_parse_row(line, width, index) for index, line in enumerate(rows)]
        return cls(mines)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Grid":
        """Load a grid description from a file."""
        grid = cls.from_description(Path(path).read_text(encoding="utf-8"))
        logger.debug(
            "Loaded %dx%d grid from %s", grid.columns(), grid.rows(), path
        )
        return grid

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= row < self._rows and 0 <= col < self._columns

    def _get_neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Get in-bounds neighbor positions of a cell."""
        neighbors = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self._is_valid_position(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    def _mine_counts(self) -> np.ndarray:
        """Count neighboring mines for every cell from the current layout."""
        mines = np.array(
            [[cell.has_mine for cell in row] for row in self._cells],
            dtype=np.int8,
        )
        padded = np.pad(mines, 1)
        counts = np.zeros((self._rows, self._columns), dtype=np.int8)
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            counts += padded[
                1 + delta_row:1 + delta_row + self._rows,
                1 + delta_col:1 + delta_col + self._columns,
            ]
        return counts

    def _recount_neighbors(self) -> None:
        """Recompute neighbor_mine_count for the whole grid."""
        counts = self._mine_counts()
        for row in range(self._rows):
            for col in range(self._columns):
                self._cells[row][col].neighbor_mine_count = int(counts[row, col])

    # ========================================================================
    # Rendering and Invariants (Low-level)
    # ========================================================================

    def _build_snapshot(self) -> str:
        return "\n".join(
            " ".join(cell.symbol() for cell in row) for row in self._cells
        )

    def _check_rep(self) -> bool:
        """Return True if every representation invariant holds."""
        if self._rows <= 0 or self._columns <= 0:
            return False
        if len(self._cells) != self._rows:
            return False
        for row in self._cells:
            if len(row) != self._columns or any(cell is None for cell in row):
                return False
        stored = np.array(
            [[cell.neighbor_mine_count for cell in row] for row in self._cells]
        )
        if not np.array_equal(stored, self._mine_counts()):
            return False
        if self._snapshot is None:
            return False
        return self._dirty or self._snapshot == self._build_snapshot()

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell, flood-filling across cells with no neighboring mines.

        A mined cell loses its mine when revealed: counts are recomputed
        for the whole grid and the cell is then revealed like a safe one.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            False if a mine was triggered, True otherwise (including
            no-ops on out-of-range or non-hidden cells).
        """
        with self._lock:
            if not self._is_valid_position(row, col):
                return True
            cell = self._cells[row][col]
            if not cell.is_hidden:
                return True

            safe = True
            if cell.has_mine:
                cell.has_mine = False
                self._recount_neighbors()
                safe = False

            self._flood_reveal(row, col)
            self._dirty = True
            assert self._check_rep(), "grid invariant violated"
            return safe

    def _flood_reveal(self, row: int, col: int) -> None:
        """Reveal a cell and every hidden cell reachable through zero counts."""
        pending = [(row, col)]
        while pending:
            current_row, current_col = pending.pop()
            cell = self._cells[current_row][current_col]
            if not cell.reveal():
                continue
            if cell.neighbor_mine_count == 0:
                pending.extend(self._get_neighbors(current_row, current_col))

    def flag(self, row: int, col: int) -> None:
        """Flag a hidden cell. Anything else is a no-op."""
        with self._lock:
            if not self._is_valid_position(row, col):
                return
            if self._cells[row][col].flag():
                self._dirty = True
            assert self._check_rep(), "grid invariant violated"

    def unflag(self, row: int, col: int) -> None:
        """Return a flagged cell to hidden. Anything else is a no-op."""
        with self._lock:
            if not self._is_valid_position(row, col):
                return
            if self._cells[row][col].unflag():
                self._dirty = True
            assert self._check_rep(), "grid invariant violated"

    # ========================================================================
    # State Accessors
    # ========================================================================

    def render(self) -> str:
        """
        Get the textual board.

        One line per row, cells separated by single spaces, no trailing
        newline. The text is rebuilt only after a mutation.
        """
        with self._lock:
            if self._dirty:
                self._snapshot = self._build_snapshot()
                self._dirty = False
            return self._snapshot

    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    def columns(self) -> int:
        """Number of columns."""
        return self._columns

    def cell(self, row: int, col: int) -> Optional[Cell]:
        """
        Get a copy of the cell at position, or None if invalid.

        Changing the copy does not affect the grid; use reveal, flag
        and unflag for that.
        """
        if not self._is_valid_position(row, col):
            return None
        with self._lock:
            return dataclasses.replace(self._cells[row][col])

    def observation(self) -> np.ndarray:
        """
        Get the visible grid state as a numpy array.

        Returns:
            int8 array of shape (rows, columns) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with neighbor count
        """
        with self._lock:
            obs = np.zeros((self._rows, self._columns), dtype=np.int8)
            for row in range(self._rows):
                for col in range(self._columns):
                    obs[row, col] = self._cells[row][col].to_observation()
            return obs
