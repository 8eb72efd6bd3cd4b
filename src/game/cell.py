"""
Cell module for the shared Minesweeper grid.

Represents individual cells on the grid with their status
(hidden/revealed/flagged) and content (mine/neighbor count).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellStatus(Enum):
    """Possible visible states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_SYMBOL = "-"
FLAGGED_SYMBOL = "F"
EMPTY_SYMBOL = " "


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        has_mine: Whether this cell currently contains a mine.
        neighbor_mine_count: Count of mines in neighboring cells (0-8).
        status: Current visible status (hidden, revealed, or flagged).
    """

    has_mine: bool = False
    neighbor_mine_count: int = 0
    status: CellStatus = CellStatus.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell went from hidden to revealed, False if it
            was already revealed or flagged.
        """
        if self.status != CellStatus.HIDDEN:
            return False
        self.status = CellStatus.REVEALED
        return True

    def flag(self) -> bool:
        """Flag a hidden cell. Returns True if the status changed."""
        if self.status != CellStatus.HIDDEN:
            return False
        self.status = CellStatus.FLAGGED
        return True

    def unflag(self) -> bool:
        """Remove the flag from a flagged cell. Returns True if the status changed."""
        if self.status != CellStatus.FLAGGED:
            return False
        self.status = CellStatus.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.status == CellStatus.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.status == CellStatus.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.status == CellStatus.FLAGGED

    def symbol(self) -> str:
        """
        Token used for this cell in the textual board.

        Returns:
            '-' for hidden, 'F' for flagged, a space for a revealed cell
            with no neighboring mines, otherwise the neighbor count digit.
        """
        if self.status == CellStatus.HIDDEN:
            return HIDDEN_SYMBOL
        if self.status == CellStatus.FLAGGED:
            return FLAGGED_SYMBOL
        if self.neighbor_mine_count == 0:
            return EMPTY_SYMBOL
        return str(self.neighbor_mine_count)

    def to_observation(self) -> int:
        """
        Convert cell to a numeric observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with neighbor mine count
        """
        if self.status == CellStatus.HIDDEN:
            return -1
        if self.status == CellStatus.FLAGGED:
            return -2
        return self.neighbor_mine_count
