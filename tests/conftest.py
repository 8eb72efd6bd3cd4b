"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import Cell, Grid
from server import PlayerCounter, Session


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def empty_grid() -> Grid:
    """Create a 5x5 grid with no mines for flood fill testing."""
    return Grid([[False] * 5 for _ in range(5)])


@pytest.fixture
def center_mine_grid() -> Grid:
    """Create a 3x3 grid with a single mine in the middle."""
    return Grid.from_description("3 3\n0 0 0\n0 1 0\n0 0 0\n")


@pytest.fixture
def wall_grid() -> Grid:
    """
    Create a 5x4 grid split by a column of mines.

    Mines sit in column 2, so the zero region on the left stops at
    column 1 and never reaches the right side.
    """
    return Grid.from_description(
        "5 4\n"
        "0 0 1 0 0\n"
        "0 0 1 0 0\n"
        "0 0 1 0 0\n"
        "0 0 1 0 0\n"
    )


@pytest.fixture
def large_empty_grid() -> Grid:
    """Create a 60x60 grid with no mines."""
    return Grid([[False] * 60 for _ in range(60)])


@pytest.fixture
def board_file(tmp_path: Path) -> Path:
    """Write a 2x2 mine-free board description to disk."""
    path = tmp_path / "board.txt"
    path.write_text("2 2\n0 0\n0 0\n", encoding="utf-8")
    return path


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(has_mine=True)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def players() -> PlayerCounter:
    """Create a fresh player counter."""
    return PlayerCounter()


@pytest.fixture
def two_by_two_session(players: PlayerCounter) -> Session:
    """Session over a 2x2 mine-free grid."""
    return Session(Grid.from_description("2 2\n0 0\n0 0\n"), players)
