"""
Minesweeper game module.

Provides the shared grid model: cell state, neighbor counting,
flood-fill revealing and the textual board render.
"""
from .cell import Cell, CellStatus
from .grid import Grid, GridFormatError, MINE_PROBABILITY

__all__ = [
    "Cell",
    "CellStatus",
    "Grid",
    "GridFormatError",
    "MINE_PROBABILITY",
]
