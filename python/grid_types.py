"""
Shared type definitions for the maze generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class CellState(IntEnum):
    """State code stored in each grid position."""

    PASSAGE = 0  # Open corridor
    RESERVED = 127  # Carving-resistant, only exists during generation
    WALL = 255  # Solid


class Direction(Enum):
    """Cardinal direction, valued by its (dx, dy) step."""

    N = (0, -1)  # Up (decreasing y)
    S = (0, 1)  # Down (increasing y)
    E = (1, 0)  # Right (increasing x)
    W = (-1, 0)  # Left (decreasing x)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


Position = tuple[int, int]


class MazeConfigError(ValueError):
    """Parameters leave no position from which carving can start."""


# =============================================================================
# Grid
# =============================================================================


@dataclass
class Grid:
    """A mutable 2D grid of cell values, stored column-major as columns[x][y]."""

    columns: list[list[Any]] = field(default_factory=list)

    @classmethod
    def filled(cls, width: int, height: int, value: Any = CellState.WALL) -> Grid:
        return cls([[value] * height for _ in range(width)])

    @property
    def width(self) -> int:
        return len(self.columns)

    @property
    def height(self) -> int:
        return len(self.columns[0]) if self.columns else 0

    def __getitem__(self, pos: Position) -> Any:
        x, y = pos
        return self.columns[x][y]

    def __setitem__(self, pos: Position, value: Any) -> None:
        x, y = pos
        self.columns[x][y] = value

    def positions(self) -> list[Position]:
        """All positions, row by row."""
        return [(x, y) for y in range(self.height) for x in range(self.width)]

    def count(self, value: Any) -> int:
        return sum(column.count(value) for column in self.columns)

    def copy(self) -> Grid:
        return Grid([list(column) for column in self.columns])
