"""Scaling a generated maze into a map with variable-width halls and walls."""

from __future__ import annotations

from grid_types import Grid


def thicken(grid: Grid, hall_width: int = 1, wall_width: int = 1) -> Grid:
    """
    Thicken a maze for variable width halls and walls.

    Assumes the layout produced by ``maze.generate``: walls on even rows and
    columns, halls on odd ones. Each odd column/row is repeated ``hall_width``
    times and each even one ``wall_width`` times. The result no longer has
    that even/odd layout.

    Args:
        grid: Source maze (not modified)
        hall_width: Repetitions of odd rows/columns, at least 1
        wall_width: Repetitions of even rows/columns, at least 1

    Returns:
        A new, larger Grid with the same cell values
    """
    hall_width = max(1, hall_width or 1)
    wall_width = max(1, wall_width or 1)

    columns: list[list] = []
    for x, src in enumerate(grid.columns):
        dst: list = []
        for y, c in enumerate(src):
            dst.extend([c] * (hall_width if y & 1 else wall_width))
        for _ in range(hall_width if x & 1 else wall_width):
            columns.append(list(dst))

    return Grid(columns)
