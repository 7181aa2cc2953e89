"""
ASCII rendering for generated mazes.

One text line per grid row, one glyph per cell. Walls are drawn solid,
passages blank, string annotations as their first character, and anything
else half-solid.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_types import CellState, Grid

logger = logging.getLogger(__name__)

WALL_GLYPH = "█"
PASSAGE_GLYPH = " "
OTHER_GLYPH = "░"


def glyph(cell: Any) -> str:
    """Return the single character drawn for a cell value."""
    if isinstance(cell, str):
        return cell[0] if cell else OTHER_GLYPH
    if cell == CellState.WALL:
        return WALL_GLYPH
    if cell == CellState.PASSAGE:
        return PASSAGE_GLYPH
    return OTHER_GLYPH


def _color_for(cell: Any) -> Callable[[str], str]:
    if isinstance(cell, str):
        return chalk.yellowBright
    if cell == CellState.WALL:
        return chalk.blue
    if cell == CellState.PASSAGE:
        return lambda s: s
    return chalk.magenta


def render(grid: Grid, colored: bool = False) -> str:
    """
    Render a grid to text.

    Works on raw mazes as well as thickened or annotated maps.

    Args:
        grid: Grid indexed grid[x, y]
        colored: Wrap glyphs in ANSI colors (layout is unchanged)

    Returns:
        Rows joined with newlines, top row first
    """
    lines: list[str] = []
    for y in range(grid.height):
        parts: list[str] = []
        for x in range(grid.width):
            cell = grid.columns[x][y]
            char = glyph(cell)
            parts.append(_color_for(cell)(char) if colored else char)
        lines.append("".join(parts))

    logger.debug("render: %d lines of %d glyphs (colored=%s)", grid.height, grid.width, colored)
    return "\n".join(lines)
