"""
Parsing text-drawn mazes back into grids.

Accepts the output of ``ascii_render.render`` for plain mazes, plus an ASCII
alternative that is easier to type in tests and layout files.
"""

from __future__ import annotations

from grid_types import CellState, Grid

__all__ = ["parse_maze"]

WALL_CHARS = {"█", "#"}
PASSAGE_CHARS = {" ", "."}


def parse_maze(text: str) -> Grid:
    """
    Parse a maze drawn as text.

    Format:
    - One line per row, top row first
    - '█' or '#': WALL
    - ' ' or '.': PASSAGE
    - Empty lines before the first row and after the last are ignored
    - The first row's leading spaces are an indentation margin removed from
      every row; lines of spaces inside the drawing are open rows, so a row
      that starts with a passage must be drawn with '.' when indented

    Example:
        \"\"\"
        #####
        #...#
        ###.#
        #...#
        #####
        \"\"\"

        Creates a 5x5 grid with an S-shaped corridor.

    Args:
        text: The drawn maze

    Returns:
        Grid indexed grid[x, y]

    Raises:
        ValueError: On unknown characters or rows of different lengths
    """
    row_strings = [row.rstrip("\r") for row in text.split("\n")]

    # Rows made of spaces are open passages, so only truly empty lines are trimmed
    while row_strings and not row_strings[0]:
        row_strings.pop(0)

    # Indentation is taken from the first row and sliced off every row
    if row_strings:
        first = row_strings[0]
        margin = first[: len(first) - len(first.lstrip(" "))]
        if margin:
            row_strings = [
                row[len(margin):] if row.startswith(margin) else row for row in row_strings
            ]

    while row_strings and not row_strings[-1]:
        row_strings.pop()

    if not row_strings:
        raise ValueError("Empty maze definition")

    rows: list[list[CellState]] = []
    for row_idx, row_str in enumerate(row_strings):
        cells: list[CellState] = []
        for col_idx, char in enumerate(row_str):
            if char in WALL_CHARS:
                cells.append(CellState.WALL)
            elif char in PASSAGE_CHARS:
                cells.append(CellState.PASSAGE)
            else:
                error_msg = (
                    f"Invalid character: '{char}'\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters:\n"
                    f"    - '█' or '#': wall\n"
                    f"    - ' ' or '.': passage"
                )
                raise ValueError(error_msg)
        rows.append(cells)

    # Validate all rows have same length
    width = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != width]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {width} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual in mismatched:
            error_msg += f"    Row {row_idx}: {actual} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    # Rows are read top to bottom; the grid is stored column-major
    return Grid([[rows[y][x] for y in range(len(rows))] for x in range(width)])
