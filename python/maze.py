"""
Procedural maze generation on a bounded or wrap-around grid.
Pipeline: normalize -> allocate -> reserve -> carve -> imperfect -> reconnect -> clear.

Cell positions (odd x, odd y) become passages; the positions between them are
walls unless carved. Every stage takes the grid by reference and mutates it in
place, and all randomness comes from the injected ``rng``.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from grid_types import CellState, Direction, Grid, MazeConfigError, Position

logger = logging.getLogger(__name__)

WALL = CellState.WALL
PASSAGE = CellState.PASSAGE
RESERVED = CellState.RESERVED

DEFAULT_SIZE = 32


# =============================================================================
# Parameters
# =============================================================================


@dataclass(frozen=True)
class MazeParams:
    """Normalized generation parameters."""

    width: int
    height: int
    wrap: bool = False
    imperfect: float = 0.0
    reservation: float = 0.0  # Probability that a cell position starts RESERVED

    def cell_positions(self) -> list[Position]:
        """Positions with both coordinates odd, row by row."""
        return [(x, y) for y in range(1, self.height, 2) for x in range(1, self.width, 2)]


def normalize_params(
    width: float | None = DEFAULT_SIZE,
    height: float | None = None,
    wrap: bool = False,
    imperfect: float | None = 0.0,
    fill: float | None = 1.0,
) -> MazeParams:
    """
    Default, clamp and round the requested parameters.

    Sizes are rounded up to even on a torus and up to odd on a rectangle, so
    that every cell position has a wall position on each side. Nothing here
    raises; out-of-range values are clamped.

    Args:
        width: Requested width (falsy -> 32, fractional -> floored)
        height: Requested height (falsy -> width)
        wrap: Whether opposite edges are adjacent
        imperfect: Fraction of extra connections, clamped to [0, 1]
        fill: Roughly how much of the space the maze fills; 1 fills it all,
              0 gives a thin and stringy result

    Returns:
        MazeParams with the adjusted dimensions and reservation probability
    """
    width = math.floor(width or DEFAULT_SIZE)
    height = math.floor(height or width)
    imperfect = min(1.0, max(0.0, imperfect or 0.0))
    # NaN behaves like a missing fill: nothing is reserved
    if fill is None or math.isnan(fill):
        fill = 1.0
    reservation = 1.0 - min(max(0.0, fill * 0.9 + 0.1), 1.0)

    # Smallest grid that still holds one cell position
    minimum = 2 if wrap else 3
    width = max(width, minimum)
    height = max(height, minimum)

    if wrap:
        width += width & 1
        height += height & 1
    else:
        width += 1 - (width & 1)
        height += 1 - (height & 1)

    return MazeParams(width, height, wrap, imperfect, reservation)


# =============================================================================
# Allocation and Reservation
# =============================================================================


def allocate_grid(params: MazeParams) -> Grid:
    """Build a width x height grid of solid wall."""
    return Grid.filled(params.width, params.height, WALL)


def reserve_regions(grid: Grid, params: MazeParams, rng: random.Random) -> int:
    """Mark each cell position RESERVED with probability ``params.reservation``.

    Returns:
        Number of positions reserved
    """
    if params.reservation <= 0:
        return 0

    reserved = 0
    for x in range(1, params.width, 2):
        column = grid.columns[x]
        for y in range(1, params.height, 2):
            if rng.random() < params.reservation:
                column[y] = RESERVED
                reserved += 1

    logger.debug("reserve_regions: reserved %d cell positions", reserved)
    return reserved


def clear_reservations(grid: Grid, params: MazeParams) -> int:
    """Turn every cell position still RESERVED back into WALL."""
    if params.reservation <= 0:
        return 0

    cleared = 0
    for x in range(1, params.width, 2):
        column = grid.columns[x]
        for y in range(1, params.height, 2):
            if column[y] == RESERVED:
                column[y] = WALL
                cleared += 1
    return cleared


# =============================================================================
# Carving
# =============================================================================


@dataclass(frozen=True)
class Frontier:
    """A cell position waiting on the carving stack."""

    position: Position
    direction: Direction | None = None  # Step taken to reach it; None for the start


def find_start(grid: Grid, params: MazeParams, rng: random.Random) -> Position:
    """
    Pick the cell position the carver starts from.

    Prefers the cell position nearest the centre. If that one is reserved, a
    uniformly random WALL cell position is chosen instead.

    Raises:
        MazeConfigError: If reservation left no WALL cell position at all
    """
    centre = ((params.width // 2) | 1, (params.height // 2) | 1)
    if grid[centre] == WALL:
        return centre

    candidates = [pos for pos in params.cell_positions() if grid[pos] == WALL]
    if not candidates:
        raise MazeConfigError(
            f"No unreserved cell position to start carving from\n"
            f"  Size: {params.width}x{params.height} (wrap={params.wrap})\n"
            f"  Reservation probability: {params.reservation:.2f}\n"
            f"  Increase fill or the maze size"
        )
    return rng.choice(candidates)


def carve(grid: Grid, params: MazeParams, rng: random.Random) -> int:
    """
    Carve a randomized depth-first spanning tree into the grid.

    Uses an explicit stack of Frontier entries instead of recursion. An entry
    whose cell was explored after it was pushed is simply dropped when popped,
    which makes the walk backtrack exactly like recursive DFS.

    RESERVED cells are carvable until a corridor of max(width, height) cells
    exists; after that they act as obstacles.

    Args:
        grid: Grid to carve, mutated in place
        params: Normalized parameters
        rng: Random source for the start cell and direction order

    Returns:
        Number of cell positions carved
    """
    width, height, wrap = params.width, params.height, params.wrap
    columns = grid.columns

    # Reservations only start to bite once a path this long has been carved
    ignore_reserved = max(width, height)

    def unexplored(x: int, y: int) -> bool:
        c = columns[x][y]
        return c == WALL or (c == RESERVED and ignore_reserved > 0)

    stack = [Frontier(find_start(grid, params, rng))]
    carved = 0

    while stack:
        entry = stack.pop()
        x, y = entry.position
        if not unexplored(x, y):
            continue

        columns[x][y] = PASSAGE
        ignore_reserved -= 1
        carved += 1

        # Open the wall back towards the cell we came from
        if entry.direction is not None:
            d = entry.direction
            columns[(x - d.dx) % width][(y - d.dy) % height] = PASSAGE

        directions = list(Direction)
        rng.shuffle(directions)

        for d in directions:
            nx = x + d.dx * 2
            ny = y + d.dy * 2
            if wrap:
                nx %= width
                ny %= height
            elif not (0 <= nx < width and 0 <= ny < height):
                continue

            if unexplored(nx, ny):
                stack.append(Frontier((nx, ny), d))

    logger.debug("carve: carved %d cell positions", carved)
    return carved


# =============================================================================
# Imperfection and Island Repair
# =============================================================================


def _touches_passage(grid: Grid, x: int, y: int) -> bool:
    width, height = grid.width, grid.height
    columns = grid.columns
    return PASSAGE in (
        columns[x][(y + 1) % height],
        columns[x][(y - 1) % height],
        columns[(x + 1) % width][y],
        columns[(x - 1) % width][y],
    )


def _open_wall(grid: Grid, x: int, y: int) -> bool:
    """Open (x, y) if it borders an existing passage. Returns True if it changed."""
    if grid[x, y] == PASSAGE or not _touches_passage(grid, x, y):
        return False
    grid[x, y] = PASSAGE
    return True


def inject_imperfections(grid: Grid, params: MazeParams, rng: random.Random) -> int:
    """
    Remove extra walls to create loops.

    Each of ceil(imperfect * width * height / 3) rounds tries one wall between
    vertically adjacent cells and one between horizontally adjacent cells. The
    outer ring is never opened on a bounded grid. A wall is only removed when
    it touches an existing passage, so no detached open cells appear.

    Returns:
        Number of walls opened
    """
    if params.imperfect <= 0:
        return 0

    width, height = params.width, params.height
    boundary = 0 if params.wrap else 1
    rounds = math.ceil(params.imperfect * width * height / 3)

    # Index ranges k for odd positions (2k + 1) and interior even positions (2k)
    odd_x, odd_y = range(width // 2), range(height // 2)
    even_x, even_y = range(boundary, width // 2), range(boundary, height // 2)

    opened = 0
    for _ in range(rounds):
        if odd_x and even_y:
            x = rng.choice(odd_x) * 2 + 1
            y = rng.choice(even_y) * 2
            opened += _open_wall(grid, x, y)
        if even_x and odd_y:
            x = rng.choice(even_x) * 2
            y = rng.choice(odd_y) * 2 + 1
            opened += _open_wall(grid, x, y)

    logger.debug("inject_imperfections: %d rounds opened %d walls", rounds, opened)
    return opened


def reconnect_islands(grid: Grid, rng: random.Random) -> int:
    """
    Break up fully open 2x2 blocks.

    A junction (both coordinates even) whose four neighbours are all open sits
    in the middle of a wall-less room. One of those neighbours, chosen at
    random, is restored to WALL. A single sweep; a repair can leave another
    island behind.

    Returns:
        Number of islands repaired
    """
    width, height = grid.width, grid.height
    columns = grid.columns
    directions = list(Direction)

    repaired = 0
    for y in range(0, height, 2):
        for x in range(0, width, 2):
            around = (
                columns[x][(y + 1) % height],
                columns[x][(y - 1) % height],
                columns[(x + 1) % width][y],
                columns[(x - 1) % width][y],
            )
            if all(c == PASSAGE for c in around):
                d = rng.choice(directions)
                columns[(x + d.dx) % width][(y + d.dy) % height] = WALL
                repaired += 1

    if repaired:
        logger.debug("reconnect_islands: repaired %d islands", repaired)
    return repaired


# =============================================================================
# Entry Point
# =============================================================================


def generate(
    width: float | None = DEFAULT_SIZE,
    height: float | None = None,
    wrap: bool = False,
    imperfect: float | None = 0.0,
    fill: float | None = 1.0,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> Grid:
    """
    Generate a maze of WALL and PASSAGE cells.

    Args:
        width: Requested width; normalized by normalize_params
        height: Requested height; defaults to width
        wrap: Generate on a torus instead of a rectangle
        imperfect: Fraction of extra connections (loops), 0 to 1
        fill: How much of the space to fill, 1 = all of it
        rng: Random source; takes precedence over seed
        seed: Seed for a fresh random.Random when rng is not given

    Returns:
        Grid indexed grid[x, y] holding only WALL and PASSAGE

    Raises:
        MazeConfigError: If reservation leaves nowhere to start carving
    """
    if rng is None:
        rng = random.Random(seed)

    params = normalize_params(width, height, wrap, imperfect, fill)
    grid = allocate_grid(params)

    reserved = reserve_regions(grid, params, rng)
    carved = carve(grid, params, rng)

    opened = repaired = 0
    if params.imperfect > 0:
        opened = inject_imperfections(grid, params, rng)
        repaired = reconnect_islands(grid, rng)

    clear_reservations(grid, params)

    logger.info(
        "generate: %dx%d wrap=%s reserved=%d carved=%d opened=%d islands=%d",
        params.width,
        params.height,
        params.wrap,
        reserved,
        carved,
        opened,
        repaired,
    )
    return grid
