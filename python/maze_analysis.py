"""
Structural queries over generated mazes: connectivity, loops, islands, paths.

Everything here is read-only and treats positions as graph nodes joined to
their open 4-neighbours, wrapping across the edges when ``wrap`` is set.
"""

from __future__ import annotations

from collections import deque

from grid_types import CellState, Direction, Grid, Position

PASSAGE = CellState.PASSAGE


def neighbors(grid: Grid, pos: Position, wrap: bool = False) -> list[Position]:
    """Distinct in-bounds 4-neighbours of ``pos`` (wrapped on a torus)."""
    x, y = pos
    width, height = grid.width, grid.height
    result: list[Position] = []
    for d in Direction:
        nx, ny = x + d.dx, y + d.dy
        if wrap:
            nx %= width
            ny %= height
        elif not (0 <= nx < width and 0 <= ny < height):
            continue
        if (nx, ny) != pos and (nx, ny) not in result:
            result.append((nx, ny))
    return result


def _open_neighbors(grid: Grid, pos: Position, wrap: bool) -> list[Position]:
    return [n for n in neighbors(grid, pos, wrap) if grid[n] == PASSAGE]


def passage_components(grid: Grid, wrap: bool = False) -> list[set[Position]]:
    """Connected components of PASSAGE positions, largest first."""
    seen: set[Position] = set()
    components: list[set[Position]] = []

    for start in grid.positions():
        if start in seen or grid[start] != PASSAGE:
            continue
        component = {start}
        seen.add(start)
        q = deque([start])
        while q:
            u = q.popleft()
            for v in _open_neighbors(grid, u, wrap):
                if v not in seen:
                    seen.add(v)
                    component.add(v)
                    q.append(v)
        components.append(component)

    components.sort(key=len, reverse=True)
    return components


def count_connections(grid: Grid, wrap: bool = False) -> int:
    """Number of unordered pairs of adjacent PASSAGE positions."""
    edges: set[frozenset[Position]] = set()
    for pos in grid.positions():
        if grid[pos] != PASSAGE:
            continue
        for n in _open_neighbors(grid, pos, wrap):
            edges.add(frozenset((pos, n)))
    return len(edges)


def count_loops(grid: Grid, wrap: bool = False) -> int:
    """Independent cycles among passages (connections - nodes + components)."""
    passages = grid.count(PASSAGE)
    return count_connections(grid, wrap) - passages + len(passage_components(grid, wrap))


def is_perfect(grid: Grid, wrap: bool = False) -> bool:
    """True if the passages form a single tree: connected and loop-free."""
    passages = grid.count(PASSAGE)
    if passages == 0:
        return False
    return (
        len(passage_components(grid, wrap)) == 1
        and count_connections(grid, wrap) == passages - 1
    )


def find_islands(grid: Grid, wrap: bool = False) -> list[Position]:
    """Junctions (both coordinates even) whose four neighbours are all open."""
    islands: list[Position] = []
    for y in range(0, grid.height, 2):
        for x in range(0, grid.width, 2):
            if not wrap and (x in (0, grid.width - 1) or y in (0, grid.height - 1)):
                continue
            around = [
                grid[(x + d.dx) % grid.width, (y + d.dy) % grid.height] for d in Direction
            ]
            if all(c == PASSAGE for c in around):
                islands.append((x, y))
    return islands


def shortest_path(
    grid: Grid, start: Position, goal: Position, wrap: bool = False
) -> list[Position]:
    """
    Breadth-first shortest path between two PASSAGE positions.

    Returns:
        Positions from start to goal inclusive, or [] if unreachable
    """
    if grid[start] != PASSAGE or grid[goal] != PASSAGE:
        return []

    q = deque([start])
    parent: dict[Position, Position | None] = {start: None}
    while q:
        u = q.popleft()
        if u == goal:
            break
        for v in _open_neighbors(grid, u, wrap):
            if v not in parent:
                parent[v] = u
                q.append(v)

    if goal not in parent:
        return []
    path: list[Position] = []
    cur: Position | None = goal
    while cur is not None:
        path.append(cur)
        cur = parent[cur]
    return list(reversed(path))
