#!/usr/bin/env python3
"""
Command-line demo: generate a maze, optionally solve it, and print it.

    python maze_demo.py --preset torus --seed 7 --solve
    python maze_demo.py --width 41 --height 21 --imperfect 0.2 --hall-width 2
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ascii_render import render
from grid_types import CellState, Grid, MazeConfigError, Position
from maze import generate, normalize_params
from maze_analysis import count_loops, find_islands, passage_components, shortest_path
from maze_map import thicken

PATH_MARK = "·"

PRESETS: dict[str, dict[str, Any]] = dict(
    classic=dict(width=31, height=15, wrap=False, imperfect=0.0, fill=1.0),
    loops=dict(width=31, height=15, wrap=False, imperfect=0.3, fill=1.0),
    torus=dict(width=32, height=16, wrap=True, imperfect=0.0, fill=1.0),
    stringy=dict(width=41, height=21, wrap=False, imperfect=0.0, fill=0.2),
    caves=dict(width=41, height=21, wrap=True, imperfect=0.6, fill=0.5),
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate and print a maze.")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="classic")
    parser.add_argument("--width", type=int, default=None, help="override preset width")
    parser.add_argument("--height", type=int, default=None, help="override preset height")
    parser.add_argument("--wrap", action=argparse.BooleanOptionalAction, default=None,
                        help="generate on a torus")
    parser.add_argument("--imperfect", type=float, default=None, help="loop fraction, 0-1")
    parser.add_argument("--fill", type=float, default=None, help="space filled, 0-1")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--hall-width", type=int, default=1)
    parser.add_argument("--wall-width", type=int, default=1)
    parser.add_argument("--solve", action="store_true",
                        help="mark the path between the first and last open cells")
    parser.add_argument("--color", action="store_true", help="ANSI colored glyphs")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def resolve_options(args: argparse.Namespace) -> dict[str, Any]:
    """Preset values overridden by any explicitly given flags."""
    options = dict(PRESETS[args.preset])
    for key in ("width", "height", "wrap", "imperfect", "fill"):
        value = getattr(args, key)
        if value is not None:
            options[key] = value
    return options


def solve(grid: Grid, wrap: bool) -> list[Position]:
    """Shortest path between the first and last open cell positions."""
    cells = [
        (x, y)
        for y in range(1, grid.height, 2)
        for x in range(1, grid.width, 2)
        if grid[x, y] == CellState.PASSAGE
    ]
    if len(cells) < 2:
        return []
    return shortest_path(grid, cells[0], cells[-1], wrap)


def describe(grid: Grid, wrap: bool) -> str:
    components = passage_components(grid, wrap)
    return (
        f"{grid.width}x{grid.height}{' torus' if wrap else ''}  "
        f"passages={grid.count(CellState.PASSAGE)}  "
        f"components={len(components)}  "
        f"loops={count_loops(grid, wrap)}  "
        f"islands={len(find_islands(grid, wrap))}"
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    options = resolve_options(args)
    console = Console()

    try:
        grid = generate(**options, seed=args.seed)
    except MazeConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    wrap = normalize_params(**options).wrap
    status = describe(grid, wrap)

    shown = grid
    if args.solve:
        path = solve(grid, wrap)
        shown = grid.copy()
        for pos in path:
            shown[pos] = PATH_MARK
        status += f"  path={len(path)}" if path else "  path=none"

    shown = thicken(shown, args.hall_width, args.wall_width)

    body = Text.from_ansi(render(shown, colored=args.color))
    body.append("\n\n")
    body.append("Status: ", style="bold")
    body.append(status)
    console.print(Panel(body, title=f"Maze - {args.preset}", border_style="green", expand=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
