"""Costs of moving through terrain and maze worlds, and search heuristics."""

from __future__ import annotations

import math

from .types import Grid, Loc

POSITIVE_INFINITY = math.inf
NEGATIVE_INFINITY = -math.inf

MAZE_WALL = 0.0
MAZE_FLOOR = 1.0

ALTITUDE_PENALTY = 100.0


def _adjacent_deltas(start: Loc, end: Loc) -> tuple[int, int]:
    drow = abs(end.row - start.row)
    dcol = abs(end.col - start.col)
    if drow > 1 or dcol > 1:
        raise ValueError("Non-adjacent locations passed into cost function.")
    return drow, dcol


def terrain_cost(start: Loc, end: Loc, world: Grid) -> float:
    """Cost of stepping between adjacent terrain cells.

    The distance (1 cardinally, sqrt(2) diagonally) plus a penalty
    linear in the change of height.
    """
    if start == end:
        return 0.0
    drow, dcol = _adjacent_deltas(start, end)
    distance = math.sqrt(drow * drow + dcol * dcol)
    dheight = abs(world[end] - world[start])
    return distance + ALTITUDE_PENALTY * dheight


def terrain_heuristic(start: Loc, end: Loc, world: Grid) -> float:
    """Straight-line distance plus the scaled height difference."""
    drow = end.row - start.row
    dcol = end.col - start.col
    dheight = abs(world[end] - world[start])
    return math.sqrt(drow * drow + dcol * dcol) + ALTITUDE_PENALTY * dheight


def maze_cost(start: Loc, end: Loc, world: Grid) -> float:
    """Cost of stepping between adjacent maze cells.

    1.0 for a cardinal move between floors; infinite for diagonal moves
    or moves to or from a wall.
    """
    if start == end:
        return 0.0
    drow, dcol = _adjacent_deltas(start, end)
    if drow == 1 and dcol == 1:
        return POSITIVE_INFINITY
    if world[start] == MAZE_WALL or world[end] == MAZE_WALL:
        return POSITIVE_INFINITY
    return 1.0


def maze_heuristic(start: Loc, end: Loc, world: Grid) -> float:
    """Manhattan distance between the two locations."""
    return float(abs(start.row - end.row) + abs(start.col - end.col))


def zero_heuristic(start: Loc, end: Loc, world: Grid) -> float:
    """A heuristic that always estimates zero, turning A* into Dijkstra's search."""
    # The sum of no estimates: the arguments are deliberately ignored.
    return math.fsum(())