"""Bridges between grid worlds and graphs, and the shortest-path entry point."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Optional

from .costs import MAZE_WALL, POSITIVE_INFINITY
from .graph import Arc, BasicGraph, Node, set_environment
from .search import a_star, breadth_first_search, depth_first_search, dijkstras_algorithm
from .types import Grid, GridEdge, Loc

logger = logging.getLogger(__name__)

CostFunction = Callable[[Loc, Loc, Grid], float]


class AlgorithmType(Enum):
    """The search algorithm to run."""

    AUTODETECT = "autodetect"
    BFS = "bfs"
    DFS = "dfs"
    DIJKSTRA = "dijkstra"
    A_STAR = "a_star"


def _digits(world: Grid) -> int:
    largest = max(world.num_rows, world.num_cols)
    return len(str(largest)) if largest > 0 else 0


def vertex_name(row: int, col: int, world: Grid) -> str:
    """Name of a cell such as "r08c17", zero-padded to the world's size."""
    digits = _digits(world)
    return f"r{str(row).rjust(digits, '0')}c{str(col).rjust(digits, '0')}"


def grid_to_graph(world: Grid, cost_fn: CostFunction) -> BasicGraph:
    """Build a graph with a vertex per cell and an arc per finite-cost move."""
    graph = BasicGraph()
    for loc, value in world.cells():
        graph.add_vertex(Node(vertex_name(loc.row, loc.col, world), loc.row, loc.col, value))

    for loc, _ in world.cells():
        vertex = graph.get_vertex(vertex_name(loc.row, loc.col, world))
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                nr, nc = loc.row + dr, loc.col + dc
                if (dr == 0 and dc == 0) or not world.in_bounds(nr, nc):
                    continue
                neighbor = graph.get_vertex(vertex_name(nr, nc, world))
                cost = cost_fn(loc, Loc(nr, nc), world)
                if cost != POSITIVE_INFINITY:
                    graph.add_arc(Arc(vertex, neighbor, cost))
    return graph


def graph_to_grid(graph: BasicGraph) -> Optional[Grid]:
    """Rebuild the grid a graph was made from; cells without a vertex become walls."""
    vertices = graph.vertices
    if not vertices:
        return None
    max_row = max(v.row for v in vertices)
    max_col = max(v.col for v in vertices)
    if max_row < 0 or max_col < 0:
        return None
    grid = Grid(max_row + 1, max_col + 1, fill=MAZE_WALL)
    for vertex in vertices:
        grid.set(vertex.row, vertex.col, vertex.grid_value)
    return grid


class WorldCache:
    """Graphs built from worlds, kept so a world is converted only once."""

    def __init__(self) -> None:
        self._graphs: dict[int, tuple[Grid, BasicGraph]] = {}

    def ensure(self, world: Grid, cost_fn: CostFunction) -> BasicGraph:
        """Return the graph for world, building it on first use."""
        entry = self._graphs.get(id(world))
        if entry is not None and entry[0] is world:
            return entry[1]
        logger.info("Preparing world model ...")
        graph = grid_to_graph(world, cost_fn)
        logger.info("World model completed.")
        self._graphs[id(world)] = (world, graph)
        return graph

    def flush(self) -> None:
        """Forget every cached graph."""
        self._graphs.clear()

    def __contains__(self, world: object) -> bool:
        entry = self._graphs.get(id(world))
        return entry is not None and entry[0] is world

    def __len__(self) -> int:
        return len(self._graphs)


_CACHE = WorldCache()


def ensure_world_cache(world: Grid, cost_fn: CostFunction) -> BasicGraph:
    """Return the shared cached graph for world, building it if needed."""
    return _CACHE.ensure(world, cost_fn)


def flush_world_cache() -> None:
    """Empty the shared world cache."""
    _CACHE.flush()


def _node_heuristic(heuristic_fn: Optional[CostFunction]):
    def estimate(start: Node, end: Node, world: Grid) -> float:
        if heuristic_fn is None:
            return 0.0
        return heuristic_fn(start.loc, end.loc, world)

    return estimate


_SEARCHES = {
    AlgorithmType.BFS: ("breadth-first search algorithm", breadth_first_search),
    AlgorithmType.DIJKSTRA: ("Dijkstra's algorithm", dijkstras_algorithm),
    AlgorithmType.A_STAR: ("A* algorithm", a_star),
}


def shortest_path(
    start: Loc,
    end: Loc,
    world: Grid,
    cost_fn: CostFunction,
    heuristic_fn: Optional[CostFunction] = None,
    algorithm: AlgorithmType = AlgorithmType.AUTODETECT,
) -> list[Loc]:
    """Search world from start to end; return the visited locations in order.

    An unreachable end gives an empty list; a start or end outside the
    world raises ValueError.
    """
    graph = ensure_world_cache(world, cost_fn)
    set_environment(world, _node_heuristic(heuristic_fn), None)

    start_name = vertex_name(start.row, start.col, world)
    end_name = vertex_name(end.row, end.col, world)
    start_vertex = graph.get_vertex(start_name)
    if start_vertex is None:
        raise ValueError(f'Graph can not find start vertex with name "{start_name}"')
    end_vertex = graph.get_vertex(end_name)
    if end_vertex is None:
        raise ValueError(f'Graph can not find end vertex with name "{end_name}"')

    logger.info("Looking for a path from %s to %s.", start_vertex.name, end_vertex.name)
    label, search = _SEARCHES.get(algorithm, ("depth-first search algorithm", depth_first_search))
    logger.info("Executing %s ...", label)
    result = search(graph, start_vertex, end_vertex)
    logger.info("Algorithm complete.")
    return [node.loc for node in result]


def create_maze(num_rows: int, num_cols: int) -> set[GridEdge]:
    """Return the passages of a random maze built with Kruskal's algorithm.

    The passages form a spanning tree over the num_rows x num_cols cells,
    each joining a cell to its right or lower neighbour.
    """
    if num_rows < 0 or num_cols < 0:
        raise ValueError(f"maze dimensions must be non-negative, got {num_rows}x{num_cols}")
    walls = [
        GridEdge(Loc(r, c), Loc(r, c + 1)) for r in range(num_rows) for c in range(num_cols - 1)
    ] + [
        GridEdge(Loc(r, c), Loc(r + 1, c)) for r in range(num_rows - 1) for c in range(num_cols)
    ]
    random.shuffle(walls)

    parent: dict[Loc, Loc] = {}

    def find(loc: Loc) -> Loc:
        root = loc
        while parent.get(root, root) != root:
            root = parent[root]
        while loc != root:
            parent[loc], loc = root, parent[loc]
        return root

    passages: set[GridEdge] = set()
    for wall in walls:
        a, b = find(wall.start), find(wall.end)
        if a != b:
            parent[a] = b
            passages.add(wall)
    return passages