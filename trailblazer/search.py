"""Path searches over a BasicGraph: depth-first, breadth-first, Dijkstra and A*."""

from __future__ import annotations

import heapq
import itertools
import math
from collections import deque
from typing import Optional, Union

from .graph import BasicGraph, Node
from .types import Color

VertexRef = Union[str, Node, None]


class _PriorityQueue:
    """Min-priority queue of nodes; equal priorities leave in insertion order."""

    def __init__(self) -> None:
        self._heap: list[list] = []
        self._latest: dict[Node, list] = {}
        self._counter = itertools.count()
        self._size = 0

    def __bool__(self) -> bool:
        return self._size > 0

    def enqueue(self, node: Node, priority: float) -> None:
        entry = [priority, next(self._counter), node, True]
        heapq.heappush(self._heap, entry)
        self._latest[node] = entry
        self._size += 1

    def dequeue(self) -> Node:
        while self._heap:
            entry = heapq.heappop(self._heap)
            _, _, node, alive = entry
            if not alive:
                continue
            self._size -= 1
            if self._latest.get(node) is entry:
                del self._latest[node]
            return node
        raise IndexError("dequeue from an empty priority queue")

    def change_priority(self, node: Node, priority: float) -> None:
        """Give node a new priority, enqueuing it if it is not waiting."""
        entry = self._latest.get(node)
        if entry is not None and entry[3]:
            entry[3] = False
            self._size -= 1
        self.enqueue(node, priority)


def _lookup(graph: BasicGraph, vertex: VertexRef) -> Optional[Node]:
    if vertex is None or isinstance(vertex, Node):
        return vertex
    return graph.get_vertex(vertex)


def _require(graph: BasicGraph, vertex: VertexRef, role: str) -> Node:
    node = _lookup(graph, vertex)
    if node is None:
        raise ValueError(f"{role} vertex {vertex!r} is not in the graph")
    return node


def build_path(node: Optional[Node]) -> list[Node]:
    """Follow the previous links back from node; return the path in travel order."""
    path: list[Node] = []
    current = node
    while current is not None:
        path.append(current)
        current = current.previous
    path.reverse()
    return path


def depth_first_search(graph: BasicGraph, start: VertexRef, end: VertexRef) -> list[Node]:
    """Find some path from start to end by depth-first search; [] if none."""
    graph.reset_data()
    first = _lookup(graph, start)
    goal = _lookup(graph, end)
    if first is None or goal is None:
        return []
    if first is goal:
        return build_path(goal)

    first.visited = True
    first.color = Color.GREEN
    stack = [(first, iter(tuple(first.arcs)))]
    while stack:
        node, pending = stack[-1]
        for arc in pending:
            following = arc.finish
            if following is None or following.visited:
                continue
            following.previous = node
            if following is goal:
                return build_path(goal)
            following.visited = True
            following.color = Color.GREEN
            stack.append((following, iter(tuple(following.arcs))))
            break
        else:
            node.color = Color.GRAY
            stack.pop()
    return []


def breadth_first_search(graph: BasicGraph, start: VertexRef, end: VertexRef) -> list[Node]:
    """Find a path with the fewest arcs from start to end; [] if none."""
    graph.reset_data()
    first = _require(graph, start, "start")
    goal = _require(graph, end, "end")

    first.visited = True
    first.cost = 0.0
    queue = deque([first])
    while queue:
        current = queue.popleft()
        current.color = Color.GREEN
        if current is goal:
            return build_path(current)
        for arc in current.arcs:
            following = arc.finish
            if following is None or following.visited:
                continue
            following.visited = True
            following.previous = current
            following.cost = arc.cost + current.cost
            queue.append(following)
            following.color = Color.YELLOW
    return []


def dijkstras_algorithm(graph: BasicGraph, start: VertexRef, end: VertexRef) -> list[Node]:
    """Find a cheapest path from start to end with Dijkstra's algorithm; [] if none."""
    graph.reset_data()
    first = _require(graph, start, "start")
    goal = _require(graph, end, "end")

    for node in graph:
        node.cost = math.inf
    first.cost = 0.0
    first.visited = True
    first.color = Color.YELLOW
    queue = _PriorityQueue()
    queue.enqueue(first, first.cost)

    while queue:
        current = queue.dequeue()
        current.visited = True
        current.color = Color.GREEN
        if current is goal:
            return build_path(goal)
        for arc in current.arcs:
            following = arc.finish
            if following is None or following.visited:
                continue
            candidate = current.cost + arc.cost
            if candidate < following.cost:
                following.cost = candidate
                following.previous = current
                queue.enqueue(following, following.cost)
                following.color = Color.YELLOW
    return []


def a_star(graph: BasicGraph, start: VertexRef, end: VertexRef) -> list[Node]:
    """Find a cheapest path from start to end with A* search; [] if none."""
    graph.reset_data()
    first = _require(graph, start, "start")
    goal = _require(graph, end, "end")

    first.visited = True
    first.color = Color.YELLOW
    open_set = _PriorityQueue()
    open_set.enqueue(first, 0.0)

    for node in graph:
        node.cost = math.inf
    first.cost = 0.0

    while open_set:
        current = open_set.dequeue()
        if current is goal:
            return build_path(goal)
        for arc in current.arcs:
            following = arc.finish
            if following is None:
                continue
            tentative = current.cost + arc.cost
            if tentative < following.cost:
                following.previous = current
                following.cost = tentative
                estimate = tentative + following.heuristic(goal)
                if not following.visited:
                    following.visited = True
                    open_set.enqueue(following, estimate)
                    following.color = Color.YELLOW
                else:
                    open_set.change_priority(following, estimate)
        current.color = Color.GREEN
    return []