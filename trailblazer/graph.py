"""Graph of named vertices joined by weighted arcs, with per-search scratch data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Union

from .types import Color, Grid, Loc

Heuristic = Callable[["Node", "Node", Grid], float]
Painter = Callable[[Grid, Loc, Color], None]


@dataclass
class _Environment:
    world: Optional[Grid] = None
    heuristic: Optional[Heuristic] = None
    painter: Optional[Painter] = None


_ENV = _Environment()


def set_environment(
    world: Optional[Grid],
    heuristic: Optional[Heuristic] = None,
    painter: Optional[Painter] = None,
) -> None:
    """Install the world, heuristic and cell painter shared by all nodes."""
    _ENV.world = world
    _ENV.heuristic = heuristic
    _ENV.painter = painter


def clear_environment() -> None:
    """Forget the world, heuristic and painter."""
    set_environment(None, None, None)


def _format_number(value: float) -> str:
    return f"{value:g}"


def _name_of(node: Optional["Node"]) -> str:
    return "None" if node is None else node.name


@dataclass(eq=False, repr=False)
class Node:
    """A vertex; cost, visited and previous are scratch data for searches."""

    name: str = ""
    row: int = 0
    col: int = 0
    grid_value: float = 0.0
    arcs: list["Arc"] = field(default_factory=list)
    cost: float = field(default=0.0, init=False)
    visited: bool = field(default=False, init=False)
    previous: Optional["Node"] = field(default=None, init=False)
    _color: Color = field(default=Color.WHITE, init=False)

    @property
    def loc(self) -> Loc:
        return Loc(self.row, self.col)

    @property
    def color(self) -> Color:
        """The colour last given to this node; initially WHITE."""
        return self._color

    @color.setter
    def color(self, value: Color) -> None:
        self._color = value
        if _ENV.world is not None and _ENV.painter is not None:
            _ENV.painter(_ENV.world, self.loc, value)

    def heuristic(self, other: "Node") -> float:
        """Estimated distance to other; 0.0 when no environment is installed."""
        if _ENV.world is None or _ENV.heuristic is None:
            return 0.0
        return _ENV.heuristic(self, other, _ENV.world)

    def reset_data(self) -> None:
        """Reset cost, visited, previous and colour to their initial values."""
        self.cost = 0.0
        self.previous = None
        self.visited = False
        self._color = Color.WHITE

    def __str__(self) -> str:
        neighbors = ", ".join(_name_of(arc.finish) for arc in self.arcs)
        return (
            f"Node{{name={self.name}, cost={_format_number(self.cost)}, "
            f"visited={'true' if self.visited else 'false'}, "
            f"previous={_name_of(self.previous)}, neighbors={{{neighbors}}}}}"
        )

    def __repr__(self) -> str:
        return f"Node({self.name!r})"


@dataclass(eq=False, repr=False)
class Arc:
    """A directed, weighted edge between two nodes."""

    start: Optional[Node] = None
    finish: Optional[Node] = None
    cost: float = 0.0
    visited: bool = field(default=False, init=False)

    def reset_data(self) -> None:
        """Mark the arc as not visited."""
        self.visited = False

    def __str__(self) -> str:
        text = f"Arc{{start={_name_of(self.start)}, finish={_name_of(self.finish)}"
        if self.cost != 0.0:
            text += f", cost={_format_number(self.cost)}"
        if self.visited:
            text += ", visited=true"
        return text + "}"

    def __repr__(self) -> str:
        return f"Arc({_name_of(self.start)!r} -> {_name_of(self.finish)!r}, {self.cost!r})"


VertexRef = Union[str, Node]


class BasicGraph:
    """A directed graph whose vertices are looked up by name."""

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}

    @property
    def vertices(self) -> tuple[Node, ...]:
        return tuple(self._nodes.values())

    @property
    def arcs(self) -> tuple[Arc, ...]:
        return tuple(arc for node in self._nodes.values() for arc in node.arcs)

    def __iter__(self) -> Iterator[Node]:
        return iter(tuple(self._nodes.values()))

    def __contains__(self, name: object) -> bool:
        if isinstance(name, Node):
            return self._nodes.get(name.name) is name
        return name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def _resolve(self, vertex: VertexRef) -> Node:
        if isinstance(vertex, Node):
            return vertex
        try:
            return self._nodes[vertex]
        except KeyError:
            raise KeyError(f"no vertex named {vertex!r} in graph") from None

    def _require_member(self, node: Optional[Node]) -> Node:
        if node is None or node not in self:
            raise ValueError(f"vertex {_name_of(node)!r} is not in this graph")
        return node

    def add_vertex(self, vertex: VertexRef) -> Node:
        """Add a vertex by name or as a node; an existing name returns its node."""
        node = Node(vertex) if isinstance(vertex, str) else vertex
        existing = self._nodes.get(node.name)
        if existing is not None:
            return existing
        self._nodes[node.name] = node
        return node

    def get_vertex(self, name: str) -> Optional[Node]:
        """Return the vertex with the given name, or None."""
        return self._nodes.get(name)

    def remove_vertex(self, vertex: VertexRef) -> None:
        """Remove a vertex together with every arc that touches it."""
        node = self._require_member(self._resolve(vertex))
        del self._nodes[node.name]
        for other in self._nodes.values():
            other.arcs = [arc for arc in other.arcs if arc.finish is not node]

    def add_edge(
        self,
        start: VertexRef,
        finish: VertexRef,
        cost: float = 0.0,
        directed: bool = True,
    ) -> Arc:
        """Connect two vertices; an undirected edge also adds the reverse arc."""
        return self.add_arc(Arc(self._resolve(start), self._resolve(finish), cost), directed)

    def add_arc(self, arc: Arc, directed: bool = True) -> Arc:
        """Add an existing arc; an undirected one also adds its reverse."""
        start = self._require_member(arc.start)
        finish = self._require_member(arc.finish)
        start.arcs.append(arc)
        if not directed:
            finish.arcs.append(Arc(finish, start, arc.cost))
        return arc

    def remove_edge(self, start: VertexRef, finish: VertexRef, directed: bool = True) -> None:
        """Remove every arc from start to finish (and back, if undirected)."""
        first = self._resolve(start)
        second = self._resolve(finish)
        self._remove_between(first, second)
        if not directed:
            self._remove_between(second, first)

    def remove_arc(self, arc: Arc, directed: bool = True) -> None:
        """Remove one arc; if undirected also every arc from its finish to its start."""
        if arc.start is not None:
            arc.start.arcs = [a for a in arc.start.arcs if a is not arc]
        if not directed and arc.finish is not None and arc.start is not None:
            self._remove_between(arc.finish, arc.start)

    @staticmethod
    def _remove_between(start: Node, finish: Node) -> None:
        start.arcs = [arc for arc in start.arcs if arc.finish is not finish]

    def get_arc(self, start: VertexRef, finish: VertexRef) -> Optional[Arc]:
        """Return the first arc from start to finish, or None."""
        first = self._resolve(start)
        second = self._resolve(finish)
        return next((arc for arc in first.arcs if arc.finish is second), None)

    def inverse_arc(self, arc: Arc) -> Optional[Arc]:
        """Return the arc running the opposite way to arc, or None."""
        if arc.start is None or arc.finish is None:
            return None
        return self.get_arc(arc.finish, arc.start)

    def is_neighbor(self, start: VertexRef, finish: VertexRef) -> bool:
        """Return True if an arc leads from start to finish."""
        return self.get_arc(start, finish) is not None

    def arcs_from(self, vertex: VertexRef) -> tuple[Arc, ...]:
        """Return the arcs leaving a vertex."""
        return tuple(self._resolve(vertex).arcs)

    def neighbors(self, vertex: VertexRef) -> list[Node]:
        """Return the distinct vertices reachable by one arc, in arc order."""
        seen: dict[int, Node] = {}
        for arc in self._resolve(vertex).arcs:
            if arc.finish is not None:
                seen.setdefault(id(arc.finish), arc.finish)
        return list(seen.values())

    def reset_data(self) -> None:
        """Reset the scratch data of every vertex and arc."""
        for node in self._nodes.values():
            node.reset_data()
            for arc in node.arcs:
                arc.reset_data()