import pytest

from trailblazer.graph import BasicGraph, Node, clear_environment, set_environment
from trailblazer.search import (
    a_star,
    breadth_first_search,
    build_path,
    depth_first_search,
    dijkstras_algorithm,
)
from trailblazer.types import Color, Grid

ALGORITHMS = [depth_first_search, breadth_first_search, dijkstras_algorithm, a_star]


@pytest.fixture(autouse=True)
def _clean_environment():
    clear_environment()
    yield
    clear_environment()


def _diamond():
    graph = BasicGraph()
    for name in "ABCD":
        graph.add_vertex(name)
    graph.add_edge("A", "B", 1.0)
    graph.add_edge("B", "C", 1.0)
    graph.add_edge("A", "C", 5.0)
    graph.add_edge("C", "D", 1.0)
    return graph


def _grid_graph(size):
    graph = BasicGraph()
    for r in range(size):
        for c in range(size):
            graph.add_vertex(Node(f"r{r}c{c}", r, c))
    for r in range(size):
        for c in range(size):
            if c + 1 < size:
                graph.add_edge(f"r{r}c{c}", f"r{r}c{c + 1}", 1.0, directed=False)
            if r + 1 < size:
                graph.add_edge(f"r{r}c{c}", f"r{r + 1}c{c}", 1.0, directed=False)
    return graph


def _names(path):
    return [node.name for node in path]


def _assert_valid_path(graph, path, start, end):
    assert path[0] is graph.get_vertex(start)
    assert path[-1] is graph.get_vertex(end)
    for a, b in zip(path, path[1:]):
        assert graph.is_neighbor(a, b)


def test_build_path_follows_previous_links():
    a, b, c = Node("a"), Node("b"), Node("c")
    b.previous = a
    c.previous = b
    assert build_path(c) == [a, b, c]


def test_build_path_of_lone_node():
    node = Node("x")
    assert build_path(node) == [node]


def test_build_path_of_none_is_empty():
    assert build_path(None) == []


@pytest.mark.parametrize("search", ALGORITHMS)
def test_every_search_returns_a_connected_path(search):
    graph = _diamond()
    path = search(graph, graph.get_vertex("A"), graph.get_vertex("D"))
    _assert_valid_path(graph, path, "A", "D")


@pytest.mark.parametrize("search", ALGORITHMS)
def test_every_search_reports_unreachable_as_empty(search):
    graph = _diamond()
    assert search(graph, graph.get_vertex("D"), graph.get_vertex("A")) == []


@pytest.mark.parametrize("search", ALGORITHMS)
def test_start_equal_to_end_gives_single_node(search):
    graph = _diamond()
    node = graph.get_vertex("B")
    assert search(graph, node, node) == [node]


@pytest.mark.parametrize("search", ALGORITHMS)
def test_search_accepts_vertex_names(search):
    graph = _diamond()
    path = search(graph, "A", "D")
    _assert_valid_path(graph, path, "A", "D")


@pytest.mark.parametrize("search", ALGORITHMS)
def test_search_ignores_stale_scratch_data(search):
    graph = _diamond()
    for node in graph:
        node.visited = True
        node.cost = -1.0
    path = search(graph, "A", "D")
    _assert_valid_path(graph, path, "A", "D")


def test_depth_first_follows_first_arcs():
    graph = _diamond()
    assert _names(depth_first_search(graph, "A", "D")) == ["A", "B", "C", "D"]


def test_depth_first_missing_vertex_gives_empty_path():
    graph = _diamond()
    assert depth_first_search(graph, "A", "nowhere") == []


def test_depth_first_marks_dead_ends_gray():
    graph = BasicGraph()
    for name in "ABC":
        graph.add_vertex(name)
    graph.add_edge("A", "B")
    graph.add_edge("A", "C")
    path = depth_first_search(graph, "A", "C")
    assert _names(path) == ["A", "C"]
    assert graph.get_vertex("B").color == Color.GRAY
    assert graph.get_vertex("A").color == Color.GREEN


def test_depth_first_handles_long_chains():
    graph = BasicGraph()
    count = 5000
    for i in range(count):
        graph.add_vertex(f"n{i}")
    for i in range(count - 1):
        graph.add_edge(f"n{i}", f"n{i + 1}")
    path = depth_first_search(graph, "n0", f"n{count - 1}")
    assert len(path) == count
    assert _names(path) == [f"n{i}" for i in range(count)]


def test_breadth_first_uses_fewest_arcs():
    graph = _diamond()
    path = breadth_first_search(graph, "A", "D")
    assert _names(path) == ["A", "C", "D"]
    assert path[-1].cost == sum(graph.get_arc(a, b).cost for a, b in zip(path, path[1:]))


def test_breadth_first_unknown_start_raises():
    graph = _diamond()
    with pytest.raises(ValueError):
        breadth_first_search(graph, "nowhere", "A")


@pytest.mark.parametrize("search", [dijkstras_algorithm, a_star])
def test_weighted_searches_find_cheapest_path(search):
    graph = _diamond()
    path = search(graph, "A", "D")
    assert _names(path) == ["A", "B", "C", "D"]
    assert path[-1].cost == 3.0


@pytest.mark.parametrize("search", [dijkstras_algorithm, a_star])
def test_weighted_searches_reject_unknown_end(search):
    graph = _diamond()
    with pytest.raises(ValueError):
        search(graph, "A", "nowhere")


def test_a_star_with_heuristic_matches_dijkstra():
    size = 5
    graph = _grid_graph(size)
    set_environment(
        Grid(size, size),
        lambda a, b, world: abs(a.row - b.row) + abs(a.col - b.col),
    )
    start, end = "r0c0", f"r{size - 1}c{size - 1}"
    reference = dijkstras_algorithm(graph, start, end)
    reference_cost = reference[-1].cost
    found = a_star(graph, start, end)
    _assert_valid_path(graph, found, start, end)
    assert len(found) == len(reference)
    assert found[-1].cost == reference_cost


def test_dijkstra_costs_match_arc_sums():
    graph = _grid_graph(4)
    path = dijkstras_algorithm(graph, "r0c0", "r3c2")
    total = sum(graph.get_arc(a, b).cost for a, b in zip(path, path[1:]))
    assert path[-1].cost == total


def test_searches_paint_through_environment():
    calls = []
    set_environment(Grid(1, 1), None, lambda world, loc, color: calls.append(color))
    graph = _diamond()
    breadth_first_search(graph, "A", "D")
    assert calls[0] == Color.GREEN
    assert Color.YELLOW in calls