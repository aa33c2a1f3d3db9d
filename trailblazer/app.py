"""Interactive and batch front end for exploring paths through world files."""

from __future__ import annotations

import argparse
import re
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from .adapter import AlgorithmType, ensure_world_cache, flush_world_cache, vertex_name
from .costs import MAZE_WALL
from .graph import clear_environment, set_environment
from .search import a_star, breadth_first_search, depth_first_search, dijkstras_algorithm
from .types import Color, Grid, Loc
from .world import (
    ALGORITHM_LABELS,
    GUI_STATE_FILE,
    MIN_DELAY,
    GuiState,
    PathLike,
    UIState,
    WorldFormatError,
    WorldType,
    algorithm_from_label,
    animation_delay,
    cost_functions,
    find_world_files,
    load_gui_state,
    load_world,
    path_cost,
    save_gui_state,
)

_NAME_PATTERN = re.compile(r"^\s*r(\d+)c(\d+)\s*$", re.IGNORECASE)
_PAIR_PATTERN = re.compile(r"^\s*(\d+)\s*(?:,|\s)\s*(\d+)\s*$")

_ALIASES = {
    "dfs": "Depth-first Search",
    "bfs": "Breadth-first Search",
    "dijkstra": "Dijkstra's Algorithm",
    "astar": "A* Search",
    "a*": "A* Search",
}

_SEARCHES = {
    AlgorithmType.BFS: breadth_first_search,
    AlgorithmType.DIJKSTRA: dijkstras_algorithm,
    AlgorithmType.A_STAR: a_star,
}

_MARK_CHARS = {
    Color.GREEN: "+",
    Color.GRAY: "-",
    Color.YELLOW: "~",
}

_INTRO = (
    "Welcome to Trailblazer!\n"
    "This program searches for paths through graphs representing mazes\n"
    "and rocky terrains.  It demonstrates several graph algorithms for\n"
    "finding paths, such as depth-first search (DFS), breadth-first\n"
    "search (BFS), Dijkstra's Algorithm, and A* search."
)

_HELP = (
    "Commands: load FILE | select LOC | run | clear | show | "
    "algorithm NAME | delay N | exit"
)


def parse_location(text: str) -> Loc:
    """Parse a location written as "r08c17", "8,17" or "8 17"."""
    match = _NAME_PATTERN.match(text) or _PAIR_PATTERN.match(text)
    if match is None:
        raise ValueError(f"not a location: {text!r}")
    return Loc(int(match.group(1)), int(match.group(2)))


def _resolve_algorithm(name: str) -> str:
    if name in ALGORITHM_LABELS:
        return name
    label = _ALIASES.get(name.strip().lower())
    if label is None:
        raise ValueError("Invalid algorithm provided.")
    return label


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search: the path, its cost and how many cells were visited."""

    path: tuple[Loc, ...]
    cost: float
    visited: int
    warnings: tuple[str, ...] = field(default_factory=tuple)


class Session:
    """The state of an exploration: loaded world, selections, colouring and path."""

    def __init__(
        self,
        algorithm: str = "Depth-first Search",
        delay: int = MIN_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.algorithm = algorithm
        self.delay = delay
        self.world: Optional[Grid] = None
        self.world_type: Optional[WorldType] = None
        self.filename: str = ""
        self.ui_state = UIState.FRESH
        self.start: Optional[Loc] = None
        self.end: Optional[Loc] = None
        self.marked = Grid(fill=Color.UNCOLORED)
        self.path: list[Loc] = []
        self.result: Optional[SearchResult] = None
        self._sleep = sleep
        self._pause_ms = 0

    def _require_world(self) -> Grid:
        if self.world is None:
            raise RuntimeError("No world has been loaded.")
        return self.world

    def load(self, filename: PathLike) -> None:
        """Load a world file; on failure the current world is kept."""
        world, world_type = load_world(filename)
        self.world = world
        self.world_type = world_type
        self.filename = str(filename)
        flush_world_cache()
        cost_fn, _ = cost_functions(world_type)
        ensure_world_cache(world, cost_fn)
        self.marked = Grid(world.num_rows, world.num_cols, fill=Color.UNCOLORED)
        self._forget_selection()

    def _forget_selection(self) -> None:
        self.start = None
        self.end = None
        self.path = []
        self.result = None
        self.ui_state = UIState.FRESH

    def _uncolor(self) -> None:
        world = self._require_world()
        self.marked = Grid(world.num_rows, world.num_cols, fill=Color.UNCOLORED)

    def _register(self, loc: Loc) -> bool:
        world = self._require_world()
        if self.start is not None and self.end is not None:
            raise RuntimeError("Two tiles have already been selected.")
        if not world.in_bounds(loc.row, loc.col):
            return False
        if self.world_type is WorldType.MAZE and world[loc] == MAZE_WALL:
            return False
        if self.start is None:
            self.start = loc
        else:
            self.end = loc
        return True

    def select(self, loc: Loc) -> bool:
        """Select a location; the second selection runs a search.

        Returns False if the location cannot be selected.
        """
        self._require_world()
        if self.ui_state is UIState.DRAWN:
            self.clear()
        if self.ui_state is UIState.FRESH:
            if self._register(loc):
                self.ui_state = UIState.MARKED
                return True
            return False
        if self._register(loc):
            self._search()
            self.ui_state = UIState.DRAWN
            return True
        return False

    def run(self) -> SearchResult:
        """Repeat the search between the two selected locations."""
        if self.ui_state is not UIState.DRAWN:
            raise RuntimeError("Cannot rerun a search; no search has been done.")
        self._uncolor()
        self.path = []
        return self._search()

    def clear(self) -> None:
        """Remove colouring, selections and the drawn path."""
        self._uncolor()
        self._forget_selection()

    def _paint(self, world: Grid, loc: Loc, color: Color) -> None:
        self.marked[loc] = color
        if self._pause_ms > 0:
            self._pause_ms = animation_delay(self.delay, forbid_zero=True)
            self._sleep(self._pause_ms / 1000)

    def _find_path(self, world: Grid, cost_fn: Callable, heuristic_fn: Callable) -> list[Loc]:
        assert self.start is not None and self.end is not None
        graph = ensure_world_cache(world, cost_fn)
        start_vertex = graph.get_vertex(vertex_name(self.start.row, self.start.col, world))
        end_vertex = graph.get_vertex(vertex_name(self.end.row, self.end.col, world))
        search = _SEARCHES.get(algorithm_from_label(self.algorithm), depth_first_search)

        def heuristic(source: Any, target: Any, grid: Grid) -> float:
            return heuristic_fn(
                getattr(source, "loc", source), getattr(target, "loc", target), grid
            )

        set_environment(world, heuristic, self._paint)
        try:
            nodes = search(graph, start_vertex, end_vertex)
        finally:
            clear_environment()
        return [node.loc for node in nodes]

    def _search(self) -> SearchResult:
        world = self._require_world()
        if self.start is None or self.end is None or self.world_type is None:
            raise RuntimeError("Two locations must be selected before searching.")
        self._pause_ms = animation_delay(self.delay)
        cost_fn, heuristic_fn = cost_functions(self.world_type)
        path = self._find_path(world, cost_fn, heuristic_fn)

        warnings: list[str] = []
        if not path:
            warnings.append("Warning: Returned path is empty.")
        elif path[0] != self.start:
            warnings.append("Warning: Start of path is not the start location.")
        elif path[-1] != self.end:
            warnings.append("Warning: End of path is not the end location.")

        visited = sum(1 for _, color in self.marked.cells() if color in (Color.GREEN, Color.GRAY))
        self.path = list(path)
        self.result = SearchResult(
            path=tuple(path),
            cost=path_cost(path, world, cost_fn),
            visited=visited,
            warnings=tuple(warnings),
        )
        return self.result

    def _base_char(self, value: float) -> str:
        if self.world_type is WorldType.MAZE:
            return "#" if value == MAZE_WALL else "."
        return str(min(9, max(0, int(value * 10))))

    def render(self) -> str:
        """Draw the world as text, one line per row."""
        world = self._require_world()
        on_path = set(self.path)
        lines = []
        for r in range(world.num_rows):
            chars = []
            for c in range(world.num_cols):
                loc = Loc(r, c)
                if loc == self.start:
                    chars.append("S")
                elif loc == self.end:
                    chars.append("E")
                elif loc in on_path:
                    chars.append("*")
                elif self.marked.get(r, c) in _MARK_CHARS:
                    chars.append(_MARK_CHARS[self.marked.get(r, c)])
                else:
                    chars.append(self._base_char(world.get(r, c)))
            lines.append("".join(chars))
        return "\n".join(lines)


def _report(result: SearchResult) -> None:
    print(f"Path length: {len(result.path)}")
    print(f"Path cost: {result.cost:g}")
    for warning in result.warnings:
        print(warning)
    print(f"Locations visited: {result.visited}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trailblazer", description="Search for paths through mazes and terrains."
    )
    parser.add_argument("world", nargs="?", help="world file to load")
    parser.add_argument("--algorithm", help="dfs, bfs, dijkstra, astar or a menu label")
    parser.add_argument("--from", dest="start", type=parse_location, help="start location")
    parser.add_argument("--to", dest="end", type=parse_location, help="end location")
    parser.add_argument("--delay", type=int, help="animation delay slider value")
    parser.add_argument("--directory", default=".", help="where to look for world files")
    parser.add_argument("--state", default=GUI_STATE_FILE, help="file holding saved state")
    parser.add_argument("--no-state", action="store_true", help="do not load or save state")
    return parser


def _batch(session: Session, world: str, start: Loc, end: Loc) -> int:
    try:
        session.load(world)
    except (OSError, WorldFormatError) as exc:
        print(f"{world} is not a valid world file: {exc}", file=sys.stderr)
        return 1
    for loc in (start, end):
        if not session.select(loc):
            print(f"r{loc.row}c{loc.col} is not a selectable location.", file=sys.stderr)
            return 1
    assert session.result is not None
    _report(session.result)
    print(session.render())
    return 0


def _initial_world(args: argparse.Namespace, saved: Optional[GuiState]) -> Optional[str]:
    if args.world:
        return args.world
    if saved is not None and saved.world_file and Path(saved.world_file).is_file():
        return saved.world_file
    candidates = sorted(
        set(find_world_files(args.directory, "maze"))
        | set(find_world_files(args.directory, "terrain"))
    )
    if not candidates:
        return None
    return str(Path(args.directory) / candidates[0])


def _command(session: Session, line: str) -> bool:
    """Carry out one interactive command; return False to stop."""
    word, _, rest = line.strip().partition(" ")
    word = word.lower()
    rest = rest.strip()
    if not word:
        return True
    if word in ("exit", "quit"):
        print()
        print("Exiting.")
        return False
    try:
        if word == "load":
            print(f"Loading world from {rest} ...")
            session.load(rest)
        elif word in ("select", "click"):
            if not session.select(parse_location(rest)):
                print("That location cannot be selected.")
            elif session.ui_state is UIState.DRAWN and session.result is not None:
                _report(session.result)
        elif word == "run":
            _report(session.run())
        elif word == "clear":
            session.clear()
        elif word == "show":
            print(session.render())
        elif word == "algorithm":
            session.algorithm = _resolve_algorithm(rest)
        elif word == "delay":
            session.delay = int(rest)
        else:
            print(_HELP)
    except (OSError, WorldFormatError, ValueError, RuntimeError) as exc:
        print(exc)
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a single search given --from and --to, or read commands from stdin."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    session = Session()
    if args.algorithm is not None:
        try:
            session.algorithm = _resolve_algorithm(args.algorithm)
        except ValueError as exc:
            parser.error(str(exc))
    if args.delay is not None:
        session.delay = args.delay

    if args.start is not None or args.end is not None:
        if args.start is None or args.end is None or not args.world:
            parser.error("--from and --to need each other and a world file")
        return _batch(session, args.world, args.start, args.end)

    print(_INTRO)
    saved = None if args.no_state else load_gui_state(args.state)
    if saved is not None:
        if args.algorithm is None and saved.algorithm in ALGORITHM_LABELS:
            session.algorithm = saved.algorithm
        if args.delay is None:
            session.delay = saved.delay

    world = _initial_world(args, saved)
    try:
        if world is None:
            raise OSError("no world files found")
        print(f"Loading world from {world} ...")
        session.load(world)
    except (OSError, WorldFormatError) as exc:
        print(f"Cannot set up initial world properly! ({exc})", file=sys.stderr)
        return 1

    for line in sys.stdin:
        if not _command(session, line):
            break

    if not args.no_state:
        save_gui_state(
            GuiState(algorithm=session.algorithm, delay=session.delay, world_file=session.filename),
            args.state,
        )
    return 0