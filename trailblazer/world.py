"""World files, display colours, animation delays and saved interface state."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from enum import Enum
from itertools import pairwise
from pathlib import Path
from typing import Callable, Iterable, Optional, TextIO, Union

from .adapter import AlgorithmType
from .costs import (
    MAZE_FLOOR,
    MAZE_WALL,
    maze_cost,
    maze_heuristic,
    terrain_cost,
    terrain_heuristic,
)
from .types import Color, Grid, Loc

CostFunction = Callable[[Loc, Loc, Grid], float]
PathLike = Union[str, "os.PathLike[str]"]

MIN_DELAY = 0
MAX_DELAY = 2000

MAX_ROWS = 400
MAX_COLS = 400

GUI_STATE_FILE = "trailblazer-gui-state.sav"

ALGORITHM_LABELS: dict[str, AlgorithmType] = {
    "Depth-first Search": AlgorithmType.DFS,
    "Breadth-first Search": AlgorithmType.BFS,
    "Dijkstra's Algorithm": AlgorithmType.DIJKSTRA,
    "A* Search": AlgorithmType.A_STAR,
}

# RGB multipliers indexed by Color.
_COLOR_MULTIPLIERS: dict[Color, tuple[int, int, int]] = {
    Color.UNCOLORED: (0, 0, 0),
    Color.WHITE: (255, 255, 255),
    Color.GRAY: (192, 192, 192),
    Color.YELLOW: (255, 255, 0),
    Color.GREEN: (0, 255, 0),
    Color.RED: (255, 0, 0),
}

# Upper bounds (in percent of the slider range) and the delay they map to.
_DELAY_STEPS: tuple[tuple[float, int], ...] = (
    (10, MAX_DELAY // 1000),
    (20, MAX_DELAY // 500),
    (30, MAX_DELAY // 200),
    (40, MAX_DELAY // 100),
    (50, MAX_DELAY // 50),
    (60, MAX_DELAY // 25),
    (70, MAX_DELAY // 10),
    (80, MAX_DELAY // 5),
    (90, MAX_DELAY // 2),
)


class WorldType(Enum):
    """The kind of world loaded."""

    TERRAIN = "terrain"
    MAZE = "maze"


class UIState(Enum):
    """Interaction state: nothing selected, one location selected, or path drawn."""

    FRESH = "fresh"
    MARKED = "marked"
    DRAWN = "drawn"


class WorldFormatError(ValueError):
    """A world file is malformed."""


@dataclass
class GuiState:
    """Remembered interface choices: algorithm label, delay slider and world file."""

    algorithm: str = "Depth-first Search"
    delay: int = MIN_DELAY
    world_file: str = ""


def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise WorldFormatError(f"world file contains an invalid {what}: {token!r}") from None


def _parse_value(token: str, row: int, num_cols: int) -> float:
    try:
        value = float(token)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        raise WorldFormatError(
            f"Illegal input file format; row #{row + 1} does not contain "
            f"{num_cols} valid numbers"
        )
    return value


def read_world(stream: TextIO) -> tuple[Grid, WorldType]:
    """Read a world description: a type word, its size, then one value per cell."""
    tokens: Iterable[str] = iter(stream.read().split())
    type_word = next(tokens, None)
    try:
        world_type = WorldType(type_word)
    except ValueError:
        raise WorldFormatError(
            "world file does not contain type (terrain/maze) as first line."
        ) from None

    rows_token = next(tokens, None)
    cols_token = next(tokens, None)
    if rows_token is None or cols_token is None:
        raise WorldFormatError("world file does not contain its number of rows/cols")
    num_rows = _parse_int(rows_token, "number of rows")
    num_cols = _parse_int(cols_token, "number of columns")
    if num_rows <= 0 or num_cols <= 0 or num_rows >= MAX_ROWS or num_cols >= MAX_COLS:
        raise WorldFormatError(
            f"world file contains invalid number of rows/cols: {num_rows},{num_cols}"
        )

    world = Grid(num_rows, num_cols)
    for row in range(num_rows):
        for col in range(num_cols):
            token = next(tokens, None)
            if token is None:
                raise WorldFormatError(
                    f"Illegal input file format; row #{row + 1} does not contain "
                    f"{num_cols} valid numbers"
                )
            value = _parse_value(token, row, num_cols)
            if world_type is WorldType.MAZE:
                if value not in (MAZE_WALL, MAZE_FLOOR):
                    raise WorldFormatError(
                        f"world file contains invalid square value of {value:g}, "
                        f"must be {MAZE_FLOOR:g} or {MAZE_WALL:g}"
                    )
            elif value < 0.0 or value > 1.0:
                raise WorldFormatError(
                    f"world file contains invalid terrain value of {value:g}, "
                    "must be 0.0 - 1.0"
                )
            world.set(row, col, value)
    return world, world_type


def load_world(path: PathLike) -> tuple[Grid, WorldType]:
    """Read the world stored in the file at path."""
    with open(path, encoding="utf-8") as stream:
        return read_world(stream)


def find_world_files(directory: PathLike = ".", prefix: str = "") -> list[str]:
    """Names of .txt files in directory starting with prefix, case-insensitively, sorted."""
    wanted = prefix.lower()
    return sorted(
        name
        for name in os.listdir(directory)
        if name.lower().startswith(wanted) and name.lower().endswith(".txt")
    )


def value_to_color(value: float, color: Color) -> str:
    """The "#rrggbb" colour used to draw a cell of the given value and highlight."""
    if color is not Color.WHITE:
        # Remap [0, 1] to [0.2, 1] so highlighted cells stay visible.
        value = 0.8 * value + 0.2
    channels = (int(value * multiplier) for multiplier in _COLOR_MULTIPLIERS[Color(color)])
    return "#" + "".join(f"{channel:02x}" for channel in channels)


def animation_delay(slider_value: int, forbid_zero: bool = False) -> int:
    """Map a delay slider position to milliseconds on a gentler scale."""
    percent = 100.0 * slider_value / MAX_DELAY
    if percent == 0.0:
        return 1 if forbid_zero else 0
    for bound, delay in _DELAY_STEPS:
        if percent <= bound:
            return delay
    return MAX_DELAY


def path_cost(path: Iterable[Loc], world: Grid, cost_fn: CostFunction) -> float:
    """Sum of the step costs along path."""
    return sum((cost_fn(a, b, world) for a, b in pairwise(path)), 0.0)


def algorithm_from_label(label: str) -> AlgorithmType:
    """The algorithm named by a menu label."""
    try:
        return ALGORITHM_LABELS[label]
    except KeyError:
        raise ValueError("Invalid algorithm provided.") from None


def cost_functions(world_type: WorldType) -> tuple[CostFunction, CostFunction]:
    """The cost function and heuristic suited to a world type."""
    if world_type is WorldType.TERRAIN:
        return terrain_cost, terrain_heuristic
    if world_type is WorldType.MAZE:
        return maze_cost, maze_heuristic
    raise ValueError("Unknown world type.")


def load_gui_state(path: PathLike = GUI_STATE_FILE) -> Optional[GuiState]:
    """Read saved interface state, deleting the file; None if missing or corrupt."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return None
    lines = text.splitlines()
    if len(lines) < 3:
        return None
    algorithm, delay_text, world_file = lines[:3]
    try:
        delay = int(delay_text.strip())
    except ValueError:
        return None
    # Removed so that a world that crashes on load is not reloaded next time.
    Path(path).unlink(missing_ok=True)
    return GuiState(algorithm=algorithm, delay=delay, world_file=world_file)


def save_gui_state(state: GuiState, path: PathLike = GUI_STATE_FILE) -> None:
    """Write interface state, one item per line."""
    Path(path).write_text(
        f"{state.algorithm}\n{state.delay}\n{state.world_file}\n", encoding="utf-8"
    )