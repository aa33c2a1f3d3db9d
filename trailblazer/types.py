"""Fundamental value types: grid locations, grid edges, colours and grids."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, Iterator, Sequence

_LARGE_PRIME = 78979871
_HASH_MASK = 0x7FFFFFF


@dataclass(frozen=True, order=True)
class Loc:
    """A location in a world, ordered by row and then by column."""

    row: int
    col: int


@dataclass(frozen=True, order=True)
class GridEdge:
    """A connection between two locations, ordered by start and then by end."""

    start: Loc
    end: Loc


class Color(IntEnum):
    """Colour of a cell while a search runs."""

    UNCOLORED = 0
    WHITE = 1
    GRAY = 2
    YELLOW = 3
    GREEN = 4
    RED = 5


class Grid:
    """A rectangular, mutable two-dimensional array of values."""

    def __init__(self, rows: int = 0, cols: int = 0, fill: Any = 0.0) -> None:
        self._fill = fill
        self._rows = 0
        self._cols = 0
        self._cells: list[list[Any]] = []
        self.resize(rows, cols)

    @property
    def num_rows(self) -> int:
        return self._rows

    @property
    def num_cols(self) -> int:
        return self._cols

    def in_bounds(self, row: int, col: int) -> bool:
        """Return True if (row, col) lies inside the grid."""
        return 0 <= row < self._rows and 0 <= col < self._cols

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(
                f"grid location ({row}, {col}) is outside a "
                f"{self._rows}x{self._cols} grid"
            )

    def get(self, row: int, col: int) -> Any:
        """Return the value stored at (row, col)."""
        self._check(row, col)
        return self._cells[row][col]

    def set(self, row: int, col: int, value: Any) -> None:
        """Store value at (row, col)."""
        self._check(row, col)
        self._cells[row][col] = value

    def resize(self, rows: int, cols: int) -> None:
        """Change the dimensions; every cell is reset to the fill value."""
        if rows < 0 or cols < 0:
            raise ValueError(f"grid dimensions must be non-negative, got {rows}x{cols}")
        self._rows = rows
        self._cols = cols
        self._cells = [[self._fill] * cols for _ in range(rows)]

    @staticmethod
    def _key(key: Loc | tuple[int, int]) -> tuple[int, int]:
        if isinstance(key, Loc):
            return key.row, key.col
        row, col = key
        return row, col

    def __getitem__(self, key: Loc | tuple[int, int]) -> Any:
        return self.get(*self._key(key))

    def __setitem__(self, key: Loc | tuple[int, int], value: Any) -> None:
        self.set(*self._key(key), value)

    def cells(self) -> Iterator[tuple[Loc, Any]]:
        """Yield every location with its value, row by row."""
        for r, row in enumerate(self._cells):
            for c, value in enumerate(row):
                yield Loc(r, c), value

    def to_rows(self) -> list[list[Any]]:
        """Return a copy of the contents as a list of rows."""
        return [list(row) for row in self._cells]

    def copy(self) -> "Grid":
        """Return an independent copy of this grid."""
        other = Grid(fill=self._fill)
        other._rows = self._rows
        other._cols = self._cols
        other._cells = self.to_rows()
        return other

    def __repr__(self) -> str:
        return f"Grid({self._rows}x{self._cols})"


def grid_from_rows(rows: Iterable[Sequence[Any]]) -> Grid:
    """Build a grid from a sequence of equally long rows."""
    data = [list(row) for row in rows]
    width = len(data[0]) if data else 0
    if any(len(row) != width for row in data):
        raise ValueError("all rows of a grid must have the same length")
    grid = Grid(len(data), width)
    for r, row in enumerate(data):
        for c, value in enumerate(row):
            grid.set(r, c, value)
    return grid


def make_loc(row: int, col: int) -> Loc:
    """Return the location at (row, col)."""
    return Loc(row, col)


def make_edge(start: Loc, end: Loc) -> GridEdge:
    """Return the edge from start to end."""
    return GridEdge(start, end)


def hash_code(item: Loc | GridEdge) -> int:
    """Return the non-negative hash code of a location or an edge."""
    if isinstance(item, Loc):
        return (item.row + _LARGE_PRIME * item.col) & _HASH_MASK
    if isinstance(item, GridEdge):
        return (hash_code(item.start) + _LARGE_PRIME * hash_code(item.end)) & _HASH_MASK
    raise TypeError(f"cannot compute a hash code for {type(item).__name__}")