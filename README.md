# trailblazer

Finds paths through grid worlds, either mazes or rocky terrains, with
depth-first search, breadth-first search, Dijkstra's algorithm or A* search.

A world is turned into a graph: every cell becomes a vertex named like
`r08c17` (zero-padded to the size of the world), and every move to one of
its eight neighbours with a finite cost becomes an arc. In a maze only
horizontal and vertical steps between floor cells are allowed, each costing
1. In a terrain every step is allowed, and it costs its straight-line
distance (1 or about 1.414) plus 100 times the change in height.

## World files

A world file is plain text, read as whitespace-separated words. The first
word is `maze` or `terrain`, then come the number of rows and columns (each
from 1 to 399), then one number per cell:

```
maze
3 3
1 1 1
0 0 1
1 1 1
```

Maze cells are `0` (wall) or `1` (floor). Terrain cells are heights from
`0.0` to `1.0`. A malformed file raises `trailblazer.world.WorldFormatError`
from `read_world` and `load_world`.

## Command line

```
pip install .
trailblazer maze.txt --from r0c0 --to 2,0 --algorithm astar
```

With `--from` and `--to` the command runs one search and prints the path
length, the path cost, any warnings, the number of locations visited and a
text drawing of the world. Locations may be written as `r08c17`, `8,17` or
`8 17`. `--algorithm` takes `dfs` (the default), `bfs`, `dijkstra`,
`astar` or one of the labels `Depth-first Search`, `Breadth-first Search`,
`Dijkstra's Algorithm`, `A* Search`.

Without `--from` and `--to` the command loads a world and then reads
commands from standard input, one per line:

```
load FILE        load another world file
select LOC       select a cell; the second selection runs a search
run              repeat the search between the selected cells
clear            forget the selections, colouring and path
show             draw the world as text
algorithm NAME   choose the search algorithm
delay N          set the animation delay slider (0 to 2000)
exit             stop
```

If no world file is given, the world named in the saved state is used, or
else the first `maze*.txt` or `terrain*.txt` file in `--directory`. The
chosen algorithm, delay and world file are saved to
`trailblazer-gui-state.sav` (or the file given with `--state`) on exit and
read back, and the file removed, on the next start; `--no-state` turns this
off. Run `trailblazer --help` for all options.

In the text drawing `S` and `E` are the selected cells, `*` marks the path,
`+`, `-` and `~` mark cells the search coloured green, gray and yellow,
maze cells are `#` (wall) or `.` (floor), and terrain cells show their
height as a digit from 0 to 9.

## Library

```python
from trailblazer.types import grid_from_rows, make_loc
from trailblazer.costs import maze_cost, maze_heuristic
from trailblazer.adapter import AlgorithmType, shortest_path

world = grid_from_rows([
    [1, 1, 1],
    [0, 0, 1],
    [1, 1, 1],
])
path = shortest_path(
    make_loc(0, 0), make_loc(2, 0), world,
    maze_cost, maze_heuristic, AlgorithmType.A_STAR,
)
```

`path` is the list of `Loc` values from start to end, or an empty list if
the end cannot be reached; a start or end outside the world raises
`ValueError`. The graph built for a world is cached per `Grid` object, so
call `flush_world_cache()` after changing a grid in place.

The searches in `trailblazer.search` (`depth_first_search`,
`breadth_first_search`, `dijkstras_algorithm`, `a_star`) can also be run
directly on a `trailblazer.graph.BasicGraph` of your own, with vertices given
as nodes or by name. `trailblazer.adapter.create_maze(rows, cols)` returns the
passages of a random maze built with Kruskal's algorithm as a set of
`GridEdge` values.

## What it does not do

There is no graphical window: worlds are drawn as text and cells are
selected by typing their locations. The command does not generate random
worlds; it only loads world files.

## Tests

```
pip install .[test]
pytest
```