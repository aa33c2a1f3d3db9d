"""Path finding through maze and terrain worlds with DFS, BFS, Dijkstra's algorithm and A*."""

__version__ = "0.1.0"