[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trailblazer"
version = "0.1.0"
description = "Path finding through maze and terrain worlds with DFS, BFS, Dijkstra's algorithm and A*"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "path-finding", "dijkstra", "a-star", "bfs", "dfs", "maze", "terrain"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Intended Audience :: Education",
    "Environment :: Console",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
trailblazer = "trailblazer.app:main"

[tool.hatch.build.targets.wheel]
packages = ["trailblazer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
