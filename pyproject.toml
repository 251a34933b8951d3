[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mazerace"
version = "0.1.0"
description = "Randomly generated mazes to walk through, watch solved, or race against depth-first and breadth-first search."
requires-python = ">=3.10"
dependencies = []
keywords = ["maze", "game", "puzzle", "dfs", "bfs", "search", "tkinter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mazerace = "mazerace.app:main"

[tool.hatch.build.targets.wheel]
packages = ["mazerace"]

[tool.pytest.ini_options]
addopts = "-ra"
