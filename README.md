# mazerace

A small maze game. Every maze is generated at random, with a start cell and
an end cell placed as far apart as the maze allows. You can walk the maze
yourself against the clock, watch it being searched step by step, or race two
search algorithms to the exit.

## Installing

    pip install .

The game window uses Tkinter from the standard library; nothing else is
needed to play.

## Playing

    mazerace

The high-score table is kept in `ranking.json` in the current directory; to
use another file, run

    mazerace --ranking scores.json

The menu offers:

- **开始游戏** (start) – the playing board. Press the start button for a timed
  game of 200 seconds. Move with `W`/`A`/`S`/`D` (or `I`/`J`/`K`/`L`). Each
  time you reach the end cell a new maze is built and you score the square of
  the maze's level. The game can be paused and ended from its buttons; the
  level (5, 10, 20 or 40, default 20) is picked in the settings.
- **人机竞速** (race) – the same board with a race button. You, a depth-first
  search and a breadth-first search start from the same cell; the
  depth-first search moves one cell every half second, and the breadth-first
  search, switched on a second later, expands one layer each time. Whoever
  reaches the end first wins, and the winner earns points equal to the
  maze's level. If your score is above zero you are asked for a name to save
  it under.
- **排行榜** (ranking) – the ten best scores, highest first.
- **退出** – close the game.

On the board, the solve button (available once a timed game has started)
shows a depth-first search working through the maze; the DFS and BFS buttons
show a stack-based depth-first search and a queue-based breadth-first search.
When a search finishes, a new maze is built and the square of the level is
added to the score. Leaving the board for the menu offers to save a score
above zero.

## Using the library

The pieces of the game can be used without the window:

    import random
    from mazerace.grid import Maze
    from mazerace.search import bfs_queue, SearchControl, run_search

    maze = Maze(10, random.Random(7))
    maze.generate()
    found = run_search(bfs_queue(maze, SearchControl()))

- `mazerace.cells` – the `CellType` values stored in the grid and
  `is_walkable`.
- `mazerace.grid.Maze` – the grid; `generate()` carves a maze and marks the
  start and end, `find(value)` locates a cell.
- `mazerace.search` – the generators `solve`, `dfs_stack` and `bfs_queue`,
  which yield `SearchEvent` values as they change the grid; `SearchControl`
  pauses, stops and paces them, and `run_search` drives one to the end.
- `mazerace.race.Race` – steps the two searchers against each other and
  records the `Winner`.
- `mazerace.game.GameSession` – timer, score, player moves and races, without
  any window.
- `mazerace.ranking.Ranking` – reads and writes the JSON score table.

## Running the tests

    pip install ".[test]"
    pytest