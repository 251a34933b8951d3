"""Race between the player and step-wise depth- and breadth-first searchers."""

import enum
from collections import deque

from mazerace.cells import CellType

# Right, down, left, up.
_STEPS = ((0, 1), (1, 0), (0, -1), (-1, 0))

_OPEN = 0
_BLOCKED = 1
_DFS_MARK = 2
_BFS_MARK = 3

_MAX_TRIES = 10
_IMPASSABLE = (CellType.WALL, CellType.BORDER)
_LEFTOVER_MARKS = (CellType.VISITED_PATH, CellType.SEARCHED_PATH, CellType.CURRENT_SEARCH)
_ENDPOINTS = (CellType.START, CellType.END)


class Winner(enum.IntEnum):
    """Who reached the end cell first."""

    NONE = 0
    PLAYER = 1
    DFS = 2
    BFS = 3


class Race:
    """A race on ``maze`` in which a DFS and a BFS searcher advance one step
    at a time while the player moves by hand.

    ``dfs_running`` and ``bfs_running`` switch each searcher on; ``winner``
    becomes something other than :attr:`Winner.NONE` once the race is over.
    """

    def __init__(self, maze):
        self.maze = maze
        self.dfs_running = False
        self.bfs_running = False
        self.winner = Winner.NONE
        self.end = None
        self.stack = []
        self.queue = deque()
        self._access = []
        self.dfs_visited = []
        self.bfs_visited = []
        self._reset_grids()

    def _reset_grids(self):
        side = self.maze.side
        self._access = self._access_grid()
        self.dfs_visited = [[False] * side for _ in range(side)]
        self.bfs_visited = [[False] * side for _ in range(side)]

    def _access_grid(self):
        return [
            [_BLOCKED if cell in _IMPASSABLE else _OPEN for cell in row]
            for row in self.maze.cells
        ]

    def _far_enough(self, start, end):
        if start is None or end is None or start == end:
            return False
        distance = abs(start[0] - end[0]) + abs(start[1] - end[1])
        return distance >= self.maze.level * 1.5

    def setup(self):
        """Generate a maze whose start and end lie far apart and prepare both searchers."""
        maze = self.maze
        self._reset_grids()
        maze.generate()

        for _ in range(_MAX_TRIES):
            start = maze.find(CellType.START)
            end = maze.find(CellType.END)
            if self._far_enough(start, end):
                maze.origin = start
                break
            maze.generate()

        for row in maze.cells:
            for j, cell in enumerate(row):
                if cell in _LEFTOVER_MARKS:
                    row[j] = CellType.PATH

        maze.reset_positions()
        self.dfs_running = False
        self.bfs_running = False
        self.winner = Winner.NONE
        self.end = maze.find(CellType.END)
        self.stack = [maze.origin]
        self.queue = deque([maze.origin])
        self._access = self._access_grid()

    def _finish(self, winner):
        self.winner = winner
        self.dfs_running = False
        self.bfs_running = False

    def step_dfs(self):
        """Advance the depth-first searcher by one cell.

        Returns False once the searcher has stopped or has nowhere left to go.
        """
        if not self.dfs_running or not self.stack:
            self.dfs_running = False
            return False

        cells = self.maze.cells
        i, j = self.stack[-1]
        self.maze.dfs_pos = (i, j)

        if cells[i][j] == CellType.END:
            self._finish(Winner.DFS)
            return True

        if cells[i][j] not in _ENDPOINTS:
            cells[i][j] = CellType.CURRENT_SEARCH

        for di, dj in _STEPS:
            ni, nj = i + di, j + dj
            if (
                cells[ni][nj] not in _IMPASSABLE
                and self._access[ni][nj] != _BLOCKED
                and cells[ni][nj] != CellType.CURRENT_SEARCH
            ):
                self.stack.append((ni, nj))
                self._access[ni][nj] = _DFS_MARK
                self.dfs_visited[ni][nj] = True
                break
        else:
            pi, pj = self.stack.pop()
            self._access[pi][pj] = _OPEN
            if not self.stack:
                self.dfs_running = False
                return False
            self.maze.dfs_pos = self.stack[-1]

        return True

    def step_bfs(self):
        """Expand every cell of the breadth-first searcher's current layer.

        Returns False once the searcher has stopped or its queue ran dry.
        """
        if not self.bfs_running or not self.queue:
            self.bfs_running = False
            return False

        cells = self.maze.cells
        any_added = False

        for _ in range(len(self.queue)):
            i, j = self.queue.popleft()
            self.maze.bfs_pos = (i, j)

            if cells[i][j] == CellType.END:
                self._finish(Winner.BFS)
                return True

            self._access[i][j] = _BFS_MARK
            if cells[i][j] not in _ENDPOINTS:
                cells[i][j] = CellType.SEARCHED_PATH

            for di, dj in _STEPS:
                ni, nj = i + di, j + dj
                if (
                    cells[ni][nj] not in _IMPASSABLE
                    and self._access[ni][nj] != _BLOCKED
                    and not self.dfs_visited[ni][nj]
                    and cells[ni][nj] not in (CellType.SEARCHED_PATH, CellType.BFS_FRONTIER)
                ):
                    self.queue.append((ni, nj))
                    self._access[ni][nj] = _BFS_MARK
                    self.bfs_visited[ni][nj] = True
                    if cells[ni][nj] not in _ENDPOINTS:
                        cells[ni][nj] = CellType.BFS_FRONTIER
                    any_added = True
                    if (ni, nj) == self.end:
                        self._finish(Winner.BFS)
                        return True

        if not any_added and not self.queue:
            self.bfs_running = False
            return False
        return True

    def step(self):
        """Move each running searcher once and return the winner so far."""
        if self.winner:
            return self.winner
        if self.dfs_running:
            self.step_dfs()
        if self.winner:
            return self.winner
        if self.bfs_running:
            self.step_bfs()
        return self.winner

    def player_arrived(self):
        """End the race in the player's favour if the player stands on the end cell."""
        pi, pj = self.maze.player
        if self.maze.cells[pi][pj] == CellType.END:
            self._finish(Winner.PLAYER)
            return True
        return False