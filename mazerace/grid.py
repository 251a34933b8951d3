"""Maze grid and its randomised generation."""

import bisect
import random

from mazerace.cells import CellType

_NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1))

# For a pending wall: (side that must already be reached, side to carve into),
# checked in this order.
_CARVE_ORDER = (
    ((-1, 0), (1, 0)),
    ((0, -1), (0, 1)),
    ((1, 0), (-1, 0)),
    ((0, 1), (0, -1)),
)

_REACHED = (CellType.PATH, CellType.START)
_ROUTE = (CellType.PATH, CellType.OPEN_WALL)


class Maze:
    """A square maze of ``level`` x ``level`` cells laid out on a
    ``(2 * level + 1)``-wide grid of walls and passages.

    Positions are ``(i, j)`` tuples indexing ``cells[i][j]``.
    """

    def __init__(self, level, rng=None):
        if level < 1:
            raise ValueError(f"maze level must be at least 1, got {level}")
        self.level = level
        self._rng = rng if rng is not None else random.Random()
        self.origin = (1, 1)
        self.player = self.origin
        self.dfs_pos = self.origin
        self.bfs_pos = self.origin
        self.cells = self._base()

    @property
    def side(self):
        """Width and height of the grid."""
        return self.level * 2 + 1

    def __getitem__(self, index):
        return self.cells[index]

    def _base(self):
        last = self.side - 1
        return [
            [
                CellType.BORDER
                if i in (0, last) or j in (0, last)
                else CellType.EMPTY_CELL
                if i % 2 and j % 2
                else CellType.WALL
                for j in range(self.side)
            ]
            for i in range(self.side)
        ]

    def generate(self):
        """Carve a new maze from the current origin and mark start and end."""
        self.player = self.origin
        self.cells = cells = self._base()
        pending = []

        def mark_pending(i, j):
            for di, dj in _NEIGHBOURS:
                ni, nj = i + di, j + dj
                if cells[ni][nj] == CellType.WALL:
                    cells[ni][nj] = CellType.PENDING_WALL
                    bisect.insort(pending, (ni, nj))

        oi, oj = self.origin
        cells[oi][oj] = CellType.START
        mark_pending(oi, oj)

        while pending:
            i, j = pending.pop(self._rng.randrange(len(pending)))
            self._settle_wall(i, j, mark_pending)

        start = self.find(CellType.START)
        if start is None:
            start = (1, 1)
            cells[1][1] = CellType.START
        self.player = start

        end = self._farthest(start, self.level) or self._farthest(start, 0)
        if end is not None:
            ei, ej = end
            cells[ei][ej] = CellType.END

    def _settle_wall(self, i, j, mark_pending):
        cells = self.cells
        for (fi, fj), (ti, tj) in _CARVE_ORDER:
            if cells[i + fi][j + fj] in _REACHED and cells[i + ti][j + tj] == CellType.EMPTY_CELL:
                target = (i + ti, j + tj)
                cells[i][j] = CellType.OPEN_WALL
                cells[target[0]][target[1]] = CellType.PATH
                mark_pending(*target)
                self.origin = target
                return
        cells[i][j] = CellType.WALL

    def _farthest(self, start, minimum):
        si, sj = start
        best, best_dist = None, 0
        for i in range(1, self.level * 2):
            row = self.cells[i]
            for j in range(1, self.level * 2):
                if (i, j) == start or row[j] not in _ROUTE:
                    continue
                dist = abs(i - si) + abs(j - sj)
                if dist > best_dist and dist >= minimum:
                    best, best_dist = (i, j), dist
        return best

    def rebuild(self):
        """Generate a fresh maze starting again from the top-left cell."""
        self.origin = (1, 1)
        self.generate()

    def find(self, value):
        """Return the first position, row by row, holding ``value``, or None."""
        return next(
            (
                (i, j)
                for i, row in enumerate(self.cells)
                for j, cell in enumerate(row)
                if cell == value
            ),
            None,
        )

    def reset_positions(self):
        """Put the player and both searchers back on the origin."""
        self.player = self.origin
        self.dfs_pos = self.origin
        self.bfs_pos = self.origin