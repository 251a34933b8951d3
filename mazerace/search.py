"""Path searches over a generated maze.

Each search is a generator that changes the maze's cells as it goes and
yields a :class:`SearchEvent` whenever the board should be redrawn or the
search has finished. The generator's return value tells whether the end
cell was reached.
"""

import enum
import threading
import time
from collections import deque

from mazerace.cells import CellType

# Right, down, left, up.
_STEPS = ((0, 1), (1, 0), (0, -1), (-1, 0))

_OPEN = 0
_BLOCKED = 1
_SEEN = 2


class SearchEvent(enum.Enum):
    """What a running search reports to whoever drives it."""

    MAZE_UPDATED = "maze_updated"
    SEARCH_OVER = "search_over"


class SearchControl:
    """Pause, stop and pacing settings shared with a running search.

    ``delay`` is the pause, in seconds, after each cell a search visits.
    """

    def __init__(self, delay=0.0):
        self.delay = delay
        self.paused = False
        self.exit = False
        self._changed = threading.Condition()

    def set_paused(self, state):
        with self._changed:
            self.paused = bool(state)
            self._changed.notify_all()

    def set_exit(self, state):
        with self._changed:
            self.exit = bool(state)
            self._changed.notify_all()

    def reset(self):
        """Clear both the paused and the exit flags."""
        with self._changed:
            self.paused = False
            self.exit = False
            self._changed.notify_all()

    def wait_while_paused(self):
        """Block while paused, returning at once when asked to exit."""
        with self._changed:
            while self.paused and not self.exit:
                self._changed.wait(0.1)

    def _pace(self):
        if self.delay > 0:
            time.sleep(self.delay)


def _access_grid(cells):
    return [
        [_BLOCKED if cell in (CellType.WALL, CellType.BORDER) else _OPEN for cell in row]
        for row in cells
    ]


def solve(maze):
    """Recursive-style depth-first search from the player to the end cell.

    On success the route is painted as visited path, with the end cell kept.
    """
    cells = maze.cells
    access = _access_grid(cells)
    end = maze.find(CellType.END)
    start = maze.player
    found = False

    def brush(route):
        for i, j in route:
            cells[i][j] = CellType.VISITED_PATH
        li, lj = route[-1]
        cells[li][lj] = CellType.END

    frames = [[start, 0]]
    cells[start[0]][start[1]] = CellType.CURRENT_SEARCH
    yield SearchEvent.MAZE_UPDATED

    if start == end:
        brush([start])
        found = True
        frames.clear()

    while frames:
        frame = frames[-1]
        (i, j), direction = frame
        if direction < len(_STEPS):
            frame[1] += 1
            di, dj = _STEPS[direction]
            ni, nj = i + di, j + dj
            if access[ni][nj] == _OPEN:
                access[ni][nj] = _SEEN
                frames.append([(ni, nj), 0])
                cells[ni][nj] = CellType.CURRENT_SEARCH
                yield SearchEvent.MAZE_UPDATED
                if (ni, nj) == end:
                    brush([pos for pos, _ in frames])
                    found = True
                    break
            continue

        frames.pop()
        if cells[i][j] == CellType.CURRENT_SEARCH:
            cells[i][j] = CellType.SEARCHED_PATH
        if frames:
            if cells[i][j] not in (CellType.VISITED_PATH, CellType.END):
                cells[i][j] = CellType.SEARCHED_PATH
                yield SearchEvent.MAZE_UPDATED
            access[i][j] = _OPEN

    yield SearchEvent.SEARCH_OVER
    return found


def dfs_stack(maze, control):
    """Depth-first search with an explicit stack, honouring ``control``."""
    control.reset()
    cells = maze.cells
    access = _access_grid(cells)
    end = maze.find(CellType.END)
    end_i, end_j = end if end is not None else (None, None)
    start = maze.player

    stack = [start]
    access[start[0]][start[1]] = _SEEN

    while stack and not control.exit:
        control.wait_while_paused()
        if control.exit:
            yield SearchEvent.SEARCH_OVER
            return False

        i, j = stack[-1]
        cells[i][j] = CellType.CURRENT_SEARCH
        yield SearchEvent.MAZE_UPDATED
        control._pace()

        if (i, j) == end:
            for pi, pj in stack:
                cells[pi][pj] = CellType.VISITED_PATH
            yield SearchEvent.MAZE_UPDATED
            yield SearchEvent.SEARCH_OVER
            return True

        for di, dj in _STEPS:
            ni, nj = i + di, j + dj
            if access[ni][nj] == _OPEN:
                stack.append((ni, nj))
                access[ni][nj] = _SEEN
                break
        else:
            bi, bj = stack.pop()
            if cells[bi][bj] == CellType.CURRENT_SEARCH and bi != end_i and bj != end_j:
                cells[bi][bj] = CellType.SEARCHED_PATH
                yield SearchEvent.MAZE_UPDATED

    yield SearchEvent.SEARCH_OVER
    return False


def bfs_queue(maze, control):
    """Breadth-first search with a queue, honouring ``control``."""
    control.reset()
    cells = maze.cells
    access = _access_grid(cells)
    end = maze.find(CellType.END)
    start = maze.player

    queue = deque([start])
    came_from = {start: None}
    access[start[0]][start[1]] = _SEEN
    reached = None

    while queue and not control.exit:
        control.wait_while_paused()
        if control.exit:
            yield SearchEvent.SEARCH_OVER
            return False

        current = queue.popleft()
        i, j = current
        cells[i][j] = CellType.BFS_FRONTIER
        yield SearchEvent.MAZE_UPDATED
        control._pace()

        if current == end:
            reached = current
            break

        for di, dj in _STEPS:
            ni, nj = i + di, j + dj
            if access[ni][nj] == _OPEN:
                queue.append((ni, nj))
                came_from[(ni, nj)] = current
                access[ni][nj] = _SEEN
                if cells[ni][nj] != CellType.END:
                    cells[ni][nj] = CellType.SEARCHED_PATH
                yield SearchEvent.MAZE_UPDATED

    if reached is not None:
        pos = reached
        while pos is not None:
            pi, pj = pos
            if cells[pi][pj] not in (CellType.START, CellType.END):
                cells[pi][pj] = CellType.VISITED_PATH
            pos = came_from[pos]
        yield SearchEvent.MAZE_UPDATED

    yield SearchEvent.SEARCH_OVER
    return reached is not None


def run_search(search):
    """Drive a search generator to completion and return whether it succeeded."""
    while True:
        try:
            next(search)
        except StopIteration as stop:
            return bool(stop.value)