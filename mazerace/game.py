"""State of one playing session: timer, score, player moves and races."""

import enum
import random

from mazerace.cells import CellType, is_walkable
from mazerace.grid import Maze
from mazerace.race import Race, Winner
from mazerace.search import SearchControl

GAME_SECONDS = 200
DEFAULT_LEVEL = 20
LEVELS = (5, 10, 20, 40)

_ENDPOINTS = (CellType.START, CellType.END)


class Direction(enum.Enum):
    """A player move as a change of ``(i, j)`` grid position."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)


_KEYS = {
    "w": Direction.UP,
    "i": Direction.UP,
    "s": Direction.DOWN,
    "k": Direction.DOWN,
    "a": Direction.LEFT,
    "j": Direction.LEFT,
    "d": Direction.RIGHT,
    "l": Direction.RIGHT,
}


def direction_for_key(key):
    """Map a WASD or IJKL key, in either case, to a direction, else None."""
    return _KEYS.get(key.lower()) if key else None


class GameSession:
    """Timed play on a maze, with scoring, searches and races.

    ``painting``, ``timing`` and ``keyboard`` tell whether the board is shown,
    the clock runs and key presses move the player. ``can_pause`` tells
    whether the next :meth:`toggle_pause` pauses rather than resumes.
    """

    def __init__(self, level=DEFAULT_LEVEL, rng=None):
        self._rng = rng if rng is not None else random.Random()
        self.maze = Maze(level, self._rng)
        self.maze.generate()
        self.control = SearchControl()
        self.painting = False
        self.timing = False
        self.keyboard = False
        self.can_pause = False
        self.grade = 0
        self.time_left = 0
        self.compete_mode = False
        self.race = None

    @property
    def progress(self):
        """Value of the time bar, from 0 to 100."""
        return self.time_left // 2

    def start(self):
        """Start a timed game."""
        self.painting = True
        self.timing = True
        self.keyboard = True
        self.time_left = GAME_SECONDS

    def toggle_pause(self):
        """Pause or resume the clock and any search; return True if now paused."""
        if self.can_pause:
            self.timing = False
            self.keyboard = False
            self.can_pause = False
            self.control.set_paused(True)
            return True
        self.timing = True
        self.keyboard = True
        self.can_pause = True
        self.control.set_paused(False)
        return False

    def end(self):
        """Abort the game, stop any search and lay out a fresh maze."""
        self.control.set_exit(True)
        self.timing = False
        self.painting = False
        self.keyboard = False
        self.can_pause = False
        self.time_left = 0
        self.grade = 0
        self.maze.rebuild()

    def tick(self):
        """Advance the clock by one second.

        Returns the final score when time has run out, otherwise None.
        """
        if not self.timing:
            return None
        if self.time_left != 0:
            self.time_left -= 1
            return None
        self.timing = False
        self.keyboard = False
        self.painting = False
        final = self.grade
        self.grade = 0
        return final

    def move_player(self, direction):
        """Move the player one cell if the way is open.

        ``direction`` may be None, in which case only the current cell is
        marked. Returns True if the player stands on the end cell.
        """
        if not self.keyboard:
            return False
        maze = self.maze
        if direction is not None:
            di, dj = direction.value
            i, j = maze.player
            if is_walkable(maze[i + di][j + dj]):
                maze.player = (i + di, j + dj)

        pi, pj = maze.player
        if maze[pi][pj] not in _ENDPOINTS:
            maze[pi][pj] = CellType.VISITED_PATH
        if maze[pi][pj] != CellType.END:
            return False

        if self.compete_mode:
            if self.race is not None:
                self.race.player_arrived()
            self.finish_race(Winner.PLAYER)
            return True

        maze.generate()
        self.grade += maze.level ** 2
        return True

    def set_level(self, level):
        """Replace the maze with a freshly generated one of ``level`` cells."""
        self.maze = Maze(level, self._rng)
        self.maze.generate()
        self.race = None

    def award_search(self):
        """Score a finished search, lay out a new maze and return the score."""
        self.maze.generate()
        self.grade += self.maze.level ** 2
        return self.grade

    def start_race(self):
        """Enter race mode with the depth-first searcher running; return the race.

        The breadth-first searcher is left for the caller to switch on.
        """
        if self.compete_mode and self.race is not None:
            return self.race
        self.compete_mode = True
        self.painting = True
        self.keyboard = True
        self.race = Race(self.maze)
        self.race.setup()
        self.race.dfs_running = True
        return self.race

    def stop_race(self):
        """Leave race mode and lay out a new maze."""
        self.compete_mode = False
        if self.race is not None:
            self.race.dfs_running = False
            self.race.bfs_running = False
        self.maze.generate()

    def finish_race(self, winner):
        """Close the race won by ``winner`` and return the points earned.

        The board is left as it is so that the final state can be shown.
        """
        winner = Winner(winner)
        if self.race is not None:
            self.race.dfs_running = False
            self.race.bfs_running = False
            if not self.race.winner:
                self.race.winner = winner
        multiplier = 1 if winner in (Winner.PLAYER, Winner.DFS, Winner.BFS) else 0
        earned = self.maze.level ** multiplier
        self.grade += earned
        self.compete_mode = False
        return earned