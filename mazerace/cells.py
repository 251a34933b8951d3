"""Cell values used on the maze grid."""

from enum import IntEnum


class CellType(IntEnum):
    """Meaning of each value stored in a maze cell."""

    BORDER = -1
    WALL = 0
    EMPTY_CELL = 1
    PENDING_WALL = 2
    PATH = 3
    OPEN_WALL = 4
    START = 5
    END = 6
    VISITED_PATH = 7
    SEARCHED_PATH = 8
    CURRENT_SEARCH = 9
    BFS_FRONTIER = 10


_WALKABLE = frozenset(
    {
        CellType.PATH,
        CellType.OPEN_WALL,
        CellType.START,
        CellType.END,
        CellType.VISITED_PATH,
        CellType.SEARCHED_PATH,
        CellType.CURRENT_SEARCH,
        CellType.BFS_FRONTIER,
    }
)


def is_walkable(value):
    """Return True if a cell holding ``value`` can be stepped on."""
    return value in _WALKABLE