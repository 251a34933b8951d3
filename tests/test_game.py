import random

import pytest

from mazerace.cells import CellType, is_walkable
from mazerace.game import GAME_SECONDS, Direction, GameSession, direction_for_key
from mazerace.race import Winner


def _session(level=5, seed=1):
    return GameSession(level, random.Random(seed))


def _approach(maze, target):
    """Find a walkable neighbour of ``target`` and the direction leading to it."""
    ti, tj = target
    for direction in Direction:
        di, dj = direction.value
        ni, nj = ti - di, tj - dj
        if is_walkable(maze[ni][nj]):
            return (ni, nj), direction
    raise AssertionError("no open neighbour")


@pytest.mark.parametrize(
    "key, expected",
    [
        ("w", Direction.UP),
        ("I", Direction.UP),
        ("s", Direction.DOWN),
        ("k", Direction.DOWN),
        ("A", Direction.LEFT),
        ("j", Direction.LEFT),
        ("d", Direction.RIGHT),
        ("L", Direction.RIGHT),
        ("x", None),
        ("", None),
    ],
)
def test_direction_for_key(key, expected):
    assert direction_for_key(key) is expected


def test_new_session_has_maze_with_start_and_end():
    session = _session()
    assert session.grade == 0
    assert session.keyboard is False
    assert session.maze.find(CellType.START) == session.maze.player
    assert session.maze.find(CellType.END) is not None


def test_start_sets_clock():
    session = _session()
    session.start()
    assert session.time_left == GAME_SECONDS
    assert session.progress == 100
    assert session.timing and session.keyboard and session.painting


def test_tick_counts_down_and_ends():
    session = _session()
    session.start()
    assert session.tick() is None
    assert session.time_left == GAME_SECONDS - 1
    session.time_left = 1
    session.grade = 42
    assert session.tick() is None
    assert session.time_left == 0
    assert session.tick() == 42
    assert session.grade == 0
    assert session.timing is False
    assert session.keyboard is False


def test_tick_does_nothing_when_clock_stopped():
    session = _session()
    session.time_left = 10
    assert session.tick() is None
    assert session.time_left == 10


def test_toggle_pause_alternates():
    session = _session()
    session.start()
    assert session.toggle_pause() is False
    assert session.control.paused is False
    assert session.toggle_pause() is True
    assert session.control.paused is True
    assert session.keyboard is False
    assert session.timing is False
    assert session.toggle_pause() is False
    assert session.keyboard is True


def test_move_ignored_without_keyboard():
    session = _session()
    before = session.maze.player
    for direction in Direction:
        assert session.move_player(direction) is False
    assert session.maze.player == before


def test_move_blocked_by_wall():
    session = _session()
    session.start()
    maze = session.maze
    i, j = maze.player
    blocked = next(
        d for d in Direction if not is_walkable(maze[i + d.value[0]][j + d.value[1]])
    )
    session.move_player(blocked)
    assert maze.player == (i, j)
    assert maze[i][j] == CellType.START


def test_move_marks_visited_path():
    session = _session()
    session.start()
    maze = session.maze
    i, j = maze.player
    open_dir = next(
        d for d in Direction if is_walkable(maze[i + d.value[0]][j + d.value[1]])
    )
    di, dj = open_dir.value
    reached = session.move_player(open_dir)
    assert maze.player == (i + di, j + dj)
    if not reached:
        assert maze[i + di][j + dj] == CellType.VISITED_PATH


def test_reaching_end_scores_and_regenerates():
    session = _session(level=5, seed=3)
    session.start()
    maze = session.maze
    end = maze.find(CellType.END)
    neighbour, direction = _approach(maze, end)
    maze.player = neighbour
    assert session.move_player(direction) is True
    assert session.grade == maze.level ** 2
    assert maze[maze.player[0]][maze.player[1]] == CellType.START
    assert maze.find(CellType.VISITED_PATH) is None


def test_end_resets_session():
    session = _session()
    session.start()
    session.grade = 25
    session.end()
    assert session.grade == 0
    assert session.time_left == 0
    assert session.timing is False
    assert session.control.exit is True
    assert session.maze.find(CellType.START) is not None


def test_set_level_replaces_maze():
    session = _session()
    session.set_level(10)
    assert session.maze.level == 10
    assert session.maze.side == 21
    assert session.maze.find(CellType.END) is not None


def test_set_level_rejects_bad_level():
    session = _session()
    with pytest.raises(ValueError):
        session.set_level(0)


def test_award_search_adds_square_of_level():
    session = _session(level=5)
    assert session.award_search() == 25
    assert session.award_search() == 50
    assert session.grade == 50


def test_start_and_stop_race():
    session = _session(level=5, seed=7)
    race = session.start_race()
    assert session.compete_mode is True
    assert race.dfs_running is True
    assert race.bfs_running is False
    assert race.winner == Winner.NONE
    assert session.start_race() is race
    session.stop_race()
    assert session.compete_mode is False
    assert race.dfs_running is False


def test_finish_race_awards_level():
    session = _session(level=5, seed=7)
    race = session.start_race()
    race.bfs_running = True
    earned = session.finish_race(Winner.BFS)
    assert earned == session.maze.level
    assert session.grade == earned
    assert session.compete_mode is False
    assert race.winner == Winner.BFS
    assert race.dfs_running is False and race.bfs_running is False


def test_player_wins_race_by_reaching_end():
    session = _session(level=5, seed=11)
    race = session.start_race()
    maze = session.maze
    end = maze.find(CellType.END)
    neighbour, direction = _approach(maze, end)
    maze.player = neighbour
    assert session.move_player(direction) is True
    assert race.winner == Winner.PLAYER
    assert session.grade == maze.level
    assert session.compete_mode is False
    assert maze.player == end