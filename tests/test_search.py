import copy
import random
import threading

import pytest

from mazerace.cells import CellType
from mazerace.grid import Maze
from mazerace.search import (
    SearchControl,
    SearchEvent,
    bfs_queue,
    dfs_stack,
    run_search,
    solve,
)


def _corridor():
    maze = Maze(2)
    cells = maze.cells
    cells[1][1] = CellType.START
    cells[1][2] = CellType.OPEN_WALL
    cells[1][3] = CellType.END
    cells[3][1] = CellType.WALL
    cells[3][3] = CellType.WALL
    maze.player = (1, 1)
    return maze


def _without_end():
    maze = _corridor()
    maze.cells[1][3] = CellType.PATH
    return maze


def _generated(seed, level=5):
    maze = Maze(level, random.Random(seed))
    maze.generate()
    return maze


def _positions(maze, value):
    return {
        (i, j)
        for i, row in enumerate(maze.cells)
        for j, cell in enumerate(row)
        if cell == value
    }


def _walls(maze):
    return _positions(maze, CellType.WALL) | _positions(maze, CellType.BORDER)


def _finished_search():
    yield SearchEvent.MAZE_UPDATED
    yield SearchEvent.SEARCH_OVER
    return True


def test_solve_corridor_paints_route_and_keeps_end():
    maze = _corridor()
    assert run_search(solve(maze)) is True
    assert maze[1][1] == CellType.VISITED_PATH
    assert maze[1][2] == CellType.VISITED_PATH
    assert maze[1][3] == CellType.END


def test_dfs_stack_corridor_marks_whole_route():
    maze = _corridor()
    events = list(dfs_stack(maze, SearchControl()))
    assert events[-1] is SearchEvent.SEARCH_OVER
    assert events.count(SearchEvent.SEARCH_OVER) == 1
    assert _positions(maze, CellType.VISITED_PATH) == {(1, 1), (1, 2), (1, 3)}


def test_bfs_queue_corridor_marks_whole_route():
    maze = _corridor()
    assert run_search(bfs_queue(maze, SearchControl())) is True
    assert _positions(maze, CellType.VISITED_PATH) == {(1, 1), (1, 2), (1, 3)}


def test_single_cell_maze_has_no_route():
    maze = Maze(1)
    maze.generate()
    assert run_search(solve(maze)) is False
    assert maze[1][1] == CellType.SEARCHED_PATH


@pytest.mark.parametrize("search", [dfs_stack, bfs_queue])
def test_searches_without_end_fail(search):
    maze = _without_end()
    events = list(search(maze, SearchControl()))
    assert events[-1] is SearchEvent.SEARCH_OVER
    assert run_search(search(_without_end(), SearchControl())) is False


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_stack_and_queue_find_same_route(seed):
    first = _generated(seed)
    second = copy.deepcopy(first)
    start = first.player
    end = first.find(CellType.END)
    assert run_search(dfs_stack(first, SearchControl())) is True
    assert run_search(bfs_queue(second, SearchControl())) is True
    route = _positions(first, CellType.VISITED_PATH)
    assert route == _positions(second, CellType.VISITED_PATH) | {start, end}
    assert start in route and end in route


@pytest.mark.parametrize("seed", [5, 6, 7])
def test_dfs_stack_route_is_a_simple_path(seed):
    maze = _generated(seed)
    start = maze.player
    end = maze.find(CellType.END)
    run_search(dfs_stack(maze, SearchControl()))
    route = _positions(maze, CellType.VISITED_PATH)

    def degree(pos):
        i, j = pos
        return sum((i + di, j + dj) in route for di, dj in ((0, 1), (1, 0), (0, -1), (-1, 0)))

    assert degree(start) == 1
    assert degree(end) == 1
    assert all(degree(pos) == 2 for pos in route - {start, end})


@pytest.mark.parametrize("seed", [8, 9, 10])
def test_solve_leaves_no_current_marks_and_keeps_walls(seed):
    maze = _generated(seed)
    walls = _walls(maze)
    end = maze.find(CellType.END)
    events = list(solve(maze))
    assert events[0] is SearchEvent.MAZE_UPDATED
    assert events[-1] is SearchEvent.SEARCH_OVER
    assert _positions(maze, CellType.CURRENT_SEARCH) == set()
    assert _walls(maze) == walls
    assert maze.find(CellType.END) == end
    assert maze[maze.player[0]][maze.player[1]] == CellType.VISITED_PATH


@pytest.mark.parametrize("search", [dfs_stack, bfs_queue])
def test_exit_stops_search(search):
    maze = _generated(11)
    control = SearchControl()
    gen = search(maze, control)
    assert next(gen) is SearchEvent.MAZE_UPDATED
    control.set_exit(True)
    rest = list(gen)
    assert rest[-1] is SearchEvent.SEARCH_OVER
    gen2 = search(_generated(11), control)
    next(gen2)
    control.set_exit(True)
    assert run_search(gen2) is False


def test_search_resets_control_flags():
    control = SearchControl()
    control.set_exit(True)
    control.set_paused(True)
    assert run_search(dfs_stack(_corridor(), control)) is True
    assert control.exit is False
    assert control.paused is False


def test_reset_clears_flags():
    control = SearchControl()
    control.set_paused(True)
    control.set_exit(True)
    control.reset()
    assert (control.paused, control.exit) == (False, False)


def test_wait_while_paused_returns_on_exit():
    control = SearchControl()
    control.set_paused(True)
    control.set_exit(True)
    control.wait_while_paused()
    assert control.paused is True


def test_wait_while_paused_resumes_when_unpaused():
    control = SearchControl()
    control.set_paused(True)
    timer = threading.Timer(0.05, control.set_paused, args=(False,))
    timer.start()
    control.wait_while_paused()
    timer.join()
    assert control.paused is False


def test_run_search_returns_generator_result():
    assert run_search(_finished_search()) is True