"""Window of the maze game: menu, playing board and high-score table."""

import argparse
import tkinter as tk
from tkinter import messagebox, simpledialog, ttk

from mazerace.cells import CellType
from mazerace.game import DEFAULT_LEVEL, LEVELS, GameSession, direction_for_key
from mazerace.race import Winner
from mazerace.ranking import RANKING_FILE, Ranking
from mazerace.search import SearchEvent, bfs_queue, dfs_stack, solve

WALL_COLOR = "#5bc0e8"
DFS_TRAIL_COLOR = "#f1e2f3"
PLAYER_COLOR = "#ff0000"
DFS_COLOR = "#800080"
TRAIL_COLOR = "#ffff00"

_BASE_COLORS = {
    CellType.PATH: "#ffffff",
    CellType.OPEN_WALL: "#ffffff",
    CellType.START: "#0000ff",
    CellType.END: "#00ff00",
    CellType.WALL: WALL_COLOR,
    CellType.BORDER: WALL_COLOR,
}

_RACE_COLORS = {
    CellType.SEARCHED_PATH: "#c0c0c0",
    CellType.CURRENT_SEARCH: DFS_TRAIL_COLOR,
    CellType.BFS_FRONTIER: "#00ffff",
}

_MARGIN = 20

RULES_TEXT = "计时200秒，根据迷宫等级与经过关卡记分。\n操作方式：WASD。"

_LEVEL_LABELS = dict(
    zip(
        ("5阶迷宫", "简单难度(10阶迷宫)", "普通难度(20阶迷宫)", "困难难度(40阶迷宫)"),
        LEVELS,
    )
)

_WINNER_TEXT = {
    Winner.PLAYER: "恭喜您赢得了比赛！",
    Winner.DFS: "DFS赢得了比赛！",
    Winner.BFS: "BFS赢得了比赛！",
}

_SEARCH_DELAY_MS = 20
_SOLVE_DELAY_MS = 1
_PAUSE_POLL_MS = 100
_RACE_STEP_MS = 500
_BFS_START_MS = 1000
_AFTER_SEARCH_MS = 2000
_AFTER_RACE_MS = 500


def cell_color(value, compete_mode=False):
    """Fill colour of a cell holding ``value``, or None if it is not drawn."""
    if value == CellType.VISITED_PATH:
        return TRAIL_COLOR
    if compete_mode and value in _RACE_COLORS:
        return _RACE_COLORS[value]
    return _BASE_COLORS.get(value)


def board_layout(width, height, side):
    """Return ``(block, x, y)``: the cell size and the top-left corner that
    centre a ``side`` x ``side`` board in a ``width`` x ``height`` area."""
    if side < 1:
        raise ValueError(f"board side must be at least 1, got {side}")
    block = max(0, (min(width, height) - _MARGIN) // side)
    span = side * block
    return block, (width - span) // 2, (height - span) // 2


class MazeApp:
    """The game's window, switching between the menu and the playing board."""

    def __init__(self, root, ranking=None):
        self.root = root
        self.ranking = ranking if ranking is not None else Ranking()
        self.session = None
        self._clock_job = None
        self._race_job = None
        self._search_job = None
        self._search = None
        self._search_delay = _SEARCH_DELAY_MS
        self._buttons = {}
        self._game = None
        self._game_shown = False
        root.title("Maze")
        self._menu = self._build_menu()
        root.bind("<Key>", self._on_key)
        self.show_menu()

    # Menu -----------------------------------------------------------------

    def _build_menu(self):
        frame = ttk.Frame(self.root, padding=40)
        ttk.Label(frame, text="Maze", font=("TkDefaultFont", 24)).pack(pady=(0, 20))
        for text, command in (
            ("开始游戏", lambda: self.show_game(False)),
            ("人机竞速", lambda: self.show_game(True)),
            ("排行榜", self.show_ranking),
            ("退出", self.root.destroy),
        ):
            ttk.Button(frame, text=text, command=command).pack(fill="x", pady=5)
        return frame

    def show_menu(self):
        """Show the main menu in place of the board."""
        if self._game is not None:
            self._game.pack_forget()
        self._game_shown = False
        self._menu.pack(fill="both", expand=True)

    def show_game(self, race=False):
        """Show the playing board; with ``race`` the race button is offered."""
        if self._game is None:
            self.session = GameSession(DEFAULT_LEVEL)
            self._game = self._build_game()
        if race:
            self._buttons["compete"].grid()
        self._menu.pack_forget()
        self._game.pack(fill="both", expand=True)
        self._game_shown = True
        self._redraw()

    def show_ranking(self):
        """Open a window listing the saved high scores."""
        window = tk.Toplevel(self.root)
        window.title("排行榜")
        columns = ("name", "score", "date")
        table = ttk.Treeview(window, columns=columns, show="headings")
        for column, heading in zip(columns, ("玩家", "分数", "日期")):
            table.heading(column, text=heading)
            table.column(column, stretch=True)
        for item in self.ranking.load():
            table.insert("", "end", values=(item.player_name, item.score, item.date))
        table.pack(fill="both", expand=True)
        return window

    # Board ----------------------------------------------------------------

    def _build_game(self):
        frame = ttk.Frame(self.root, padding=10)
        self._canvas = tk.Canvas(frame, width=600, height=600, highlightthickness=0)
        self._canvas.grid(row=0, column=0, sticky="nsew")
        self._canvas.bind("<Configure>", lambda _event: self._redraw())
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(0, weight=1)

        panel = ttk.Frame(frame, padding=(10, 0))
        panel.grid(row=0, column=1, sticky="ns")

        self._hint = ttk.Label(panel, text="点击“开始”进入游戏")
        self._hint.grid(row=0, column=0, columnspan=2, pady=5)

        self._time_plaque = tk.StringVar(value="  ")
        self._time_value = tk.StringVar(value="  ")
        self._grade_plaque = tk.StringVar(value="  ")
        self._grade_value = tk.StringVar(value="  ")
        ttk.Label(panel, textvariable=self._time_plaque).grid(row=1, column=0, sticky="w")
        ttk.Label(panel, textvariable=self._time_value).grid(row=1, column=1, sticky="e")
        ttk.Label(panel, textvariable=self._grade_plaque).grid(row=2, column=0, sticky="w")
        ttk.Label(panel, textvariable=self._grade_value).grid(row=2, column=1, sticky="e")

        self._progress = ttk.Progressbar(panel, maximum=100, length=150)
        self._progress.grid(row=3, column=0, columnspan=2, pady=5)
        self._progress.grid_remove()

        specs = (
            ("start", "开始", self._on_start),
            ("pause", "暂停", self._on_pause),
            ("end", "终止", self._on_end),
            ("rules", "规则", self._on_rules),
            ("settings", "设置", self._on_settings),
            ("solve", "求解", self._on_solve),
            ("dfs", "DFS", self._on_dfs),
            ("bfs", "BFS", self._on_bfs),
            ("compete", "开始竞赛", self._on_compete),
            ("menu", "菜单", self._on_menu),
        )
        for row, (name, text, command) in enumerate(specs, start=4):
            button = ttk.Button(panel, text=text, command=command)
            button.grid(row=row, column=0, columnspan=2, sticky="ew", pady=2)
            self._buttons[name] = button

        for name in ("end", "pause", "solve"):
            self._set_enabled(name, False)
        self._buttons["compete"].grid_remove()
        return frame

    def _set_enabled(self, name, enabled):
        self._buttons[name].state(["!disabled"] if enabled else ["disabled"])

    def _show_grade(self):
        self._grade_value.set(str(self.session.grade))

    def _redraw(self):
        if self._game is None:
            return
        canvas = self._canvas
        canvas.delete("all")
        session = self.session
        if not session.painting and not session.compete_mode:
            return
        maze = session.maze
        block, x0, y0 = board_layout(canvas.winfo_width(), canvas.winfo_height(), maze.side)
        if block == 0:
            return

        def fill(i, j, color, size=block):
            x, y = x0 + i * block, y0 + j * block
            canvas.create_rectangle(x, y, x + size, y + size, fill=color, width=0)

        for i, row in enumerate(maze.cells):
            for j, value in enumerate(row):
                color = cell_color(value, session.compete_mode)
                if color is not None:
                    fill(i, j, color)

        fill(*maze.player, PLAYER_COLOR)

        race = session.race
        if session.compete_mode and race is not None and race.dfs_running:
            if maze.dfs_pos == maze.player:
                fill(*maze.dfs_pos, DFS_TRAIL_COLOR, block // 2)
            else:
                fill(*maze.dfs_pos, DFS_COLOR)

    # Clock ----------------------------------------------------------------

    def _start_clock(self):
        self._stop_clock()
        self._clock_job = self.root.after(1000, self._on_clock)

    def _stop_clock(self):
        if self._clock_job is not None:
            self.root.after_cancel(self._clock_job)
            self._clock_job = None

    def _on_clock(self):
        self._clock_job = None
        session = self.session
        final = session.tick()
        if final is None:
            if session.timing:
                self._time_value.set(str(session.time_left))
                self._progress["value"] = session.progress
                self._start_clock()
            return
        self._progress.grid_remove()
        self._redraw()
        self._set_enabled("start", True)
        self._time_value.set(" ")
        self._grade_value.set(" ")
        self._set_enabled("pause", False)
        self._set_enabled("end", False)
        self._set_enabled("settings", True)
        messagebox.showinfo("", f"得分:{final}", parent=self.root)

    # Buttons --------------------------------------------------------------

    def _on_start(self):
        session = self.session
        self._hint.grid_remove()
        self._set_enabled("solve", True)
        session.start()
        self._start_clock()
        self._progress.grid()
        self._progress["value"] = 100
        self._redraw()
        self._time_value.set(str(session.time_left))
        self._show_grade()
        self._set_enabled("start", False)
        self._set_enabled("pause", True)
        self._set_enabled("end", True)
        self._set_enabled("settings", False)
        self._time_plaque.set("时间")
        self._grade_plaque.set("分数")

    def _on_pause(self):
        paused = self.session.toggle_pause()
        self._buttons["pause"].configure(text="继续" if paused else "暂停")
        if self.session.timing:
            self._start_clock()
        else:
            self._stop_clock()

    def _on_end(self):
        self._stop_search()
        self._stop_clock()
        self.session.end()
        self._time_plaque.set("  ")
        self._grade_plaque.set("  ")
        self._progress.grid_remove()
        self._grade_value.set(" ")
        self._time_value.set(" ")
        self._buttons["pause"].configure(text="暂停")
        self._set_enabled("pause", False)
        self._set_enabled("end", False)
        self._set_enabled("start", True)
        self._set_enabled("settings", True)
        self._hint.grid()
        self._set_enabled("solve", False)
        self._redraw()

    def _on_rules(self):
        messagebox.showinfo("规则", RULES_TEXT, parent=self.root)

    def _on_settings(self):
        level = self._ask_level()
        if level is not None:
            self.session.set_level(level)
            self._redraw()

    def _ask_level(self):
        dialog = tk.Toplevel(self.root)
        dialog.title("选择难度")
        dialog.transient(self.root)
        labels = list(_LEVEL_LABELS)
        choice = tk.StringVar(value=labels[0])
        chosen = []

        def accept():
            chosen.append(_LEVEL_LABELS[choice.get()])
            dialog.destroy()

        ttk.Label(dialog, text="请选择一个条目").pack(padx=10, pady=5)
        ttk.Combobox(dialog, textvariable=choice, values=labels, state="readonly").pack(
            padx=10, pady=5
        )
        buttons = ttk.Frame(dialog)
        buttons.pack(pady=5)
        ttk.Button(buttons, text="OK", command=accept).pack(side="left", padx=5)
        ttk.Button(buttons, text="Cancel", command=dialog.destroy).pack(side="left", padx=5)
        dialog.grab_set()
        self.root.wait_window(dialog)
        return chosen[0] if chosen else None

    # Searches -------------------------------------------------------------

    def _on_solve(self):
        self._set_enabled("solve", False)
        self._start_search(solve(self.session.maze), _SOLVE_DELAY_MS)

    def _on_dfs(self):
        self._set_enabled("dfs", False)
        control = self.session.control
        control.reset()
        control.delay = 0
        self._start_search(dfs_stack(self.session.maze, control), _SEARCH_DELAY_MS)

    def _on_bfs(self):
        self._set_enabled("bfs", False)
        control = self.session.control
        control.reset()
        control.delay = 0
        self._start_search(bfs_queue(self.session.maze, control), _SEARCH_DELAY_MS)

    def _start_search(self, search, delay_ms):
        self._stop_search()
        self._search = search
        self._search_delay = delay_ms
        self._search_job = self.root.after(delay_ms, self._advance_search)

    def _stop_search(self):
        if self._search_job is not None:
            self.root.after_cancel(self._search_job)
            self._search_job = None
        self._search = None

    def _advance_search(self):
        self._search_job = None
        search = self._search
        if search is None:
            return
        control = self.session.control
        if control.paused and not control.exit:
            self._search_job = self.root.after(_PAUSE_POLL_MS, self._advance_search)
            return
        try:
            event = next(search)
        except StopIteration:
            self._search = None
            return
        self._redraw()
        if event is SearchEvent.SEARCH_OVER:
            self._search = None
            self.root.after(_AFTER_SEARCH_MS, self._after_search)
            return
        self._search_job = self.root.after(self._search_delay, self._advance_search)

    def _after_search(self):
        self.session.award_search()
        self._redraw()
        self._show_grade()
        for name in ("solve", "dfs", "bfs"):
            self._set_enabled(name, True)

    # Race -----------------------------------------------------------------

    def _on_compete(self):
        session = self.session
        if not session.compete_mode:
            race = session.start_race()
            self._buttons["compete"].configure(text="停止竞赛")
            self._redraw()

            def release_bfs():
                if session.compete_mode and session.race is race:
                    race.bfs_running = True

            self.root.after(_BFS_START_MS, release_bfs)
            self._schedule_race_step()
        else:
            self._stop_race_timer()
            session.stop_race()
            self._buttons["compete"].configure(text="开始竞赛")
            self._redraw()

    def _schedule_race_step(self):
        self._stop_race_timer()
        self._race_job = self.root.after(_RACE_STEP_MS, self._on_race_step)

    def _stop_race_timer(self):
        if self._race_job is not None:
            self.root.after_cancel(self._race_job)
            self._race_job = None

    def _on_race_step(self):
        self._race_job = None
        session = self.session
        race = session.race
        if race is None or not session.compete_mode:
            return
        winner = race.step()
        self._redraw()
        if winner:
            self._competition_over(winner)
        else:
            self._schedule_race_step()

    def _competition_over(self, winner, earned=None):
        self._stop_race_timer()
        session = self.session
        if earned is None:
            earned = session.finish_race(winner)
        self._show_grade()
        text = _WINNER_TEXT.get(Winner(winner), "")
        messagebox.showinfo("竞赛结束", f"{text}\n您获得了 {earned} 分！", parent=self.root)
        if session.grade > 0:
            self._offer_save()
        self._buttons["compete"].configure(text="开始竞赛")

        def fresh_maze():
            session.maze.generate()
            self._redraw()

        self.root.after(_AFTER_RACE_MS, fresh_maze)

    def _offer_save(self):
        name = simpledialog.askstring("保存得分", "请输入您的名字:", parent=self.root)
        if name:
            self.ranking.add_score(name, self.session.grade)
            messagebox.showinfo("分数保存", "您的分数已保存到排行榜！", parent=self.root)

    # Keyboard and leaving ---------------------------------------------------

    def _on_key(self, event):
        session = self.session
        if session is None or not self._game_shown or not session.keyboard:
            return
        was_racing = session.compete_mode
        before = session.grade
        arrived = session.move_player(direction_for_key(event.keysym))
        self._redraw()
        if not arrived:
            return
        if was_racing:
            self._competition_over(Winner.PLAYER, session.grade - before)
        else:
            self._show_grade()

    def _on_menu(self):
        session = self.session
        self._stop_clock()
        self._stop_race_timer()
        self._stop_search()
        session.control.set_exit(True)
        session.timing = False
        session.painting = False
        session.keyboard = False
        session.can_pause = False
        session.compete_mode = False
        if session.race is not None:
            session.race.dfs_running = False
            session.race.bfs_running = False
        if session.grade > 0 and messagebox.askyesno(
            "保存分数", "是否要保存您的得分？", parent=self.root
        ):
            self._offer_save()
        self.show_menu()


def main(argv=None):
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="mazerace", description="Maze game.")
    parser.add_argument(
        "--ranking",
        default=RANKING_FILE,
        help="file holding the high-score table (default: %(default)s)",
    )
    args = parser.parse_args(argv)
    root = tk.Tk()
    ttk.Style(root).theme_use("clam")
    MazeApp(root, Ranking(args.ranking))
    root.mainloop()
    return 0