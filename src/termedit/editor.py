from __future__ import annotations

import errno
import logging
import os
import signal
import sys
import time

from .config import Settings
from .constants import (
    ANSI_CLEAR_SCREEN,
    ANSI_CURSOR_HOME,
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_F,
    CTRL_H,
    CTRL_JUMP_COLUMNS,
    CTRL_L,
    CTRL_LEFT,
    CTRL_Q,
    CTRL_RIGHT,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    PAGE_DOWN,
    PAGE_UP,
    TAB,
)
from .log import setup_logging
from .models import CursorSnapshot, EditorConfig
from .prompt import Prompt, PromptMode, PromptOutcome
from .rows import (
    delete_row,
    insert_row,
    row_append_string,
    row_del_char,
    row_insert_char,
    rows_to_string,
    split_row,
)
from .search import SearchState, find_step
from .syntax import select_syntax_highlight
from .terminal import RawMode, get_window_size, read_key
from .ui import refresh_screen

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"


class Editor:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        stdin_fd: int | None = None,
        stdout_fd: int | None = None,
        window: tuple[int, int] | None = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self.cfg = EditorConfig(tab_stop=self.settings.tab_stop)
        self.quit_times = self.settings.quit_times
        self.stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self.stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self.prompt: Prompt | None = None
        self.search = SearchState()
        self.search_snapshot: CursorSnapshot | None = None
        if window is None:
            self.update_window_size()
        else:
            self.set_window_size(*window)

    def set_window_size(self, rows: int, cols: int) -> None:
        # Two lines are reserved for the status and message bars.
        self.cfg.screenrows = max(1, rows - 2)
        self.cfg.screencols = max(1, cols)

    def update_window_size(self) -> None:
        try:
            rows, cols = get_window_size(self.stdin_fd, self.stdout_fd)
        except OSError as exc:
            raise OSError(exc.errno, "Unable to query screen size") from exc
        self.set_window_size(rows, cols)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        self.update_window_size()
        self.refresh_screen()

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.cfg.statusmsg = fmt % args if args else fmt
        self.cfg.statusmsg_time = time.time()

    def refresh_screen(self) -> None:
        refresh_screen(self.cfg, self.stdout_fd, self.settings.status_timeout)

    # File I/O.

    def open_file(self, filename: str) -> None:
        self.cfg.filename = filename
        select_syntax_highlight(self.cfg)
        try:
            with open(filename, "rb") as f:
                for line in f:
                    insert_row(self.cfg, self.cfg.numrows, line.rstrip(b"\r\n").decode("latin-1"))
        except OSError as exc:
            raise OSError(exc.errno, f"Opening file failed: {filename}: {exc.strerror or exc}") from exc
        self.cfg.dirty = 0
        logger.info("opened %s (%d rows)", filename, self.cfg.numrows)

    def save(self) -> int:
        if not self.cfg.filename:
            self.start_prompt(PromptMode.SAVE_AS)
            return 1
        return self.write_file()

    def write_file(self) -> int:
        filename = self.cfg.filename
        data = rows_to_string(self.cfg).encode("latin-1", errors="replace")
        try:
            fd = os.open(filename, os.O_RDWR | os.O_CREAT, 0o644)
            try:
                os.ftruncate(fd, len(data))
                written = 0
                while written < len(data):
                    n = os.write(fd, data[written:])
                    if n <= 0:
                        raise OSError(errno.EIO, "short write")
                    written += n
            finally:
                os.close(fd)
        except OSError as exc:
            logger.warning("saving %s failed: %s", filename, exc)
            self.set_status_message("Can't save! I/O error: %s", os.strerror(exc.errno or errno.EIO))
            return 1

        self.cfg.dirty = 0
        logger.info("saved %s (%d bytes)", filename, len(data))
        self.set_status_message("%d bytes written on disk", len(data))
        return 0

    # Editing at the cursor.

    def insert_char(self, c: int) -> None:
        if self.cfg.cy == self.cfg.numrows:
            insert_row(self.cfg, self.cfg.numrows, "")
        row_insert_char(self.cfg, self.cfg.rows[self.cfg.cy], self.cfg.cx, chr(c & 0xFF))
        self.cfg.cx += 1

    def insert_newline(self) -> None:
        if self.cfg.cx == 0:
            insert_row(self.cfg, self.cfg.cy, "")
        else:
            split_row(self.cfg, self.cfg.cy, self.cfg.cx)
        self.cfg.cy += 1
        self.cfg.cx = 0

        above = self.cfg.rows[self.cfg.cy - 1].chars
        indent = len(above) - len(above.lstrip(" \t"))
        for ch in above[:indent]:
            self.insert_char(ord(ch))

    def del_char(self) -> None:
        cfg = self.cfg
        if cfg.cy == cfg.numrows:
            return
        if cfg.cx == 0 and cfg.cy == 0:
            return

        row = cfg.rows[cfg.cy]
        if cfg.cx > 0:
            row_del_char(cfg, row, cfg.cx - 1)
            cfg.cx -= 1
        else:
            cfg.cx = cfg.rows[cfg.cy - 1].size
            row_append_string(cfg, cfg.rows[cfg.cy - 1], row.chars)
            delete_row(cfg, cfg.cy)
            cfg.cy -= 1

    def move_cursor(self, key: int) -> None:
        cfg = self.cfg
        row = cfg.rows[cfg.cy] if cfg.cy < cfg.numrows else None

        if key == ARROW_LEFT:
            if cfg.cx != 0:
                cfg.cx -= 1
            elif cfg.cy > 0:
                cfg.cy -= 1
                cfg.cx = cfg.rows[cfg.cy].size
        elif key == ARROW_RIGHT:
            if row is not None and cfg.cx < row.size:
                cfg.cx += 1
            elif row is not None and cfg.cx == row.size:
                cfg.cy += 1
                cfg.cx = 0
        elif key == ARROW_UP:
            if cfg.cy != 0:
                cfg.cy -= 1
        elif key == ARROW_DOWN:
            if cfg.cy < cfg.numrows:
                cfg.cy += 1

        row = cfg.rows[cfg.cy] if cfg.cy < cfg.numrows else None
        rowlen = row.size if row is not None else 0
        if cfg.cx > rowlen:
            cfg.cx = rowlen

    def page(self, key: int) -> None:
        cfg = self.cfg
        if key == PAGE_UP:
            cfg.cy = cfg.rowoff
        else:
            cfg.cy = min(cfg.rowoff + cfg.screenrows - 1, cfg.numrows)
        for _ in range(cfg.screenrows):
            self.move_cursor(ARROW_UP if key == PAGE_UP else ARROW_DOWN)

    # Prompts.

    def start_prompt(self, mode: PromptMode) -> None:
        self.prompt = Prompt(mode)
        self.set_status_message(self.prompt.message)

    def find(self) -> None:
        self.search = SearchState()
        self.search_snapshot = CursorSnapshot.take(self.cfg)
        self.start_prompt(PromptMode.SEARCH)

    def handle_prompt_key(self, c: int) -> None:
        prompt = self.prompt
        if prompt is None:
            return
        outcome = prompt.feed(c)
        if prompt.mode is PromptMode.SEARCH:
            find_step(self.cfg, self.search, prompt.buffer, c)

        if outcome is PromptOutcome.CONTINUE:
            self.set_status_message(prompt.message)
            return

        self.prompt = None
        self.set_status_message("")
        if prompt.mode is PromptMode.SEARCH:
            if outcome is PromptOutcome.CANCEL and self.search_snapshot is not None:
                self.search_snapshot.restore(self.cfg)
            self.search_snapshot = None
        elif prompt.mode is PromptMode.SAVE_AS:
            if outcome is PromptOutcome.CANCEL:
                self.set_status_message("Save aborted")
                return
            self.cfg.filename = prompt.buffer
            select_syntax_highlight(self.cfg)
            self.write_file()

    # Key dispatch.

    def process_keypress(self) -> None:
        self.handle_key(read_key(self.stdin_fd))

    def handle_key(self, c: int) -> None:
        if self.prompt is not None:
            self.handle_prompt_key(c)
        elif c == CTRL_Q:
            if self.cfg.dirty and self.quit_times > 0:
                self.set_status_message(
                    "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit.",
                    self.quit_times,
                )
                self.quit_times -= 1
                return
            raise SystemExit(0)
        elif c == ENTER:
            self.insert_newline()
        elif c == CTRL_S:
            self.save()
        elif c == CTRL_F:
            self.find()
        elif c in (BACKSPACE, CTRL_H, DEL_KEY):
            if c == DEL_KEY:
                self.move_cursor(ARROW_RIGHT)
            self.del_char()
        elif c in (PAGE_UP, PAGE_DOWN):
            self.page(c)
        elif c in (ARROW_UP, ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT):
            self.move_cursor(c)
        elif c in (CTRL_LEFT, CTRL_RIGHT):
            for _ in range(CTRL_JUMP_COLUMNS):
                self.move_cursor(ARROW_LEFT if c == CTRL_LEFT else ARROW_RIGHT)
        elif c == HOME_KEY:
            self.cfg.cx = 0
        elif c == END_KEY:
            if self.cfg.cy < self.cfg.numrows:
                self.cfg.cx = self.cfg.rows[self.cfg.cy].size
        elif c in (CTRL_L, ESC):
            pass
        elif c == TAB or 32 <= c < 127 or 128 <= c < 256:
            self.insert_char(c)

        self.quit_times = self.settings.quit_times


def clear_screen(fd: int) -> None:
    os.write(fd, f"{ANSI_CLEAR_SCREEN}{ANSI_CURSOR_HOME}".encode())


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        print("Usage: termedit [filename]", file=sys.stderr)
        return 1

    settings = Settings.from_env()
    setup_logging(settings)
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        print("termedit: stdin/stdout must be a tty", file=sys.stderr)
        return 1

    try:
        with RawMode(stdin_fd):
            editor = Editor(settings, stdin_fd=stdin_fd, stdout_fd=stdout_fd)
            if args:
                editor.open_file(args[0])
            signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
            editor.set_status_message(HELP_MESSAGE)
            while True:
                editor.refresh_screen()
                editor.process_keypress()
    except SystemExit as exc:
        clear_screen(stdout_fd)
        if isinstance(exc.code, int):
            return exc.code
        return 0
    except OSError as exc:
        clear_screen(stdout_fd)
        logger.error("fatal: %s", exc)
        print(f"termedit: {exc}", file=sys.stderr)
        return 1
