from __future__ import annotations

import os
import time

from .constants import (
    ANSI_CLEAR_LINE,
    ANSI_CURSOR_HOME,
    ANSI_DEFAULT_FG,
    ANSI_HIDE_CURSOR,
    ANSI_INVERT_OFF,
    ANSI_INVERT_ON,
    ANSI_SHOW_CURSOR,
    DEFAULT_STATUS_TIMEOUT,
    HL_NORMAL,
    TERMEDIT_VERSION,
)
from .models import EditorConfig, Row
from .rows import row_cx_to_rx
from .syntax import syntax_to_color


def scroll(cfg: EditorConfig) -> None:
    cfg.rx = 0
    if cfg.cy < cfg.numrows:
        cfg.rx = row_cx_to_rx(cfg.rows[cfg.cy], cfg.cx, cfg.tab_stop)

    if cfg.cy < cfg.rowoff:
        cfg.rowoff = cfg.cy
    if cfg.cy >= cfg.rowoff + cfg.screenrows:
        cfg.rowoff = cfg.cy - cfg.screenrows + 1
    if cfg.rx < cfg.coloff:
        cfg.coloff = cfg.rx
    # Strictly greater: the cursor may sit one column past the right edge.
    if cfg.rx > cfg.coloff + cfg.screencols:
        cfg.coloff = cfg.rx - cfg.screencols + 1


def draw_row(cfg: EditorConfig, row: Row, ab: list[str]) -> None:
    c = row.render[cfg.coloff : cfg.coloff + cfg.screencols]
    hl = row.hl[cfg.coloff : cfg.coloff + cfg.screencols]
    current_color = -1
    for ch, h in zip(c, hl):
        code = ord(ch)
        if code < 32 or code == 127:
            sym = chr(ord("@") + code) if code <= 26 else "?"
            ab.append(ANSI_INVERT_ON)
            ab.append(sym)
            ab.append(ANSI_INVERT_OFF)
            if current_color != -1:
                ab.append(f"\x1b[{current_color}m")
        elif h == HL_NORMAL:
            if current_color != -1:
                ab.append(ANSI_DEFAULT_FG)
                current_color = -1
            ab.append(ch)
        else:
            color = syntax_to_color(h)
            if color != current_color:
                current_color = color
                ab.append(f"\x1b[{color}m")
            ab.append(ch)
    ab.append(ANSI_DEFAULT_FG)


def draw_welcome(cfg: EditorConfig, ab: list[str]) -> None:
    welcome = f"termedit -- version {TERMEDIT_VERSION}"[: cfg.screencols]
    padding = (cfg.screencols - len(welcome)) // 2
    if padding:
        ab.append("~")
        padding -= 1
    if padding > 0:
        ab.append(" " * padding)
    ab.append(welcome)


def draw_rows(cfg: EditorConfig, ab: list[str]) -> None:
    for y in range(cfg.screenrows):
        filerow = cfg.rowoff + y
        if filerow < cfg.numrows:
            draw_row(cfg, cfg.rows[filerow], ab)
        elif cfg.numrows == 0 and y == cfg.screenrows // 3:
            draw_welcome(cfg, ab)
        else:
            ab.append("~")
        ab.append(ANSI_CLEAR_LINE)
        ab.append("\r\n")


def draw_status_bar(cfg: EditorConfig, ab: list[str]) -> None:
    ab.append(ANSI_INVERT_ON)
    filename = cfg.filename if cfg.filename else "[No Name]"
    status = f"{filename:.20} - {cfg.numrows} lines {'(modified)' if cfg.dirty else ''}"
    filetype = cfg.syntax.filetype if cfg.syntax else "no filetype"
    rstatus = f"{filetype} | {cfg.cy + 1}/{cfg.numrows}"
    status = status[: cfg.screencols]
    ab.append(status)
    fill = len(status)
    while fill < cfg.screencols:
        if cfg.screencols - fill == len(rstatus):
            ab.append(rstatus)
            break
        ab.append(" ")
        fill += 1
    ab.append(ANSI_INVERT_OFF)
    ab.append("\r\n")


def draw_message_bar(cfg: EditorConfig, ab: list[str], now: float, timeout: float) -> None:
    ab.append(ANSI_CLEAR_LINE)
    if cfg.statusmsg and now - cfg.statusmsg_time < timeout:
        ab.append(cfg.statusmsg[: cfg.screencols])


def build_frame(
    cfg: EditorConfig,
    *,
    now: float | None = None,
    status_timeout: float = DEFAULT_STATUS_TIMEOUT,
) -> str:
    """Scroll to the cursor and compose one full screen update."""
    scroll(cfg)
    ab: list[str] = [ANSI_HIDE_CURSOR, ANSI_CURSOR_HOME]
    draw_rows(cfg, ab)
    draw_status_bar(cfg, ab)
    draw_message_bar(cfg, ab, time.time() if now is None else now, status_timeout)
    ab.append(f"\x1b[{cfg.cy - cfg.rowoff + 1};{cfg.rx - cfg.coloff + 1}H")
    ab.append(ANSI_SHOW_CURSOR)
    return "".join(ab)


def refresh_screen(cfg: EditorConfig, fd: int, status_timeout: float = DEFAULT_STATUS_TIMEOUT) -> None:
    data = build_frame(cfg, status_timeout=status_timeout).encode("latin-1", errors="replace")
    while data:
        n = os.write(fd, data)
        data = data[n:]
