from __future__ import annotations

from dataclasses import dataclass

from .constants import ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT, ARROW_UP, ENTER, ESC, HL_MATCH
from .models import EditorConfig
from .rows import row_rx_to_cx


@dataclass(slots=True)
class SearchState:
    """Incremental search progress kept between keystrokes of one search prompt."""

    last_match: int = -1
    direction: int = 1
    saved_hl_line: int = -1
    saved_hl: list[int] | None = None

    def restore_highlight(self, cfg: EditorConfig) -> None:
        if self.saved_hl is not None and 0 <= self.saved_hl_line < cfg.numrows:
            row = cfg.rows[self.saved_hl_line]
            if len(self.saved_hl) == row.rsize:
                row.hl = self.saved_hl
        self.saved_hl = None
        self.saved_hl_line = -1


def search_next_match(
    cfg: EditorConfig, query: str, last_match: int, direction: int
) -> tuple[int, int] | None:
    current = last_match
    for _ in range(cfg.numrows):
        current += direction
        if current == -1:
            current = cfg.numrows - 1
        elif current == cfg.numrows:
            current = 0
        pos = cfg.rows[current].render.find(query)
        if pos != -1:
            return current, pos
    return None


def find_step(cfg: EditorConfig, state: SearchState, query: str, key: int) -> None:
    state.restore_highlight(cfg)

    if key in (ENTER, ESC):
        state.last_match = -1
        state.direction = 1
        return
    if key in (ARROW_RIGHT, ARROW_DOWN):
        state.direction = 1
    elif key in (ARROW_LEFT, ARROW_UP):
        state.direction = -1
    else:
        state.last_match = -1
        state.direction = 1

    if state.last_match == -1:
        state.direction = 1
    if not query:
        return

    match = search_next_match(cfg, query, state.last_match, state.direction)
    if match is None:
        return

    match_row, match_offset = match
    row = cfg.rows[match_row]
    state.last_match = match_row
    state.saved_hl_line = match_row
    state.saved_hl = row.hl.copy()
    end = min(match_offset + len(query), row.rsize)
    row.hl[match_offset:end] = [HL_MATCH] * (end - match_offset)

    cfg.cy = match_row
    cfg.cx = row_rx_to_cx(row, match_offset, cfg.tab_stop)
    # Past the last row, so the next scroll pulls the match to the top.
    cfg.rowoff = cfg.numrows
