from __future__ import annotations

from dataclasses import dataclass, field

from .constants import DEFAULT_TAB_STOP


@dataclass(slots=True, frozen=True)
class EditorSyntax:
    filetype: str
    filematch: tuple[str, ...]
    keywords: tuple[str, ...]
    singleline_comment_start: str = ""
    multiline_comment_start: str = ""
    multiline_comment_end: str = ""
    flags: int = 0


@dataclass(slots=True)
class Row:
    """One line of text.

    ``chars`` holds the raw bytes (decoded latin-1, one character per byte).
    ``render`` and ``hl`` are derived from it and are rebuilt by
    :func:`termedit.rows.update_row` after every mutation. ``hl_oc`` is true
    when the row ends inside an unterminated block comment.
    """

    idx: int
    chars: str
    render: str = ""
    hl: list[int] = field(default_factory=list)
    hl_oc: bool = False

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)


@dataclass(slots=True)
class EditorConfig:
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0
    rows: list[Row] = field(default_factory=list)
    dirty: int = 0
    filename: str | None = None
    statusmsg: str = ""
    statusmsg_time: float = 0.0
    syntax: EditorSyntax | None = None
    tab_stop: int = DEFAULT_TAB_STOP

    @property
    def numrows(self) -> int:
        return len(self.rows)


@dataclass(slots=True)
class CursorSnapshot:
    cx: int
    cy: int
    coloff: int
    rowoff: int

    @classmethod
    def take(cls, config: EditorConfig) -> "CursorSnapshot":
        return cls(config.cx, config.cy, config.coloff, config.rowoff)

    def restore(self, config: EditorConfig) -> None:
        config.cx = self.cx
        config.cy = self.cy
        config.coloff = self.coloff
        config.rowoff = self.rowoff
