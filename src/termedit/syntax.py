from __future__ import annotations

import logging
import os
from functools import lru_cache

from .constants import (
    C_HL_EXTENSIONS,
    C_HL_KEYWORDS,
    HL_COMMENT,
    HL_HIGHLIGHT_NUMBERS,
    HL_HIGHLIGHT_STRINGS,
    HL_KEYWORD1,
    HL_KEYWORD2,
    HL_MATCH,
    HL_MLCOMMENT,
    HL_NORMAL,
    HL_NUMBER,
    HL_STRING,
    PY_HL_EXTENSIONS,
    PY_HL_KEYWORDS,
    SEPARATORS,
    WHITESPACE,
)
from .models import EditorConfig, EditorSyntax, Row

logger = logging.getLogger(__name__)


HLDB: tuple[EditorSyntax, ...] = (
    EditorSyntax(
        filetype="c",
        filematch=C_HL_EXTENSIONS,
        keywords=C_HL_KEYWORDS,
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_STRINGS | HL_HIGHLIGHT_NUMBERS,
    ),
    EditorSyntax(
        filetype="python",
        filematch=PY_HL_EXTENSIONS,
        keywords=PY_HL_KEYWORDS,
        singleline_comment_start="#",
        flags=HL_HIGHLIGHT_STRINGS | HL_HIGHLIGHT_NUMBERS,
    ),
)


def is_separator(c: str) -> bool:
    return not c or c in WHITESPACE or c in SEPARATORS


@lru_cache(maxsize=None)
def keyword_table(keywords: tuple[str, ...]) -> tuple[tuple[str, int], ...]:
    """Keywords paired with their class, longest first."""
    table = []
    for kw in keywords:
        if kw.endswith("|"):
            table.append((kw[:-1], HL_KEYWORD2))
        else:
            table.append((kw, HL_KEYWORD1))
    table.sort(key=lambda item: len(item[0]), reverse=True)
    return tuple(table)


def syntax_to_color(hl: int) -> int:
    if hl in (HL_COMMENT, HL_MLCOMMENT):
        return 36
    if hl == HL_KEYWORD1:
        return 33
    if hl == HL_KEYWORD2:
        return 32
    if hl == HL_STRING:
        return 35
    if hl == HL_NUMBER:
        return 31
    if hl == HL_MATCH:
        return 34
    return 37


def find_syntax(filename: str) -> EditorSyntax | None:
    base = os.path.basename(filename)
    for syntax in HLDB:
        for pattern in syntax.filematch:
            if pattern.startswith("."):
                if base.endswith(pattern):
                    return syntax
            elif pattern in filename:
                return syntax
    return None


def select_syntax_highlight(config: EditorConfig) -> None:
    config.syntax = find_syntax(config.filename) if config.filename else None
    logger.debug(
        "syntax for %r: %s",
        config.filename,
        config.syntax.filetype if config.syntax else "none",
    )
    highlight_all(config)


def highlight_all(config: EditorConfig) -> None:
    for row in config.rows:
        highlight_row(config, row)


def highlight_row(config: EditorConfig, row: Row) -> bool:
    """Classify every render byte of ``row``.

    Returns True when the row's exit block-comment state changed, meaning the
    following row was highlighted against a stale entering state.
    """
    row.hl = [HL_NORMAL] * row.rsize
    syntax = config.syntax
    if syntax is None:
        return False

    keywords = keyword_table(syntax.keywords)
    scs = syntax.singleline_comment_start
    mcs = syntax.multiline_comment_start
    mce = syntax.multiline_comment_end
    strings = bool(syntax.flags & HL_HIGHLIGHT_STRINGS)
    numbers = bool(syntax.flags & HL_HIGHLIGHT_NUMBERS)

    p = row.render
    hl = row.hl
    prev_sep = True
    in_string = ""
    in_comment = row.idx > 0 and config.rows[row.idx - 1].hl_oc

    i = 0
    while i < len(p):
        ch = p[i]
        prev_hl = hl[i - 1] if i > 0 else HL_NORMAL

        if scs and not in_string and not in_comment:
            if p.startswith(scs, i):
                hl[i:] = [HL_COMMENT] * (len(p) - i)
                break

        if mcs and mce and not in_string:
            if in_comment:
                hl[i] = HL_MLCOMMENT
                if p.startswith(mce, i):
                    end = min(i + len(mce), len(p))
                    hl[i:end] = [HL_MLCOMMENT] * (end - i)
                    i += len(mce)
                    in_comment = False
                    prev_sep = True
                    continue
                i += 1
                continue
            if p.startswith(mcs, i):
                end = min(i + len(mcs), len(p))
                hl[i:end] = [HL_MLCOMMENT] * (end - i)
                i += len(mcs)
                in_comment = True
                continue

        if strings:
            if in_string:
                hl[i] = HL_STRING
                if ch == "\\" and i + 1 < len(p):
                    hl[i + 1] = HL_STRING
                    i += 2
                    continue
                if ch == in_string:
                    in_string = ""
                i += 1
                prev_sep = True
                continue
            if ch in ('"', "'"):
                in_string = ch
                hl[i] = HL_STRING
                i += 1
                continue

        if numbers:
            if ("0" <= ch <= "9" and (prev_sep or prev_hl == HL_NUMBER)) or (
                ch == "." and prev_hl == HL_NUMBER
            ):
                hl[i] = HL_NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            matched = False
            for token, mark in keywords:
                klen = len(token)
                tail = p[i + klen] if i + klen < len(p) else ""
                if p.startswith(token, i) and is_separator(tail):
                    hl[i : i + klen] = [mark] * klen
                    i += klen
                    matched = True
                    break
            if matched:
                prev_sep = False
                continue

        prev_sep = is_separator(ch)
        i += 1

    changed = row.hl_oc != in_comment
    row.hl_oc = in_comment
    return changed


def update_syntax(config: EditorConfig, idx: int) -> None:
    """Re-highlight row ``idx`` and sweep forward while block-comment state keeps changing."""
    start = idx
    while idx < config.numrows:
        if not highlight_row(config, config.rows[idx]):
            break
        idx += 1
    if idx - start > 1:
        logger.debug("block comment state propagated over rows %d..%d", start, idx)
