from __future__ import annotations

import os

import pytest

from termedit.config import Settings
from termedit.editor import Editor
from termedit.models import EditorConfig
from termedit.rows import insert_row
from termedit.syntax import HLDB


C_SYNTAX = HLDB[0]
PY_SYNTAX = HLDB[1]


def make_config(lines: list[str], *, syntax=None, tab_stop: int = 4, screen=(10, 40)) -> EditorConfig:
    cfg = EditorConfig(tab_stop=tab_stop, syntax=syntax)
    cfg.screenrows, cfg.screencols = screen
    for line in lines:
        insert_row(cfg, cfg.numrows, line)
    cfg.dirty = 0
    return cfg


@pytest.fixture
def devnull_fd():
    fd = os.open(os.devnull, os.O_RDWR)
    yield fd
    os.close(fd)


@pytest.fixture
def editor(devnull_fd) -> Editor:
    return Editor(
        Settings(),
        stdin_fd=devnull_fd,
        stdout_fd=devnull_fd,
        window=(12, 40),
    )


def load(editor: Editor, lines: list[str]) -> Editor:
    for line in lines:
        insert_row(editor.cfg, editor.cfg.numrows, line)
    editor.cfg.dirty = 0
    return editor
