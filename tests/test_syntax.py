from __future__ import annotations

import pytest

from termedit.constants import (
    HL_COMMENT,
    HL_KEYWORD1,
    HL_KEYWORD2,
    HL_MLCOMMENT,
    HL_NORMAL,
    HL_NUMBER,
    HL_STRING,
)
from termedit.models import EditorSyntax
from termedit.rows import delete_row, insert_row, row_del_char, row_insert_char
from termedit.syntax import find_syntax, is_separator, select_syntax_highlight, syntax_to_color

from conftest import C_SYNTAX, PY_SYNTAX, make_config


def classes(cfg, idx: int = 0) -> list[int]:
    return cfg.rows[idx].hl


def test_c_declaration_scenario() -> None:
    cfg = make_config(["int x = 1;"], syntax=C_SYNTAX)
    hl = classes(cfg)

    assert hl[0:3] == [HL_KEYWORD1] * 3
    assert hl[8] == HL_NUMBER
    assert all(h == HL_NORMAL for i, h in enumerate(hl) if i not in (0, 1, 2, 8))


def test_single_line_comment_covers_row() -> None:
    cfg = make_config(["// note"], syntax=C_SYNTAX)

    assert classes(cfg) == [HL_COMMENT] * 7


def test_comment_after_code() -> None:
    cfg = make_config(["x = 1 # done"], syntax=PY_SYNTAX)
    hl = classes(cfg)

    assert hl[4] == HL_NUMBER
    assert hl[6:] == [HL_COMMENT] * 6


def test_string_hides_keywords() -> None:
    cfg = make_config(['"if while int"'], syntax=C_SYNTAX)

    assert classes(cfg) == [HL_STRING] * len('"if while int"')


def test_comment_prefix_inside_string_is_string() -> None:
    cfg = make_config(["s = '# not a comment'"], syntax=PY_SYNTAX)
    hl = classes(cfg)

    assert HL_COMMENT not in hl
    assert hl[4:] == [HL_STRING] * (len(hl) - 4)


def test_escaped_quote_stays_inside_string() -> None:
    text = r'"a\"b" c'
    cfg = make_config([text], syntax=C_SYNTAX)
    hl = classes(cfg)

    assert hl[:6] == [HL_STRING] * 6
    assert hl[7] == HL_NORMAL


def test_secondary_keywords() -> None:
    cfg = make_config(["def f(x: int) -> str:"], syntax=PY_SYNTAX)
    hl = classes(cfg)

    assert hl[0:3] == [HL_KEYWORD1] * 3
    assert hl[9:12] == [HL_KEYWORD2] * 3
    assert hl[17:20] == [HL_KEYWORD2] * 3


def test_keyword_requires_separator_after_it() -> None:
    cfg = make_config(["iffy ifx if"], syntax=C_SYNTAX)
    hl = classes(cfg)

    assert hl[0:4] == [HL_NORMAL] * 4
    assert hl[5:8] == [HL_NORMAL] * 3
    assert hl[9:11] == [HL_KEYWORD1] * 2


def test_keyword_requires_separator_before_it() -> None:
    cfg = make_config(["xif"], syntax=C_SYNTAX)

    assert classes(cfg) == [HL_NORMAL] * 3


def test_longest_keyword_wins() -> None:
    syntax = EditorSyntax(filetype="t", filematch=(".t",), keywords=("do", "do-it|"))
    cfg = make_config(["do-it now"], syntax=syntax)

    assert classes(cfg)[0:5] == [HL_KEYWORD2] * 5


def test_fractional_number() -> None:
    cfg = make_config(["x = 3.25;"], syntax=C_SYNTAX)

    assert classes(cfg)[4:8] == [HL_NUMBER] * 4


def test_leading_dot_is_not_a_number() -> None:
    cfg = make_config(["x = .5"], syntax=C_SYNTAX)
    hl = classes(cfg)

    assert hl[4] == HL_NORMAL
    assert hl[5] == HL_NUMBER


def test_digits_inside_identifier_are_not_numbers() -> None:
    cfg = make_config(["abc123"], syntax=C_SYNTAX)

    assert classes(cfg) == [HL_NORMAL] * 6


def test_no_syntax_means_all_normal() -> None:
    cfg = make_config(["int x = 1; // c"])

    assert classes(cfg) == [HL_NORMAL] * len("int x = 1; // c")


def test_block_comment_within_row() -> None:
    cfg = make_config(["a /* b */ int"], syntax=C_SYNTAX)
    hl = classes(cfg)

    assert hl[0] == HL_NORMAL
    assert hl[2:9] == [HL_MLCOMMENT] * 7
    assert hl[10:13] == [HL_KEYWORD1] * 3
    assert cfg.rows[0].hl_oc is False


def test_block_comment_spans_rows() -> None:
    cfg = make_config(["/* start", "int middle", "end */ int", "int"], syntax=C_SYNTAX)

    assert [r.hl_oc for r in cfg.rows] == [True, True, False, False]
    assert classes(cfg, 1) == [HL_MLCOMMENT] * len("int middle")
    assert classes(cfg, 2)[:6] == [HL_MLCOMMENT] * 6
    assert classes(cfg, 2)[7:] == [HL_KEYWORD1] * 3
    assert classes(cfg, 3) == [HL_KEYWORD1] * 3


def test_opening_block_comment_propagates_to_close() -> None:
    cfg = make_config(["int a;", "b", "c */", "int d;"], syntax=C_SYNTAX)
    assert [r.hl_oc for r in cfg.rows] == [False] * 4

    row_insert_char(cfg, cfg.rows[0], 0, "/")
    row_insert_char(cfg, cfg.rows[0], 1, "*")

    assert [r.hl_oc for r in cfg.rows] == [True, True, False, False]
    assert classes(cfg, 1) == [HL_MLCOMMENT]
    assert classes(cfg, 3)[:3] == [HL_KEYWORD1] * 3


def test_removing_close_propagates_to_end_of_file() -> None:
    cfg = make_config(["/* open", "b", "c */", "int d;", "e"], syntax=C_SYNTAX)

    row_del_char(cfg, cfg.rows[2], 3)

    assert [r.hl_oc for r in cfg.rows] == [True] * 5
    assert classes(cfg, 3) == [HL_MLCOMMENT] * len("int d;")
    assert classes(cfg, 4) == [HL_MLCOMMENT]


def test_propagation_over_long_file_is_iterative() -> None:
    lines = ["x"] * 5000
    cfg = make_config(lines, syntax=C_SYNTAX)

    insert_row(cfg, 0, "/*")

    assert all(r.hl_oc for r in cfg.rows)
    assert cfg.rows[-1].hl == [HL_MLCOMMENT]


def test_inserted_closing_row_ends_comment_for_rows_below() -> None:
    cfg = make_config(["/* a", "int b"], syntax=C_SYNTAX)
    insert_row(cfg, 1, "*/")

    assert [r.hl_oc for r in cfg.rows] == [True, False, False]
    assert classes(cfg, 2)[:3] == [HL_KEYWORD1] * 3


def test_deleting_opening_row_rehighlights_rows_below() -> None:
    cfg = make_config(["/*", "int x", "*/", "int y"], syntax=C_SYNTAX)
    delete_row(cfg, 0)

    assert classes(cfg, 0)[:3] == [HL_KEYWORD1] * 3
    assert cfg.rows[0].hl_oc is False


@pytest.mark.parametrize(
    ("filename", "filetype"),
    [
        ("main.c", "c"),
        ("include/defs.h", "c"),
        ("app.cpp", "c"),
        ("script.py", "python"),
        ("notes.txt", None),
        ("main.c.orig", None),
        ("Makefile", None),
    ],
)
def test_find_syntax(filename: str, filetype: str | None) -> None:
    syntax = find_syntax(filename)
    assert (syntax.filetype if syntax else None) == filetype


def test_selecting_syntax_rehighlights_existing_rows() -> None:
    cfg = make_config(["int x = 1;", "/* a", "b */"])
    assert classes(cfg) == [HL_NORMAL] * 10

    cfg.filename = "prog.c"
    select_syntax_highlight(cfg)

    assert cfg.syntax is C_SYNTAX
    assert classes(cfg)[:3] == [HL_KEYWORD1] * 3
    assert [r.hl_oc for r in cfg.rows] == [False, True, False]


@pytest.mark.parametrize("c", [" ", "\t", "\0", ",", ";", "(", "}", ""])
def test_separators(c: str) -> None:
    assert is_separator(c)


@pytest.mark.parametrize("c", ["a", "_", "1", '"', "#"])
def test_non_separators(c: str) -> None:
    assert not is_separator(c)


def test_palette() -> None:
    assert syntax_to_color(HL_COMMENT) == 36
    assert syntax_to_color(HL_MLCOMMENT) == 36
    assert syntax_to_color(HL_KEYWORD1) == 33
    assert syntax_to_color(HL_KEYWORD2) == 32
    assert syntax_to_color(HL_STRING) == 35
    assert syntax_to_color(HL_NUMBER) == 31
    assert syntax_to_color(HL_NORMAL) == 37
