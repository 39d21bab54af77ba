from __future__ import annotations

TERMEDIT_VERSION = "0.1.0"
DEFAULT_TAB_STOP = 4
DEFAULT_QUIT_TIMES = 3
DEFAULT_STATUS_TIMEOUT = 5
CTRL_JUMP_COLUMNS = 5

# Syntax highlight types.
HL_NORMAL = 0
HL_COMMENT = 1
HL_MLCOMMENT = 2
HL_KEYWORD1 = 3
HL_KEYWORD2 = 4
HL_STRING = 5
HL_NUMBER = 6
HL_MATCH = 7

HL_HIGHLIGHT_STRINGS = 1 << 0
HL_HIGHLIGHT_NUMBERS = 1 << 1

SEPARATORS = ",.()+-/*=~%<>[]{}:;"
WHITESPACE = " \t\n\v\f\r\0"


def ctrl(ch: str) -> int:
    return ord(ch.upper()) & 0x1F


# Key actions.
CTRL_F = ctrl("f")
CTRL_H = ctrl("h")
TAB = 9
CTRL_L = ctrl("l")
ENTER = 13
CTRL_Q = ctrl("q")
CTRL_S = ctrl("s")
ESC = 27
BACKSPACE = 127

ARROW_LEFT = 1000
ARROW_RIGHT = 1001
ARROW_UP = 1002
ARROW_DOWN = 1003
CTRL_LEFT = 1004
CTRL_RIGHT = 1005
DEL_KEY = 1006
HOME_KEY = 1007
END_KEY = 1008
PAGE_UP = 1009
PAGE_DOWN = 1010

CSI_SIMPLE_MAP = {
    ord("A"): ARROW_UP,
    ord("B"): ARROW_DOWN,
    ord("C"): ARROW_RIGHT,
    ord("D"): ARROW_LEFT,
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}
CSI_TILDE_MAP = {
    ord("1"): HOME_KEY,
    ord("3"): DEL_KEY,
    ord("4"): END_KEY,
    ord("5"): PAGE_UP,
    ord("6"): PAGE_DOWN,
}
CSI_CTRL_MAP = {
    ord("A"): ARROW_UP,
    ord("B"): ARROW_DOWN,
    ord("C"): CTRL_RIGHT,
    ord("D"): CTRL_LEFT,
}
SS3_SIMPLE_MAP = {
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}

ANSI_HIDE_CURSOR = "\x1b[?25l"
ANSI_SHOW_CURSOR = "\x1b[?25h"
ANSI_CURSOR_HOME = "\x1b[H"
ANSI_CLEAR_LINE = "\x1b[K"
ANSI_CLEAR_SCREEN = "\x1b[2J"
ANSI_INVERT_ON = "\x1b[7m"
ANSI_INVERT_OFF = "\x1b[m"
ANSI_DEFAULT_FG = "\x1b[39m"

C_HL_EXTENSIONS = (".c", ".h", ".cpp")
C_HL_KEYWORDS = (
    "switch",
    "if",
    "while",
    "for",
    "break",
    "continue",
    "return",
    "else",
    "struct",
    "union",
    "typedef",
    "static",
    "enum",
    "class",
    "case",
    "int",
    "long",
    "double",
    "float",
    "char",
    "unsigned",
    "signed",
    "void",
)

PY_HL_EXTENSIONS = (".py",)
PY_HL_KEYWORDS = (
    "None",
    "break",
    "except",
    "in",
    "raise",
    "False",
    "await",
    "else",
    "import",
    "pass",
    "and",
    "continue",
    "for",
    "lambda",
    "try",
    "True",
    "class",
    "finally",
    "is",
    "return",
    "as",
    "def",
    "from",
    "nonlocal",
    "while",
    "async",
    "elif",
    "if",
    "not",
    "with",
    "assert",
    "del",
    "global",
    "or",
    "yield",
    # Builtin types (secondary class).
    "str|",
    "int|",
    "float|",
    "complex|",
    "list|",
    "tuple|",
    "range|",
    "dict|",
    "set|",
    "frozenset|",
    "bool|",
    "bytes|",
    "bytearray|",
    "memoryview|",
)
