"""Single-line prompts shown in the message bar.

A prompt collects text one key at a time. ``Prompt.feed`` applies a key and
reports what the editor should do next:

=============================  ==================  ==========
key                            buffer              outcome
=============================  ==================  ==========
Backspace, Ctrl-H, Delete      drop last char      CONTINUE
Escape                         unchanged           CANCEL
Enter with non-empty buffer    unchanged           CONFIRM
Enter with empty buffer        unchanged           CONTINUE
printable (32..126)            append              CONTINUE
anything else                  unchanged           CONTINUE
=============================  ==================  ==========

The editor owns the reaction to each outcome per :class:`PromptMode`; see
``Editor.handle_prompt_key``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .constants import BACKSPACE, CTRL_H, DEL_KEY, ENTER, ESC


class PromptMode(enum.Enum):
    SEARCH = "search"
    SAVE_AS = "save_as"


class PromptOutcome(enum.Enum):
    CONTINUE = "continue"
    CONFIRM = "confirm"
    CANCEL = "cancel"


PROMPT_TEMPLATES: dict[PromptMode, str] = {
    PromptMode.SEARCH: "Search: %s (Use ESC/Arrows/Enter)",
    PromptMode.SAVE_AS: "Save as: %s",
}


@dataclass(slots=True)
class Prompt:
    mode: PromptMode
    buffer: str = ""

    @property
    def message(self) -> str:
        return PROMPT_TEMPLATES[self.mode] % self.buffer

    def feed(self, key: int) -> PromptOutcome:
        if key in (BACKSPACE, CTRL_H, DEL_KEY):
            self.buffer = self.buffer[:-1]
            return PromptOutcome.CONTINUE
        if key == ESC:
            return PromptOutcome.CANCEL
        if key == ENTER:
            return PromptOutcome.CONFIRM if self.buffer else PromptOutcome.CONTINUE
        if 32 <= key <= 126:
            self.buffer += chr(key)
        return PromptOutcome.CONTINUE
