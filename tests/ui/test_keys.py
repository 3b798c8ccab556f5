from __future__ import annotations

import pytest

from rexp.core.events import PromptInput
from rexp.models.enums import Command, PromptKey
from rexp.ui.keys import translate


@pytest.mark.parametrize(
    ("key", "char", "expected"),
    [
        ("j", "j", Command.MOVE_DOWN),
        ("down", None, Command.MOVE_DOWN),
        ("k", "k", Command.MOVE_UP),
        ("g", "g", Command.GO_TOP),
        ("G", "G", Command.GO_BOTTOM),
        ("shift+g", "G", Command.GO_BOTTOM),
        ("enter", "\r", Command.ACTIVATE),
        ("left", None, Command.GO_BACK),
        ("backspace", "\x08", Command.GO_BACK),
        ("slash", "/", Command.BEGIN_SEARCH),
        ("n", "n", Command.NEXT_MATCH),
        ("a", "a", Command.BEGIN_CREATE),
        ("r", "r", Command.BEGIN_RENAME),
        ("d", "d", Command.DELETE),
        ("u", "u", Command.UNDO),
        ("ctrl+r", None, Command.REDO),
        ("q", "q", Command.QUIT),
    ],
)
def test_normal_mode_bindings(key: str, char: str | None, expected: Command) -> None:
    assert translate(key, char, prompt_active=False) is expected


def test_unbound_keys_translate_to_nothing() -> None:
    assert translate("z", "z", prompt_active=False) is None
    assert translate("f5", None, prompt_active=False) is None


def test_prompt_mode_captures_text() -> None:
    assert translate("q", "q", prompt_active=True) == PromptInput(PromptKey.CHAR, "q")
    assert translate("slash", "/", prompt_active=True) == PromptInput(PromptKey.CHAR, "/")
    assert translate("space", " ", prompt_active=True) == PromptInput(PromptKey.CHAR, " ")


def test_prompt_mode_control_keys() -> None:
    assert translate("enter", "\r", prompt_active=True) == PromptInput(PromptKey.ENTER)
    assert translate("escape", "\x1b", prompt_active=True) == PromptInput(PromptKey.ESCAPE)
    assert translate("backspace", "\x08", prompt_active=True) == PromptInput(PromptKey.BACKSPACE)
    assert translate("tab", "\t", prompt_active=True) is None
