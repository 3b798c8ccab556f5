from __future__ import annotations

from rexp.core.events import Event, PromptInput
from rexp.models.enums import Command, PromptKey

NORMAL_KEYS: dict[str, Command] = {
    "j": Command.MOVE_DOWN,
    "down": Command.MOVE_DOWN,
    "k": Command.MOVE_UP,
    "up": Command.MOVE_UP,
    "g": Command.GO_TOP,
    "home": Command.GO_TOP,
    "G": Command.GO_BOTTOM,
    "shift+g": Command.GO_BOTTOM,
    "end": Command.GO_BOTTOM,
    "enter": Command.ACTIVATE,
    "right": Command.ACTIVATE,
    "l": Command.ACTIVATE,
    "left": Command.GO_BACK,
    "b": Command.GO_BACK,
    "h": Command.GO_BACK,
    "backspace": Command.GO_BACK,
    "slash": Command.BEGIN_SEARCH,
    "n": Command.NEXT_MATCH,
    "a": Command.BEGIN_CREATE,
    "r": Command.BEGIN_RENAME,
    "d": Command.DELETE,
    "u": Command.UNDO,
    "ctrl+r": Command.REDO,
    "q": Command.QUIT,
    "ctrl+c": Command.QUIT,
}

_PROMPT_KEYS: dict[str, PromptKey] = {
    "backspace": PromptKey.BACKSPACE,
    "enter": PromptKey.ENTER,
    "escape": PromptKey.ESCAPE,
}


def translate(key: str, char: str | None, prompt_active: bool) -> Event | None:
    """Map a textual key event to an explorer event, or ``None`` when unbound."""
    if prompt_active:
        prompt_key = _PROMPT_KEYS.get(key)
        if prompt_key is not None:
            return PromptInput(prompt_key)
        if char and char.isprintable():
            return PromptInput(PromptKey.CHAR, char)
        return None

    command = NORMAL_KEYS.get(key)
    if command is None and char:
        # Layouts that report shifted letters by name ("shift+g") still give us the character.
        command = NORMAL_KEYS.get(char)
    return command
