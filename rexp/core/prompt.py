from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from rexp.models.entry import Entry
from rexp.models.enums import Mode, PromptKey

_PREFIXES: dict[Mode, str] = {
    Mode.NORMAL: "",
    Mode.SEARCH: "Search: ",
    Mode.CREATE: "Create: ",
    Mode.RENAME: "Rename: ",
}


@dataclass(slots=True)
class PromptState:
    mode: Mode = Mode.NORMAL
    query: str = ""
    matches: list[int] = field(default_factory=list)
    current_match: int = 0


@dataclass(slots=True, frozen=True)
class SelectIndex:
    index: int


@dataclass(slots=True, frozen=True)
class CreateRequest:
    path: str
    is_dir: bool


@dataclass(slots=True, frozen=True)
class RenameRequest:
    old_path: str
    new_path: str


@dataclass(slots=True, frozen=True)
class PromptClosed:
    pass


type PromptAction = SelectIndex | CreateRequest | RenameRequest | PromptClosed


def search_matches(entries: Sequence[Entry], query: str) -> list[int]:
    """Indices (never the parent row) whose display name contains *query*, case-insensitively."""
    if not query:
        return []
    needle = query.lower()
    return [idx for idx, entry in enumerate(entries) if idx > 0 and needle in entry.name.lower()]


class PromptController:
    def __init__(self) -> None:
        self.state = PromptState()
        self._entries: Sequence[Entry] = ()
        self._cwd = ""
        self._rename_target = ""
        self.last_matches: list[int] = []
        self.match_cursor = 0

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def query(self) -> str:
        return self.state.query

    @property
    def is_active(self) -> bool:
        return self.state.mode is not Mode.NORMAL

    @property
    def prefix(self) -> str:
        return _PREFIXES[self.state.mode]

    def is_match(self, index: int) -> bool:
        return self.state.mode is Mode.SEARCH and index in self.state.matches

    def _enter(self, mode: Mode, text: str = "") -> None:
        self.state = PromptState(mode=mode, query=text)

    def begin_search(self, entries: Sequence[Entry]) -> None:
        self._entries = entries
        self._enter(Mode.SEARCH)

    def begin_create(self, cwd: str) -> None:
        self._cwd = cwd
        self._enter(Mode.CREATE)

    def begin_rename(self, entry: Entry) -> None:
        self._rename_target = entry.path
        self._enter(Mode.RENAME, entry.name)

    def close(self) -> None:
        self._enter(Mode.NORMAL)

    def forget_matches(self) -> None:
        self.last_matches = []
        self.match_cursor = 0

    def next_match(self) -> int | None:
        if self.is_active or not self.last_matches:
            return None
        self.match_cursor = (self.match_cursor + 1) % len(self.last_matches)
        return self.last_matches[self.match_cursor]

    def handle(self, key: PromptKey, char: str = "") -> PromptAction | None:
        """Feed one key to the active prompt.

        Returns ``None`` while the prompt keeps capturing input, otherwise the
        action the prompt resolved to; the mode is back to ``NORMAL`` by then.
        """
        handler = _TRANSITIONS.get((self.state.mode, key))
        if handler is None:
            return None
        return handler(self, char)

    # --- shared editing ---

    def _append(self, char: str) -> PromptAction | None:
        self.state.query += char
        return None

    def _backspace(self, _char: str) -> PromptAction | None:
        self.state.query = self.state.query[:-1]
        return None

    def _cancel(self, _char: str) -> PromptAction | None:
        self.close()
        return PromptClosed()

    # --- search ---

    def _refresh_matches(self) -> None:
        self.state.matches = search_matches(self._entries, self.state.query)
        self.state.current_match = 0

    def _search_append(self, char: str) -> PromptAction | None:
        self._append(char)
        self._refresh_matches()
        return None

    def _search_backspace(self, char: str) -> PromptAction | None:
        self._backspace(char)
        self._refresh_matches()
        return None

    def _search_commit(self, _char: str) -> PromptAction | None:
        self._refresh_matches()
        self.last_matches = list(self.state.matches)
        self.match_cursor = 0
        self.close()
        if not self.last_matches:
            return PromptClosed()
        return SelectIndex(self.last_matches[0])

    # --- create / rename ---

    def _create_commit(self, _char: str) -> PromptAction | None:
        query = self.state.query
        self.close()
        if not query:
            return PromptClosed()
        path = os.path.normpath(os.path.join(self._cwd, query))
        return CreateRequest(path=path, is_dir=query.endswith(("/", os.sep)))

    def _rename_commit(self, _char: str) -> PromptAction | None:
        query = self.state.query
        self.close()
        if not query:
            return PromptClosed()
        old_path = os.path.normpath(self._rename_target)
        new_path = os.path.normpath(os.path.join(os.path.dirname(old_path), query))
        if new_path == old_path:
            return PromptClosed()
        return RenameRequest(old_path=old_path, new_path=new_path)


type _Handler = Callable[[PromptController, str], PromptAction | None]

_TRANSITIONS: dict[tuple[Mode, PromptKey], _Handler] = {
    (Mode.SEARCH, PromptKey.CHAR): PromptController._search_append,
    (Mode.SEARCH, PromptKey.BACKSPACE): PromptController._search_backspace,
    (Mode.SEARCH, PromptKey.ENTER): PromptController._search_commit,
    (Mode.SEARCH, PromptKey.ESCAPE): PromptController._cancel,
    (Mode.CREATE, PromptKey.CHAR): PromptController._append,
    (Mode.CREATE, PromptKey.BACKSPACE): PromptController._backspace,
    (Mode.CREATE, PromptKey.ENTER): PromptController._create_commit,
    (Mode.CREATE, PromptKey.ESCAPE): PromptController._cancel,
    (Mode.RENAME, PromptKey.CHAR): PromptController._append,
    (Mode.RENAME, PromptKey.BACKSPACE): PromptController._backspace,
    (Mode.RENAME, PromptKey.ENTER): PromptController._rename_commit,
    (Mode.RENAME, PromptKey.ESCAPE): PromptController._cancel,
}
