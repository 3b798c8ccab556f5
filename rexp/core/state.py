from __future__ import annotations

from dataclasses import dataclass, field

from rexp.core.display import DisplayCache
from rexp.core.journal import Journal
from rexp.core.prompt import PromptController
from rexp.core.viewport import Viewport
from rexp.models.entry import Entry


def first_selectable(entries: list[Entry]) -> int:
    return 1 if len(entries) > 1 else 0


@dataclass
class AppState:
    cwd: str
    journal: Journal
    entries: list[Entry] = field(default_factory=list)
    selected: int = 0
    pending_delete: int | None = None
    display: DisplayCache = field(default_factory=DisplayCache)
    prompt: PromptController = field(default_factory=PromptController)
    viewport: Viewport = field(default_factory=Viewport)

    @property
    def current_entry(self) -> Entry | None:
        if not self.entries:
            return None
        return self.entries[self.selected]

    def clamp_selection(self) -> None:
        self.selected = max(0, min(self.selected, len(self.entries) - 1))
