from __future__ import annotations

from dataclasses import dataclass

PARENT_NAME = "../"


@dataclass(slots=True, frozen=True)
class Entry:
    path: str
    name: str
    is_dir: bool
    created: float = 0.0
    size: int = 0
    is_link: bool = False

    @property
    def is_parent(self) -> bool:
        return self.name == PARENT_NAME
