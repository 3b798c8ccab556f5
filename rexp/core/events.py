from __future__ import annotations

from dataclasses import dataclass

from rexp.models.enums import Command, PromptKey


@dataclass(slots=True, frozen=True)
class PromptInput:
    key: PromptKey
    char: str = ""


@dataclass(slots=True, frozen=True)
class Click:
    row: int


@dataclass(slots=True, frozen=True)
class Resize:
    rows: int


type Event = Command | PromptInput | Click | Resize


@dataclass(slots=True, frozen=True)
class OpenFile:
    path: str


@dataclass(slots=True, frozen=True)
class Quit:
    cwd: str


type Outcome = OpenFile | Quit | None
