from __future__ import annotations

import importlib
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from rich.cells import cell_len

from rexp.models.entry import Entry
from rexp.services.formatting import DEFAULT_DATE_FORMAT, format_bytes, format_timestamp
from rexp.services.git import last_commit_message, last_commit_time, last_committer
from rexp.services.icons import icon_for

type DisplayModule = Callable[[Entry], str]

GIT_MESSAGE_LIMIT = 40


def icon_module(entry: Entry) -> str:
    return icon_for(entry.name)


def name_module(entry: Entry) -> str:
    return entry.name


def size_module(entry: Entry) -> str:
    if entry.is_dir:
        return ""
    return format_bytes(entry.size)


def creation_date_module(date_format: str = DEFAULT_DATE_FORMAT) -> DisplayModule:
    def render(entry: Entry) -> str:
        if entry.is_parent:
            return ""
        return format_timestamp(entry.created, date_format)

    return render


def spacer_module(width: int) -> DisplayModule:
    pad = " " * width

    def render(_entry: Entry) -> str:
        return pad

    return render


def git_last_commit_module(limit: int = GIT_MESSAGE_LIMIT) -> DisplayModule:
    def render(entry: Entry) -> str:
        if entry.is_parent:
            return ""
        message = last_commit_message(entry.path)
        if len(message) > limit:
            return message[:limit] + ".."
        return message

    return render


def git_committer_module(entry: Entry) -> str:
    return "" if entry.is_parent else last_committer(entry.path)


def git_commit_time_module(entry: Entry) -> str:
    return "" if entry.is_parent else last_commit_time(entry.path)


def resolve_module_ref(ref: str) -> DisplayModule:
    """Import a user display module given as ``package.module:callable``."""
    module_name, _, attr_path = ref.partition(":")
    if not module_name or not attr_path:
        raise ValueError(f"Display module {ref!r} must look like 'package.module:callable'")
    try:
        target: Any = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            target = getattr(target, attr)
    except (ImportError, AttributeError) as exc:
        raise ValueError(f"Cannot load display module {ref!r}: {exc}") from exc
    if not callable(target):
        raise ValueError(f"Display module {ref!r} is not callable")
    return target


def module_registry(date_format: str = DEFAULT_DATE_FORMAT) -> dict[str, DisplayModule]:
    return {
        "icon": icon_module,
        "name": name_module,
        "size": size_module,
        "creation_date": creation_date_module(date_format),
        "small_spacer": spacer_module(2),
        "medium_spacer": spacer_module(4),
        "large_spacer": spacer_module(8),
        "git_last_commit": git_last_commit_module(),
        "git_committer": git_committer_module,
        "git_commit_time": git_commit_time_module,
    }


def default_module_names(nerd_fonts: bool) -> list[str]:
    names = ["icon"] if nerd_fonts else []
    names.extend(["name", "small_spacer", "creation_date", "size", "small_spacer"])
    return names


def build_modules(names: Sequence[str], date_format: str = DEFAULT_DATE_FORMAT) -> list[DisplayModule]:
    """Turn registry names and ``package.module:callable`` references into modules."""
    registry = module_registry(date_format)
    unknown = [name for name in names if ":" not in name and name not in registry]
    if unknown:
        raise ValueError(f"Unknown display module(s): {', '.join(unknown)}")
    return [resolve_module_ref(name) if ":" in name else registry[name] for name in names]


@dataclass(slots=True)
class DisplayCache:
    rows: list[list[str]] = field(default_factory=list)
    widths: list[int] = field(default_factory=list)

    def line(self, index: int) -> str:
        parts = self.rows[index]
        # Fragments wider than their column (only ever the parent row) are kept whole.
        return "".join(part + " " * max(0, width - cell_len(part)) for part, width in zip(parts, self.widths))


class DisplayPipeline:
    """Turns a listing into per-module text fragments plus column widths.

    Column widths ignore row 0, the synthetic parent entry, so its short label
    never drives alignment. The cache is rebuilt wholesale, never patched.
    """

    def __init__(self, modules: Sequence[DisplayModule]) -> None:
        self.modules: list[DisplayModule] = list(modules)
        self.rebuilds = 0

    def build(self, entries: Sequence[Entry]) -> DisplayCache:
        rows = [[module(entry) for module in self.modules] for entry in entries]
        widths = [0] * len(self.modules)
        for parts in rows[1:]:
            for column, part in enumerate(parts):
                widths[column] = max(widths[column], cell_len(part))
        self.rebuilds += 1
        return DisplayCache(rows=rows, widths=widths)
