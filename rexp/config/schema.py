from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from rexp.core.display import default_module_names, resolve_module_ref
from rexp.services.formatting import DEFAULT_DATE_FORMAT

DISPLAY_MODULE_NAMES: tuple[str, ...] = (
    "icon",
    "name",
    "size",
    "creation_date",
    "small_spacer",
    "medium_spacer",
    "large_spacer",
    "git_last_commit",
    "git_committer",
    "git_commit_time",
)

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(slots=True, frozen=True)
class ThemeConfig:
    fg: str
    bg: str
    selected_fg: str
    selected_bg: str
    highlight: str
    name: str | None = None

    def to_dict(self) -> dict[str, Any] | str:
        if self.name is not None:
            return self.name
        return {
            "fg": self.fg,
            "bg": self.bg,
            "selectedFg": self.selected_fg,
            "selectedBg": self.selected_bg,
            "highlight": self.highlight,
        }


@dataclass(slots=True)
class AppConfig:
    theme: ThemeConfig
    nerd_fonts: bool = True
    display_modules: list[str] = field(default_factory=list)
    date_format: str = DEFAULT_DATE_FORMAT
    editor: str | None = None
    reserved_rows: int = 2

    def module_names(self) -> list[str]:
        if self.display_modules:
            return list(self.display_modules)
        return default_module_names(self.nerd_fonts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nerdFonts": self.nerd_fonts,
            "displayModules": self.display_modules,
            "dateFormat": self.date_format,
            "editor": self.editor,
            "theme": self.theme.to_dict(),
            "reservedRows": self.reserved_rows,
        }


def _color(payload: dict[str, Any], key: str, fallback: str) -> str:
    value = str(payload.get(key, fallback))
    if not _HEX_COLOR.match(value):
        raise ValueError(f"Theme color {key!r} must look like #rrggbb, got {value!r}")
    return value


def theme_from_value(value: Any, themes: dict[str, ThemeConfig], fallback: ThemeConfig) -> ThemeConfig:
    """Resolve a flavor name or a color object; missing colors come from *fallback*."""
    if isinstance(value, str):
        theme = themes.get(value.lower())
        if theme is None:
            raise ValueError(f"Unknown theme {value!r}; expected one of {', '.join(themes)}")
        return theme
    if isinstance(value, dict):
        return ThemeConfig(
            fg=_color(value, "fg", fallback.fg),
            bg=_color(value, "bg", fallback.bg),
            selected_fg=_color(value, "selectedFg", fallback.selected_fg),
            selected_bg=_color(value, "selectedBg", fallback.selected_bg),
            highlight=_color(value, "highlight", fallback.highlight),
        )
    raise ValueError("Theme must be a flavor name or an object of colors")


def _module_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        raise ValueError("displayModules must be a list of module names")
    names = [str(x) for x in value]
    unknown = [name for name in names if ":" not in name and name not in DISPLAY_MODULE_NAMES]
    if unknown:
        raise ValueError(f"Unknown display module(s): {', '.join(unknown)}")
    for name in names:
        if ":" in name:
            resolve_module_ref(name)
    return names


def from_dict(data: dict[str, Any], defaults: AppConfig, themes: dict[str, ThemeConfig]) -> AppConfig:
    editor_raw = data.get("editor", defaults.editor)

    return AppConfig(
        nerd_fonts=bool(data.get("nerdFonts", defaults.nerd_fonts)),
        display_modules=_module_list(data["displayModules"])
        if "displayModules" in data
        else list(defaults.display_modules),
        date_format=str(data.get("dateFormat", defaults.date_format)),
        editor=str(editor_raw) if editor_raw else None,
        theme=theme_from_value(data["theme"], themes, defaults.theme) if "theme" in data else defaults.theme,
        reserved_rows=max(0, int(data.get("reservedRows", defaults.reserved_rows))),
    )
