from __future__ import annotations

from rexp.config.schema import AppConfig, ThemeConfig

# Catppuccin flavors.
THEMES: dict[str, ThemeConfig] = {
    "latte": ThemeConfig(
        fg="#4c4f69",
        bg="#eff1f5",
        selected_fg="#eff1f5",
        selected_bg="#7287fd",
        highlight="#df8e1d",
        name="latte",
    ),
    "frappe": ThemeConfig(
        fg="#c6d0f5",
        bg="#303446",
        selected_fg="#303446",
        selected_bg="#949cbb",
        highlight="#ef9f76",
        name="frappe",
    ),
    "macchiato": ThemeConfig(
        fg="#cad3f5",
        bg="#24273a",
        selected_fg="#24273a",
        selected_bg="#939ab7",
        highlight="#f5a97f",
        name="macchiato",
    ),
    "mocha": ThemeConfig(
        fg="#cdd6f4",
        bg="#1e1e2e",
        selected_fg="#1e1e2e",
        selected_bg="#9399b2",
        highlight="#fab387",
        name="mocha",
    ),
}

DEFAULT_THEME = "mocha"


def default_config() -> AppConfig:
    return AppConfig(theme=THEMES[DEFAULT_THEME])
