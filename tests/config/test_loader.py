from __future__ import annotations

import json

from result import Err, Ok

from rexp.config.defaults import THEMES, default_config
from rexp.config.loader import load_config, sample_config_json
from rexp.config.schema import from_dict
from tests.fs_mock import MemoryFileSystem


def _load(payload: object) -> Ok | Err:
    fs = MemoryFileSystem().add_file("/config.json", content=json.dumps(payload))
    return load_config(path="/config.json", fs=fs)


def test_load_config_missing_uses_defaults() -> None:
    fs = MemoryFileSystem()
    result = load_config(path="/missing.json", fs=fs)
    assert isinstance(result, Ok)
    cfg = result.unwrap()
    assert cfg.nerd_fonts
    assert cfg.theme.name == "mocha"
    assert cfg.reserved_rows == 2


def test_load_config_default_location_is_under_home() -> None:
    fs = MemoryFileSystem().add_file("/mock/home/.config/rexp/config.json", content='{"nerdFonts": false}')

    result = load_config(fs=fs)

    assert isinstance(result, Ok)
    assert not result.unwrap().nerd_fonts


def test_load_config_invalid_returns_warning() -> None:
    fs = MemoryFileSystem().add_file("/config.json", content="not-json")
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Err)
    warning = result.unwrap_err()
    assert "failed reading config" in warning.lower()


def test_load_config_rejects_non_object() -> None:
    result = _load(["nerdFonts"])

    assert isinstance(result, Err)
    assert "must be a JSON object" in result.unwrap_err()


def test_theme_by_flavor_name() -> None:
    result = _load({"theme": "Latte"})

    assert isinstance(result, Ok)
    assert result.unwrap().theme == THEMES["latte"]


def test_theme_object_fills_missing_colors_from_default() -> None:
    result = _load({"theme": {"fg": "#ffffff", "highlight": "#ff0000"}})

    assert isinstance(result, Ok)
    theme = result.unwrap().theme
    assert theme.fg == "#ffffff"
    assert theme.highlight == "#ff0000"
    assert theme.bg == THEMES["mocha"].bg
    assert theme.name is None


def test_invalid_theme_values_are_errors() -> None:
    assert isinstance(_load({"theme": "solarized"}), Err)
    assert isinstance(_load({"theme": {"fg": "white"}}), Err)
    assert isinstance(_load({"theme": 7}), Err)


def test_display_modules_are_validated() -> None:
    ok = _load({"displayModules": ["name", "large_spacer", "size"]})
    assert isinstance(ok, Ok)
    assert ok.unwrap().module_names() == ["name", "large_spacer", "size"]

    bad = _load({"displayModules": ["name", "sparkles"]})
    assert isinstance(bad, Err)
    assert "sparkles" in bad.unwrap_err()


def test_display_module_references_are_resolved_at_load() -> None:
    ok = _load({"displayModules": ["name", "git_committer", "os.path:basename"]})
    assert isinstance(ok, Ok)
    assert ok.unwrap().module_names() == ["name", "git_committer", "os.path:basename"]

    missing = _load({"displayModules": ["rexp_missing_package:render"]})
    assert isinstance(missing, Err)
    assert "rexp_missing_package" in missing.unwrap_err()

    not_callable = _load({"displayModules": ["os:sep"]})
    assert isinstance(not_callable, Err)


def test_default_module_names_follow_nerd_fonts() -> None:
    result = _load({"nerdFonts": False})

    assert isinstance(result, Ok)
    assert result.unwrap().module_names() == ["name", "small_spacer", "creation_date", "size", "small_spacer"]


def test_scalar_fields_and_clamping() -> None:
    result = _load({"dateFormat": "%Y-%m-%d", "editor": "nvim -p", "reservedRows": -3})

    assert isinstance(result, Ok)
    cfg = result.unwrap()
    assert cfg.date_format == "%Y-%m-%d"
    assert cfg.editor == "nvim -p"
    assert cfg.reserved_rows == 0


def test_sample_config_round_trips_to_defaults() -> None:
    payload = json.loads(sample_config_json())

    assert payload["theme"] == "mocha"
    assert payload["dateFormat"] == "%a %b %d %H:%M:%S %Y"
    assert from_dict(payload, default_config(), THEMES) == default_config()
