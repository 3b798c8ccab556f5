from __future__ import annotations

import asyncio

from rexp.config.defaults import default_config
from rexp.core.display import name_module
from rexp.core.explorer import Explorer
from rexp.ui.app import HelpOverlay, RexpApp
from tests.fs_mock import MemoryFileSystem


def _explorer() -> Explorer:
    fs = MemoryFileSystem().add_file("/w/a.txt").add_file("/w/B/inner.txt").add_file("/w/c.txt")
    return Explorer("/w", [name_module], fs=fs)


def test_keys_drive_explorer_and_quit_returns_cwd() -> None:
    explorer = _explorer()

    async def scenario() -> str | None:
        app = RexpApp(explorer, default_config())
        async with app.run_test() as pilot:
            await pilot.press("j")
            assert explorer.selected == 2
            await pilot.press("k", "enter")
            assert explorer.cwd == "/w/B"
            await pilot.press("q")
        return app.return_value

    assert asyncio.run(scenario()) == "/w/B"


def test_prompt_keys_are_captured_as_text() -> None:
    explorer = _explorer()

    async def scenario() -> None:
        app = RexpApp(explorer, default_config())
        async with app.run_test() as pilot:
            await pilot.press("slash", "c", "q")
            assert explorer.prompt_active
            assert explorer.prompt_query == "cq"
            await pilot.press("escape")
            assert not explorer.prompt_active
            assert app.is_running

    asyncio.run(scenario())


def test_help_overlay_blocks_navigation() -> None:
    explorer = _explorer()

    async def scenario() -> None:
        app = RexpApp(explorer, default_config())
        async with app.run_test() as pilot:
            await pilot.press("question_mark")
            assert isinstance(app.screen, HelpOverlay)
            await pilot.press("j")
            assert explorer.selected == 1
            await pilot.press("escape")
            assert not isinstance(app.screen, HelpOverlay)

    asyncio.run(scenario())


def test_status_row_fits_inside_its_padding() -> None:
    explorer = _explorer()

    async def scenario() -> None:
        app = RexpApp(explorer, default_config())
        async with app.run_test(size=(80, 24)):
            status = app.query_one("#status-row")
            assert status.content_size.width == 78
            assert len(app.status_line) == 78
            assert app.status_line.endswith("…")

    asyncio.run(scenario())
