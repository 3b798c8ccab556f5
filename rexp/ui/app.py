from __future__ import annotations

import logging
from typing import override

from result import Err
from rich.style import Style
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.containers import Container
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Static

from rexp.config.schema import AppConfig, ThemeConfig
from rexp.core.events import Click, Event, OpenFile, Quit, Resize
from rexp.core.explorer import Explorer
from rexp.models.enums import Command
from rexp.services.editor import launch_editor
from rexp.services.formatting import truncate_path
from rexp.ui.keys import translate

logger = logging.getLogger(__name__)


class HelpOverlay(ModalScreen[None]):
    CSS = """
    HelpOverlay {
        align: center middle;
        background: rgba(0,0,0,0.45);
    }
    #help-box {
        width: 70%;
        height: auto;
        max-height: 90%;
        background: #282a2e;
        border: solid #81a2be;
        padding: 1 2;
        color: #c5c8c6;
    }
    """

    @override
    def compose(self) -> ComposeResult:
        content = "\n".join(
            [
                "[b #81a2be]Navigation[/]",
                "  j/k or arrows: Move",
                "  g / G / Home / End: Top/Bottom",
                "  Enter / Right / l: Open file or enter directory",
                "  Left / h / b / Backspace: Parent directory",
                "  Mouse wheel: Scroll, click: select, click again: open",
                "",
                "[b #81a2be]Search[/]",
                "  /: Search names",
                "  n: Next match",
                "",
                "[b #81a2be]Files[/]",
                "  a: Create (end with / for a directory)",
                "  r: Rename",
                "  d d: Delete",
                "  u / Ctrl+R: Undo/Redo",
                "",
                "[b #81a2be]Prompts[/]",
                "  Enter: Apply",
                "  Escape: Cancel",
                "",
                "[b #81a2be]Other[/]",
                "  ?: Toggle help",
                "  q / Ctrl+C: Quit",
            ]
        )
        yield Static(content, id="help-box")

    def key_escape(self) -> None:
        self.dismiss()

    def key_q(self) -> None:
        self.dismiss()

    def key_question_mark(self) -> None:
        self.dismiss()


class ListingView(Static):
    """Directory rows; reports clicks, wheel scrolling and its own height."""

    class RowClicked(Message):
        def __init__(self, row: int) -> None:
            super().__init__()
            self.row = row

    class Scrolled(Message):
        def __init__(self, command: Command) -> None:
            super().__init__()
            self.command = command

    class Resized(Message):
        def __init__(self, rows: int) -> None:
            super().__init__()
            self.rows = rows

    def on_click(self, event: events.Click) -> None:
        self.post_message(self.RowClicked(event.y))

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.stop()
        self.post_message(self.Scrolled(Command.SCROLL_UP))

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.stop()
        self.post_message(self.Scrolled(Command.SCROLL_DOWN))

    def on_resize(self, event: events.Resize) -> None:
        self.post_message(self.Resized(event.size.height))


class RexpApp(App[str]):
    CSS_PATH = "app.tcss"

    def __init__(self, explorer: Explorer, config: AppConfig) -> None:
        super().__init__()
        self.explorer = explorer
        self.config = config
        self.theme_colors: ThemeConfig = config.theme
        self._base_style = Style(color=config.theme.fg, bgcolor=config.theme.bg)
        self._selected_style = Style(color=config.theme.selected_fg, bgcolor=config.theme.selected_bg, bold=True)
        self._match_style = Style(color=config.theme.highlight, bgcolor=config.theme.bg, bold=True)
        self._delete_style = Style(color=config.theme.bg, bgcolor=config.theme.highlight, bold=True)
        self.status_line = ""

    @override
    def compose(self) -> ComposeResult:
        yield Container(
            Static(id="path-row"),
            ListingView(id="listing"),
            Static(id="prompt-row"),
            Static(id="status-row"),
            id="app-grid",
        )

    def on_mount(self) -> None:
        listing = self.query_one("#listing", ListingView)
        listing.styles.background = self.theme_colors.bg
        listing.styles.color = self.theme_colors.fg
        self._refresh_all()

    def _refresh_all(self) -> None:
        self._render_path_row()
        self._render_listing()
        self._render_prompt_row()
        self._render_status_row()

    def _render_path_row(self) -> None:
        path = Text("Path: ", style=Style(color=self.theme_colors.highlight))
        path.append(truncate_path(self.explorer.cwd, max(10, self.size.width - 8)))
        self.query_one("#path-row", Static).update(path)

    def _render_listing(self) -> None:
        text = Text(no_wrap=True, overflow="crop")
        explorer = self.explorer
        rows = explorer.visible_rows()
        for idx in rows:
            if idx == explorer.pending_delete:
                style = self._delete_style
            elif idx == explorer.selected:
                style = self._selected_style
            elif explorer.is_match(idx):
                style = self._match_style
            else:
                style = self._base_style
            if idx != rows.start:
                text.append("\n")
            text.append(explorer.line(idx), style=style)
        self.query_one("#listing", ListingView).update(text)

    def _render_prompt_row(self) -> None:
        if not self.explorer.prompt_active:
            self.query_one("#prompt-row", Static).update("")
            return
        prompt = Text(self.explorer.prompt_prefix, style=Style(color=self.theme_colors.highlight, bold=True))
        prompt.append(self.explorer.prompt_query)
        prompt.append("█")
        self.query_one("#prompt-row", Static).update(prompt)

    def _render_status_row(self) -> None:
        explorer = self.explorer
        journal = explorer.journal
        left = f"Row {explorer.selected}/{max(0, len(explorer.entries) - 1)} | History {journal.index}/{len(journal)}"
        pending = explorer.pending_delete
        if pending is not None:
            hints = f"Press d again to delete {explorer.entries[pending].name}"
        else:
            hints = "? help  / search  a create  r rename  d delete  u undo  q quit"

        # #status-row has one cell of padding on each side.
        width = self.size.width - 2
        gap = 4
        max_hints_len = width - len(left) - gap
        if max_hints_len < 10:
            status = left
        else:
            if len(hints) > max_hints_len:
                hints = hints[: max_hints_len - 1] + "…"
            pad = width - len(left) - len(hints)
            status = left + " " * max(gap, pad) + hints

        self.status_line = status
        self.query_one("#status-row", Static).update(Text(status, style="#969896"))

    def _dispatch(self, event: Event) -> None:
        result = self.explorer.dispatch(event)
        if isinstance(result, Err):
            error = result.unwrap_err()
            logger.info("%s: %s", error.code.value, error.message)
            self.notify(error.message, severity="error", timeout=3)
        else:
            outcome = result.unwrap()
            if isinstance(outcome, Quit):
                self.exit(outcome.cwd)
                return
            if isinstance(outcome, OpenFile):
                self._open_file(outcome.path)
        self._refresh_all()

    def _open_file(self, path: str) -> None:
        try:
            with self.suspend():
                error = launch_editor(path, self.config.editor)
        except SuspendNotSupported:
            error = "Cannot open files from this terminal"
        if error is not None:
            self.notify(error, severity="error", timeout=3)
        refreshed = self.explorer.refresh()
        if isinstance(refreshed, Err):
            self.notify(refreshed.unwrap_err().message, severity="error", timeout=3)

    def on_listing_view_row_clicked(self, message: ListingView.RowClicked) -> None:
        self._dispatch(Click(message.row))

    def on_listing_view_scrolled(self, message: ListingView.Scrolled) -> None:
        self._dispatch(message.command)

    def on_listing_view_resized(self, message: ListingView.Resized) -> None:
        self._dispatch(Resize(max(1, message.rows)))

    def on_resize(self) -> None:
        self._render_status_row()

    @override
    def on_key(self, event) -> None:  # type: ignore[override]
        if isinstance(self.screen, HelpOverlay):
            return
        key = event.key
        char = event.character or ""

        if not self.explorer.prompt_active and key == "question_mark":
            self.push_screen(HelpOverlay())
            return

        translated = translate(key, char, self.explorer.prompt_active)
        if translated is None:
            return
        event.stop()
        self._dispatch(translated)
