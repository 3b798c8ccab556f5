from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence

from result import Err, Ok

from rexp.core.display import DisplayModule, DisplayPipeline
from rexp.core.events import Click, Event, OpenFile, Outcome, PromptInput, Quit, Resize
from rexp.core.journal import Journal
from rexp.core.prompt import CreateRequest, PromptAction, RenameRequest, SelectIndex
from rexp.core.state import AppState, first_selectable
from rexp.models.entry import Entry
from rexp.models.enums import Command, OperationErrorCode
from rexp.models.ops import CreateOp, DeleteOp, OperationError, OpResult, RenameOp, describe, operation_error
from rexp.services import file_ops
from rexp.services.fs import DEFAULT_FS, FileSystem
from rexp.services.listing import index_of, list_directory

logger = logging.getLogger(__name__)


def resolve_start(path: str, fs: FileSystem = DEFAULT_FS) -> OpResult[str]:
    """Validate and resolve the directory the explorer starts in."""
    expanded = fs.expanduser(path)
    if not fs.exists(expanded):
        return Err(
            OperationError(
                code=OperationErrorCode.NOT_FOUND,
                path=expanded,
                message="Path does not exist",
            )
        )

    resolved = fs.absolute(expanded)
    try:
        root_stat = fs.stat(resolved)
    except OSError as exc:
        return Err(operation_error(exc, resolved, "stat"))
    if not root_stat.is_dir:
        return Err(
            OperationError(
                code=OperationErrorCode.NOT_DIRECTORY,
                path=resolved,
                message="Path is not a directory",
            )
        )
    return Ok(resolved)


class Explorer:
    """Single owner of the browser state; every input goes through :meth:`dispatch`."""

    def __init__(
        self,
        cwd: str,
        modules: Sequence[DisplayModule],
        fs: FileSystem = DEFAULT_FS,
        viewport_rows: int = 20,
    ) -> None:
        self._fs = fs
        self.pipeline = DisplayPipeline(modules)
        entries = list_directory(cwd, fs)
        self.state = AppState(cwd=cwd, journal=Journal(fs), entries=entries, selected=first_selectable(entries))
        self.state.display = self.pipeline.build(entries)
        self.state.viewport.resize(viewport_rows, self.state.selected, len(entries))

        self._commands: dict[Command, Callable[[], OpResult[Outcome]]] = {
            Command.MOVE_DOWN: lambda: self._move_to(self.state.selected + 1),
            Command.MOVE_UP: lambda: self._move_to(self.state.selected - 1),
            Command.GO_TOP: lambda: self._move_to(0),
            Command.GO_BOTTOM: lambda: self._move_to(len(self.state.entries) - 1),
            Command.ACTIVATE: self._activate,
            Command.GO_BACK: self._go_back,
            Command.BEGIN_SEARCH: self._begin_search,
            Command.NEXT_MATCH: self._next_match,
            Command.BEGIN_CREATE: self._begin_create,
            Command.BEGIN_RENAME: self._begin_rename,
            Command.DELETE: self._delete,
            Command.UNDO: self._undo,
            Command.REDO: self._redo,
            Command.SCROLL_UP: self._scroll_up,
            Command.SCROLL_DOWN: self._scroll_down,
            Command.QUIT: lambda: Ok(Quit(self.state.cwd)),
        }

    @classmethod
    def open(
        cls,
        path: str,
        modules: Sequence[DisplayModule],
        fs: FileSystem = DEFAULT_FS,
        viewport_rows: int = 20,
    ) -> OpResult[Explorer]:
        resolved = resolve_start(path, fs)
        if isinstance(resolved, Err):
            return resolved
        try:
            return Ok(cls(resolved.unwrap(), modules, fs=fs, viewport_rows=viewport_rows))
        except OSError as exc:
            return Err(operation_error(exc, resolved.unwrap(), "list"))

    # --- read-only view for the renderer ---

    @property
    def cwd(self) -> str:
        return self.state.cwd

    @property
    def entries(self) -> list[Entry]:
        return self.state.entries

    @property
    def selected(self) -> int:
        return self.state.selected

    @property
    def journal(self) -> Journal:
        return self.state.journal

    @property
    def prompt_active(self) -> bool:
        return self.state.prompt.is_active

    @property
    def prompt_prefix(self) -> str:
        return self.state.prompt.prefix

    @property
    def prompt_query(self) -> str:
        return self.state.prompt.query

    @property
    def pending_delete(self) -> int | None:
        return self.state.pending_delete

    @property
    def can_undo(self) -> bool:
        return self.state.journal.can_undo

    @property
    def can_redo(self) -> bool:
        return self.state.journal.can_redo

    def line(self, index: int) -> str:
        return self.state.display.line(index)

    def is_match(self, index: int) -> bool:
        return self.state.prompt.is_match(index)

    def visible_rows(self) -> range:
        return self.state.viewport.visible_range(len(self.state.entries))

    # --- dispatch ---

    def dispatch(self, event: Event) -> OpResult[Outcome]:
        if isinstance(event, Resize):
            self.state.viewport.resize(event.rows, self.state.selected, len(self.state.entries))
            return Ok(None)

        if event is not Command.DELETE:
            self.state.pending_delete = None

        if isinstance(event, PromptInput):
            if not self.state.prompt.is_active:
                return Ok(None)
            action = self.state.prompt.handle(event.key, event.char)
            if action is None:
                return Ok(None)
            return self._apply_prompt_action(action)

        if self.state.prompt.is_active:
            return Ok(None)
        if isinstance(event, Click):
            return self._click(event.row)
        return self._commands[event]()

    def refresh(self) -> OpResult[Outcome]:
        entry = self.state.current_entry
        return self._reload(entry.path if entry is not None and self.state.selected > 0 else None)

    # --- selection and viewport ---

    def _move_to(self, index: int) -> OpResult[Outcome]:
        self.state.selected = index
        self.state.clamp_selection()
        self._sync_viewport()
        return Ok(None)

    def _sync_viewport(self) -> None:
        self.state.viewport.update(self.state.selected, len(self.state.entries))

    def _scroll_up(self) -> OpResult[Outcome]:
        self.state.viewport.scroll_up()
        self.state.selected = self.state.viewport.clamp_selection(self.state.selected, len(self.state.entries))
        return Ok(None)

    def _scroll_down(self) -> OpResult[Outcome]:
        self.state.viewport.scroll_down(len(self.state.entries))
        self.state.selected = self.state.viewport.clamp_selection(self.state.selected, len(self.state.entries))
        return Ok(None)

    def _click(self, row: int) -> OpResult[Outcome]:
        index = self.state.viewport.start + row
        if row < 0 or index >= len(self.state.entries):
            return Ok(None)
        if index == self.state.selected:
            return self._activate()
        return self._move_to(index)

    # --- listing rebuilds ---

    def _install_listing(self, entries: list[Entry], select_path: str | None) -> None:
        self.state.entries = entries
        self.state.display = self.pipeline.build(entries)
        self.state.prompt.forget_matches()
        target = index_of(entries, select_path) if select_path is not None else None
        if target is not None:
            self.state.selected = target
        self.state.clamp_selection()
        self._sync_viewport()

    def _reload(self, select_path: str | None = None) -> OpResult[Outcome]:
        try:
            entries = list_directory(self.state.cwd, self._fs)
        except OSError as exc:
            logger.warning("Cannot list %s: %s", self.state.cwd, exc)
            return Err(operation_error(exc, self.state.cwd, "list"))
        self._install_listing(entries, select_path)
        return Ok(None)

    def _change_directory(self, target: str, select_path: str | None = None) -> OpResult[Outcome]:
        target = os.path.normpath(target)
        try:
            entries = list_directory(target, self._fs)
        except OSError as exc:
            logger.debug("Cannot enter %s: %s", target, exc)
            self._reload()
            return Err(operation_error(exc, target, "open"))
        self.state.cwd = target
        self.state.selected = first_selectable(entries)
        self.state.viewport.reset()
        self._install_listing(entries, select_path)
        return Ok(None)

    # --- navigation ---

    def _activate(self) -> OpResult[Outcome]:
        entry = self.state.current_entry
        if entry is None:
            return Ok(None)
        if self.state.selected == 0:
            return self._go_back()
        if entry.is_dir:
            return self._change_directory(entry.path)
        if not self._fs.exists(entry.path):
            self._reload()
            return Err(
                OperationError(
                    code=OperationErrorCode.NOT_FOUND,
                    path=entry.path,
                    message=f"{entry.path} no longer exists",
                )
            )
        return Ok(OpenFile(entry.path))

    def _go_back(self) -> OpResult[Outcome]:
        parent = os.path.dirname(self.state.cwd)
        if not parent or parent == self.state.cwd:
            return Ok(None)
        return self._change_directory(parent, select_path=self.state.cwd)

    # --- prompts ---

    def _begin_search(self) -> OpResult[Outcome]:
        self.state.prompt.begin_search(self.state.entries)
        return Ok(None)

    def _next_match(self) -> OpResult[Outcome]:
        index = self.state.prompt.next_match()
        if index is not None:
            self._move_to(index)
        return Ok(None)

    def _begin_create(self) -> OpResult[Outcome]:
        self.state.prompt.begin_create(self.state.cwd)
        return Ok(None)

    def _begin_rename(self) -> OpResult[Outcome]:
        entry = self.state.current_entry
        if entry is None or self.state.selected == 0:
            return Ok(None)
        self.state.prompt.begin_rename(entry)
        return Ok(None)

    def _apply_prompt_action(self, action: PromptAction) -> OpResult[Outcome]:
        if isinstance(action, SelectIndex):
            return self._move_to(action.index)
        if isinstance(action, CreateRequest):
            return self._create(CreateOp(path=action.path, is_dir=action.is_dir))
        if isinstance(action, RenameRequest):
            return self._rename(RenameOp(old_path=action.old_path, new_path=action.new_path))
        return Ok(None)

    def _top_level_child(self, path: str) -> str | None:
        head = os.path.relpath(path, self.state.cwd).split(os.sep, 1)[0]
        if head == os.pardir:
            return None
        return os.path.join(self.state.cwd, head)

    def _create(self, op: CreateOp) -> OpResult[Outcome]:
        try:
            file_ops.create_entry(op, self._fs)
        except OSError as exc:
            return Err(operation_error(exc, op.path, "create"))
        self.state.journal.record(op)
        return self._reload(self._top_level_child(op.path))

    def _rename(self, op: RenameOp) -> OpResult[Outcome]:
        try:
            file_ops.apply_rename(op, self._fs)
        except OSError as exc:
            return Err(operation_error(exc, op.old_path, "rename"))
        self.state.journal.record(op)
        return self._reload(op.new_path)

    # --- destructive operations ---

    def _delete(self) -> OpResult[Outcome]:
        index = self.state.selected
        if index == 0 or index >= len(self.state.entries):
            self.state.pending_delete = None
            return Ok(None)
        if self.state.pending_delete != index:
            self.state.pending_delete = index
            return Ok(None)

        self.state.pending_delete = None
        entry = self.state.entries[index]
        try:
            op = file_ops.prepare_delete(entry.path, index, self._fs)
            file_ops.delete_path(op.path, op.is_dir, self._fs)
        except OSError as exc:
            return Err(operation_error(exc, entry.path, "delete"))
        self.state.journal.record(op)
        return self._reload()

    def _undo(self) -> OpResult[Outcome]:
        result = self.state.journal.undo()
        if isinstance(result, Err):
            return result
        op = result.unwrap()
        if op is None:
            return Ok(None)
        logger.debug("Undid %s", describe(op))
        if isinstance(op, DeleteOp):
            return self._reload(op.path)
        return self._reload()

    def _redo(self) -> OpResult[Outcome]:
        result = self.state.journal.redo()
        if isinstance(result, Err):
            return result
        op = result.unwrap()
        if op is None:
            return Ok(None)
        logger.debug("Redid %s", describe(op))
        return self._reload()
