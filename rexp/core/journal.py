from __future__ import annotations

import logging

from result import Err, Ok

from rexp.models.ops import CreateOp, DeleteOp, Operation, OpResult, RenameOp, describe, operation_error
from rexp.services import file_ops
from rexp.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)


def _path_of(op: Operation) -> str:
    if isinstance(op, RenameOp):
        return op.new_path
    return op.path


class Journal:
    """Linear undo/redo history of structural filesystem operations.

    ``index`` is the number of operations currently applied. A failed undo or
    redo leaves ``index`` where it was so the same step can be retried.
    """

    def __init__(self, fs: FileSystem = DEFAULT_FS) -> None:
        self._fs = fs
        self.history: list[Operation] = []
        self.index = 0

    def __len__(self) -> int:
        return len(self.history)

    @property
    def can_undo(self) -> bool:
        return self.index > 0

    @property
    def can_redo(self) -> bool:
        return self.index < len(self.history)

    def record(self, op: Operation) -> None:
        if self.index < len(self.history):
            logger.debug("Discarding %d redo step(s)", len(self.history) - self.index)
            del self.history[self.index :]
        self.history.append(op)
        self.index = len(self.history)
        logger.debug("Recorded %s (%d/%d)", describe(op), self.index, len(self.history))

    def undo(self) -> OpResult[Operation | None]:
        if not self.can_undo:
            return Ok(None)
        op = self.history[self.index - 1]
        try:
            self._apply_inverse(op)
        except OSError as exc:
            logger.warning("Undo of %s failed: %s", describe(op), exc)
            return Err(operation_error(exc, _path_of(op), "undo change to"))
        self.index -= 1
        return Ok(op)

    def redo(self) -> OpResult[Operation | None]:
        if not self.can_redo:
            return Ok(None)
        op = self.history[self.index]
        try:
            self._apply_forward(op)
        except OSError as exc:
            logger.warning("Redo of %s failed: %s", describe(op), exc)
            return Err(operation_error(exc, _path_of(op), "redo change to"))
        self.index += 1
        return Ok(op)

    def _apply_inverse(self, op: Operation) -> None:
        if isinstance(op, DeleteOp):
            file_ops.restore_deleted(op, self._fs)
        elif isinstance(op, CreateOp):
            file_ops.delete_path(op.path, op.is_dir, self._fs)
        else:
            file_ops.apply_rename(op, self._fs, reverse=True)

    def _apply_forward(self, op: Operation) -> None:
        if isinstance(op, DeleteOp):
            # The backup stays on the operation so it can be undone again.
            file_ops.delete_path(op.path, op.is_dir, self._fs)
        elif isinstance(op, CreateOp):
            file_ops.create_entry(op, self._fs)
        else:
            file_ops.apply_rename(op, self._fs)
