from __future__ import annotations

from dataclasses import dataclass, field

from result import Result

from rexp.models.enums import OperationErrorCode


@dataclass(slots=True, frozen=True)
class DirBackup:
    """In-memory copy of a directory subtree.

    *files* maps paths relative to the backed-up root to raw bytes; *dirs* lists
    every subdirectory (parents before children) so empty ones are recreated too.
    *links* maps symlinks to their unresolved targets; links are never followed.
    """

    files: dict[str, bytes] = field(default_factory=dict)
    dirs: tuple[str, ...] = ()
    links: dict[str, str] = field(default_factory=dict)

    @property
    def total_bytes(self) -> int:
        return sum(len(data) for data in self.files.values())


@dataclass(slots=True, frozen=True)
class DeleteOp:
    path: str
    is_dir: bool
    position: int
    content: bytes | None = None
    dir_backup: DirBackup | None = None
    link_target: str | None = None


@dataclass(slots=True, frozen=True)
class CreateOp:
    path: str
    is_dir: bool


@dataclass(slots=True, frozen=True)
class RenameOp:
    old_path: str
    new_path: str


type Operation = DeleteOp | CreateOp | RenameOp


@dataclass(slots=True, frozen=True)
class OperationError:
    code: OperationErrorCode
    path: str
    message: str


type OpResult[T] = Result[T, OperationError]


def operation_error(exc: OSError, path: str, action: str) -> OperationError:
    """Translate an ``OSError`` raised while performing *action* on *path*."""
    if isinstance(exc, FileNotFoundError):
        code = OperationErrorCode.NOT_FOUND
    elif isinstance(exc, FileExistsError):
        code = OperationErrorCode.ALREADY_EXISTS
    elif isinstance(exc, PermissionError):
        code = OperationErrorCode.PERMISSION_DENIED
    elif isinstance(exc, NotADirectoryError):
        code = OperationErrorCode.NOT_DIRECTORY
    else:
        code = OperationErrorCode.IO
    detail = exc.strerror or str(exc)
    return OperationError(code=code, path=path, message=f"Cannot {action} {path}: {detail}")


def describe(op: Operation) -> str:
    if isinstance(op, DeleteOp):
        return f"delete {op.path}"
    if isinstance(op, CreateOp):
        return f"create {op.path}{'/' if op.is_dir else ''}"
    return f"rename {op.old_path} -> {op.new_path}"
