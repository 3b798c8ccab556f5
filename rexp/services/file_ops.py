from __future__ import annotations

import logging
import os

from rexp.models.ops import CreateOp, DeleteOp, DirBackup, RenameOp
from rexp.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)


def backup_dir(path: str, fs: FileSystem = DEFAULT_FS) -> DirBackup:
    """Snapshot every file, symlink and subdirectory below *path*.

    Walks with an explicit worklist so deep trees do not hit the recursion
    limit. Symlinks are recorded by target and never followed. Any read
    failure aborts the backup with the underlying ``OSError``.
    """
    files: dict[str, bytes] = {}
    links: dict[str, str] = {}
    dirs: list[str] = []
    pending = [path]
    while pending:
        current = pending.pop()
        for item in fs.scandir(current):
            st = item.stat if item.stat is not None else fs.stat(item.path)
            relative = os.path.relpath(item.path, path)
            if st.is_link:
                links[relative] = fs.readlink(item.path)
            elif st.is_dir:
                dirs.append(relative)
                pending.append(item.path)
            else:
                files[relative] = fs.read_bytes(item.path)
    return DirBackup(files=files, dirs=tuple(dirs), links=links)


def prepare_delete(path: str, position: int, fs: FileSystem = DEFAULT_FS) -> DeleteOp:
    """Capture everything needed to undo deleting *path*, without deleting it."""
    st = fs.stat(path)
    if st.is_link:
        return DeleteOp(path=path, is_dir=False, position=position, link_target=fs.readlink(path))
    if st.is_dir:
        backup = backup_dir(path, fs)
        logger.debug(
            "Backed up %s: %d files, %d links, %d dirs, %d bytes",
            path,
            len(backup.files),
            len(backup.links),
            len(backup.dirs),
            backup.total_bytes,
        )
        return DeleteOp(path=path, is_dir=True, position=position, dir_backup=backup)
    return DeleteOp(path=path, is_dir=False, position=position, content=fs.read_bytes(path))


def delete_path(path: str, is_dir: bool, fs: FileSystem = DEFAULT_FS) -> None:
    if is_dir:
        fs.remove_tree(path)
    else:
        fs.remove_file(path)


def restore_deleted(op: DeleteOp, fs: FileSystem = DEFAULT_FS) -> None:
    if op.is_dir:
        fs.mkdir(op.path, parents=True, exist_ok=True)
        if op.dir_backup is None:
            return
        for relative in op.dir_backup.dirs:
            fs.mkdir(os.path.join(op.path, relative), parents=True, exist_ok=True)
        for relative, data in op.dir_backup.files.items():
            full_path = os.path.join(op.path, relative)
            fs.mkdir(os.path.dirname(full_path), parents=True, exist_ok=True)
            fs.write_bytes(full_path, data)
        for relative, target in op.dir_backup.links.items():
            full_path = os.path.join(op.path, relative)
            fs.mkdir(os.path.dirname(full_path), parents=True, exist_ok=True)
            fs.symlink(target, full_path)
        return

    parent = os.path.dirname(op.path)
    if parent and not fs.exists(parent):
        fs.mkdir(parent, parents=True, exist_ok=True)
    if op.link_target is not None:
        fs.symlink(op.link_target, op.path)
    else:
        fs.write_bytes(op.path, op.content or b"")


def create_file(path: str, fs: FileSystem = DEFAULT_FS) -> None:
    parent = os.path.dirname(path)
    if parent and not fs.exists(parent):
        fs.mkdir(parent, parents=True, exist_ok=True)
    fs.create_file(path)


def create_directory(path: str, fs: FileSystem = DEFAULT_FS) -> None:
    fs.mkdir(path, parents=True, exist_ok=False)


def create_entry(op: CreateOp, fs: FileSystem = DEFAULT_FS) -> None:
    if op.is_dir:
        create_directory(op.path, fs)
    else:
        create_file(op.path, fs)


def rename_path(old_path: str, new_path: str, fs: FileSystem = DEFAULT_FS) -> None:
    # os.rename replaces an existing file silently on POSIX.
    if fs.exists(new_path):
        raise FileExistsError(17, "File exists", new_path)
    fs.rename(old_path, new_path)


def apply_rename(op: RenameOp, fs: FileSystem = DEFAULT_FS, *, reverse: bool = False) -> None:
    if reverse:
        rename_path(op.new_path, op.old_path, fs)
    else:
        rename_path(op.old_path, op.new_path, fs)
