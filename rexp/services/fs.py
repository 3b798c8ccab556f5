from __future__ import annotations

import os
import shutil
import stat as statmod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol


@dataclass(slots=True, frozen=True)
class StatResult:
    size: int
    mtime: float
    created: float
    is_dir: bool
    is_link: bool = False


@dataclass(slots=True, frozen=True)
class DirEntry:
    path: str
    name: str
    stat: StatResult | None = None


class FileSystem(Protocol):
    def expanduser(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def absolute(self, path: str) -> str: ...

    def stat(self, path: str) -> StatResult: ...

    def scandir(self, path: str) -> Iterable[DirEntry]: ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...

    def read_bytes(self, path: str) -> bytes: ...

    def write_bytes(self, path: str, data: bytes) -> None: ...

    def create_file(self, path: str) -> None: ...

    def mkdir(self, path: str, parents: bool = False, exist_ok: bool = False) -> None: ...

    def remove_file(self, path: str) -> None: ...

    def remove_tree(self, path: str) -> None: ...

    def rename(self, old_path: str, new_path: str) -> None: ...

    def readlink(self, path: str) -> str: ...

    def symlink(self, target: str, path: str) -> None: ...


def _to_stat_result(st: os.stat_result, is_link: bool = False) -> StatResult:
    return StatResult(
        size=st.st_size,
        mtime=st.st_mtime,
        created=getattr(st, "st_birthtime", st.st_ctime),
        is_dir=statmod.S_ISDIR(st.st_mode),
        is_link=is_link,
    )


class OsFileSystem:
    def expanduser(self, path: str) -> str:
        return str(Path(path).expanduser())

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def absolute(self, path: str) -> str:
        return os.path.normpath(os.path.abspath(path))

    def stat(self, path: str) -> StatResult:
        st = os.stat(path, follow_symlinks=False)
        if not statmod.S_ISLNK(st.st_mode):
            return _to_stat_result(st)
        # Links report their target's kind; dangling ones stay plain files.
        try:
            return _to_stat_result(os.stat(path), is_link=True)
        except OSError:
            return _to_stat_result(st, is_link=True)

    def scandir(self, path: str) -> Iterable[DirEntry]:
        with os.scandir(path) as entries:
            for e in entries:
                try:
                    if e.is_symlink():
                        sr = self.stat(e.path)
                    else:
                        sr = _to_stat_result(e.stat(follow_symlinks=False))
                except OSError:
                    sr = None
                yield DirEntry(path=e.path, name=e.name, stat=sr)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def write_bytes(self, path: str, data: bytes) -> None:
        Path(path).write_bytes(data)

    def create_file(self, path: str) -> None:
        with open(path, "xb"):
            pass

    def mkdir(self, path: str, parents: bool = False, exist_ok: bool = False) -> None:
        Path(path).mkdir(parents=parents, exist_ok=exist_ok)

    def remove_file(self, path: str) -> None:
        os.remove(path)

    def remove_tree(self, path: str) -> None:
        shutil.rmtree(path)

    def rename(self, old_path: str, new_path: str) -> None:
        os.rename(old_path, new_path)

    def readlink(self, path: str) -> str:
        return os.readlink(path)

    def symlink(self, target: str, path: str) -> None:
        os.symlink(target, path)


DEFAULT_FS: FileSystem = OsFileSystem()
