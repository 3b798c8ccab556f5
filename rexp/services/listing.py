from __future__ import annotations

import os

from rexp.models.entry import PARENT_NAME, Entry
from rexp.services.fs import DEFAULT_FS, FileSystem


def display_name(name: str, is_dir: bool) -> str:
    return f"{name}/" if is_dir else name


def parent_entry(path: str) -> Entry:
    return Entry(path=os.path.join(path, ".."), name=PARENT_NAME, is_dir=True)


def _sort_key(entry: Entry) -> str:
    return os.path.basename(entry.path).lower()


def list_directory(path: str, fs: FileSystem = DEFAULT_FS) -> list[Entry]:
    """List *path* as ``[parent, *directories, *files]``.

    Children that cannot be stat'ed are skipped; failure to open *path* itself
    raises ``OSError``.
    """
    dirs: list[Entry] = []
    files: list[Entry] = []
    for item in fs.scandir(path):
        st = item.stat
        if st is None:
            continue
        entry = Entry(
            path=item.path,
            name=display_name(item.name, st.is_dir),
            is_dir=st.is_dir,
            created=st.created,
            size=0 if st.is_dir else st.size,
            is_link=st.is_link,
        )
        (dirs if st.is_dir else files).append(entry)

    dirs.sort(key=_sort_key)
    files.sort(key=_sort_key)
    return [parent_entry(path), *dirs, *files]


def index_of(entries: list[Entry], path: str) -> int | None:
    target = os.path.normpath(path)
    for idx, entry in enumerate(entries):
        if idx > 0 and os.path.normpath(entry.path) == target:
            return idx
    return None
