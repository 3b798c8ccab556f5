from __future__ import annotations

DIRECTORY_ICON = "\U000f024b"  # nf-md-folder
FILE_ICON = "\U000f0219"  # nf-md-file

_ICONS_BY_EXTENSION: dict[str, str] = {
    "rs": "\U000f1617",
    "c": "",
    "cpp": "",
    "cc": "",
    "h": "",
    "py": "",
    "java": "",
    "js": "",
    "jsx": "",
    "ts": "",
    "tsx": "",
    "json": "",
    "html": "",
    "css": "",
    "go": "",
    "rb": "",
    "lua": "",
    "sh": "",
    "bash": "",
    "sql": "",
    "yaml": "",
    "yml": "",
    "toml": "",
    "lock": "",
    "xml": "",
    "md": "",
    "txt": "",
    "pdf": "",
    "png": "",
    "jpg": "",
    "jpeg": "",
    "gif": "",
    "svg": "",
    "mp3": "",
    "wav": "",
    "flac": "",
    "mp4": "",
    "mkv": "",
    "zip": "",
    "tar": "",
    "gz": "",
    "7z": "",
    "gitignore": "",
}

_ICONS_BY_NAME: dict[str, str] = {
    "cmakelists.txt": "",
    "makefile": "",
    "dockerfile": "\U000f0868",
}


def icon_for(name: str) -> str:
    """Return a nerd-font glyph for a display *name* (directories end with ``/``)."""
    if name.endswith("/"):
        return DIRECTORY_ICON
    lowered = name.lower()
    by_name = _ICONS_BY_NAME.get(lowered)
    if by_name is not None:
        return by_name
    _, dot, extension = lowered.rpartition(".")
    if not dot:
        return FILE_ICON
    return _ICONS_BY_EXTENSION.get(extension, FILE_ICON)
