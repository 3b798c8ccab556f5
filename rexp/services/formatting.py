from __future__ import annotations

from datetime import datetime

UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]

DEFAULT_DATE_FORMAT = "%a %b %d %H:%M:%S %Y"


def format_bytes(size: int) -> str:
    if size <= 0:
        return "0 B"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(UNITS) - 1:
        value /= 1024.0
        unit += 1
    if unit == 0:
        return f"{int(value)} {UNITS[unit]}"
    return f"{value:.1f} {UNITS[unit]}"


def format_timestamp(timestamp: float, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    try:
        return datetime.fromtimestamp(timestamp).strftime(fmt)
    except (OverflowError, OSError, ValueError):
        return "-"


def truncate_path(path: str, max_width: int = 110) -> str:
    if len(path) <= max_width:
        return path
    keep = max(1, max_width - 3)
    return f"...{path[-keep:]}"
