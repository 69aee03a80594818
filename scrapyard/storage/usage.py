"""Disk usage reporting for restored and created archives."""

import logging
import os
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

_UNITS = ["B", "K", "M", "G", "T", "P"]


def disk_usage(paths: Sequence[str | Path], base: Path | None = None) -> int:
    """Total size in bytes of files under `paths`.

    Directories are walked recursively, symlinks are counted but not
    followed, and missing paths contribute nothing.

    Args:
        paths: Files or directories to measure.
        base: Directory that relative paths are resolved against.
    """
    total = 0
    for raw in paths:
        path = Path(raw)
        if base is not None and not path.is_absolute():
            path = base / path

        if not path.exists() and not path.is_symlink():
            logger.debug(f"Not measuring missing path: {path}")
            continue

        if path.is_dir() and not path.is_symlink():
            for root, _dirs, files in os.walk(path):
                for name in files:
                    try:
                        total += os.lstat(os.path.join(root, name)).st_size
                    except FileNotFoundError:
                        continue
        else:
            total += path.lstat().st_size
    return total


def human_size(num_bytes: int) -> str:
    """Format a byte count the way `du -h` does (e.g. 512B, 1.5K, 20M)."""
    size = float(num_bytes)
    for unit in _UNITS:
        if size < 1024 or unit == _UNITS[-1]:
            if unit == "B":
                return f"{int(size)}B"
            if size < 10:
                return f"{size:.1f}{unit}"
            return f"{size:.0f}{unit}"
        size /= 1024
    return f"{num_bytes}B"
