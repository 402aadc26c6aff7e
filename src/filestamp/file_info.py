from __future__ import annotations

import logging
import os
from dataclasses import replace

from .models import FileInfo, FileTimestamp

logger = logging.getLogger(__name__)


def _mod_time(st: os.stat_result) -> FileTimestamp:
    mtime_ns = getattr(st, "st_mtime_ns", None)
    if mtime_ns is None:
        return FileTimestamp(seconds=int(st.st_mtime), nanoseconds=0)
    seconds, nanoseconds = divmod(int(mtime_ns), 1_000_000_000)
    return FileTimestamp(seconds=seconds, nanoseconds=nanoseconds)


def info_from_stat(st: os.stat_result) -> FileInfo:
    """Build a signature from a successful stat result.

    A real entry whose fields are all zero would collide with the missing
    sentinel, so its modification time is bumped by one nanosecond.
    """
    info = FileInfo(
        device=st.st_dev,
        inode=st.st_ino,
        mode=st.st_mode,
        size=st.st_size,
        mod_time=_mod_time(st),
    )
    if info.is_missing:
        info = replace(info, mod_time=FileTimestamp(seconds=0, nanoseconds=1))
    return info


def get_info_for_path(
    path: str | os.PathLike[str], follow_symlinks: bool = True
) -> FileInfo:
    try:
        st = os.stat(path) if follow_symlinks else os.lstat(path)
    except OSError as exc:
        logger.debug("stat failed for %s, treating as missing: %s", path, exc)
        return FileInfo.missing()
    except ValueError as exc:
        # embedded NUL bytes and similar unrepresentable paths
        logger.debug("invalid path %r, treating as missing: %s", path, exc)
        return FileInfo.missing()
    return info_from_stat(st)
