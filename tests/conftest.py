from __future__ import annotations

import stat
from types import SimpleNamespace

from filestamp.models import FileInfo, FileTimestamp

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
HELLO_MD5 = "5d41402abc4b2a76b9719d911017c592"


def mk_info(
    *,
    device: int = 1,
    inode: int = 2,
    mode: int = stat.S_IFREG | 0o644,
    size: int = 0,
    seconds: int = 1_700_000_000,
    nanoseconds: int = 0,
) -> FileInfo:
    return FileInfo(
        device=device,
        inode=inode,
        mode=mode,
        size=size,
        mod_time=FileTimestamp(seconds=seconds, nanoseconds=nanoseconds),
    )


def fake_stat(
    *,
    st_dev: int = 0,
    st_ino: int = 0,
    st_mode: int = 0,
    st_size: int = 0,
    st_mtime: float = 0.0,
    st_mtime_ns: int | None = 0,
) -> SimpleNamespace:
    return SimpleNamespace(
        st_dev=st_dev,
        st_ino=st_ino,
        st_mode=st_mode,
        st_size=st_size,
        st_mtime=st_mtime,
        st_mtime_ns=st_mtime_ns,
    )
