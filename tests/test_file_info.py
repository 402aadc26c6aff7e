from __future__ import annotations

import os
import stat

import pytest

import filestamp.file_info as fi
from filestamp.file_info import get_info_for_path, info_from_stat
from filestamp.models import FileInfo, FileTimestamp, NodeType

from conftest import fake_stat

needs_symlinks = pytest.mark.skipif(
    not hasattr(os, "symlink") or os.name == "nt", reason="symlinks unavailable"
)


def test_missing_path_returns_all_zero_sentinel(tmp_path) -> None:
    info = get_info_for_path(tmp_path / "missing.txt")

    assert info == FileInfo.missing()
    assert info.is_missing
    assert info.mod_time == FileTimestamp(0, 0)
    assert info.node_type == NodeType.MISSING


def test_missing_path_with_no_follow_is_also_sentinel(tmp_path) -> None:
    assert get_info_for_path(tmp_path / "nope", follow_symlinks=False).is_missing


def test_regular_file_fields_come_from_stat(tmp_path) -> None:
    target = tmp_path / "a.txt"
    target.write_bytes(b"hello")
    st = os.stat(target)

    info = get_info_for_path(target)

    assert not info.is_missing
    assert not info.is_directory
    assert info.node_type == NodeType.FILE
    assert info.device == st.st_dev
    assert info.inode == st.st_ino
    assert info.mode == st.st_mode
    assert info.size == 5
    assert info.mod_time.total_ns == st.st_mtime_ns


def test_directory_is_flagged(tmp_path) -> None:
    info = get_info_for_path(tmp_path)

    assert info.is_directory
    assert info.node_type == NodeType.DIR


def test_sub_second_mtime_is_split(tmp_path) -> None:
    target = tmp_path / "t.txt"
    target.write_bytes(b"")
    os.utime(target, ns=(1_000_000_000, 1_234_567_891))

    info = get_info_for_path(target)

    assert info.mod_time.seconds == 1
    assert info.mod_time.total_ns == os.stat(target).st_mtime_ns


def test_epoch_mtime_real_file_is_not_missing(tmp_path) -> None:
    target = tmp_path / "empty"
    target.write_bytes(b"")
    os.utime(target, ns=(0, 0))

    info = get_info_for_path(target)

    assert not info.is_missing
    assert info.size == 0


def test_degenerate_all_zero_stat_bumps_nanoseconds(monkeypatch) -> None:
    real_stat = os.stat
    monkeypatch.setattr(
        fi.os,
        "stat",
        lambda path, *a, **kw: fake_stat() if path == "/degenerate" else real_stat(path, *a, **kw),
    )

    info = get_info_for_path("/degenerate")

    assert not info.is_missing
    assert info.mod_time == FileTimestamp(seconds=0, nanoseconds=1)
    assert (info.device, info.inode, info.mode, info.size) == (0, 0, 0, 0)


def test_degenerate_bump_only_when_everything_is_zero() -> None:
    info = info_from_stat(fake_stat(st_size=3))

    assert info.mod_time == FileTimestamp(0, 0)
    assert info.size == 3


def test_stat_failure_of_any_kind_is_missing(monkeypatch) -> None:
    real_stat = os.stat

    def deny(path, *args, **kwargs):
        if path == "/secret":
            raise PermissionError(13, "Permission denied")
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(fi.os, "stat", deny)

    assert get_info_for_path("/secret").is_missing


def test_path_with_nul_byte_is_missing() -> None:
    assert get_info_for_path("bad\0path").is_missing


def test_second_resolution_stat_has_zero_nanoseconds() -> None:
    info = info_from_stat(
        fake_stat(st_mode=stat.S_IFREG, st_mtime=42.75, st_mtime_ns=None)
    )

    assert info.mod_time == FileTimestamp(seconds=42, nanoseconds=0)


def test_pre_epoch_mtime_keeps_nanoseconds_positive() -> None:
    info = info_from_stat(fake_stat(st_mode=stat.S_IFREG, st_mtime_ns=-1))

    assert info.mod_time == FileTimestamp(seconds=-1, nanoseconds=999_999_999)


@needs_symlinks
def test_symlink_lstat_reports_link_not_target(tmp_path) -> None:
    target = tmp_path / "target.txt"
    target.write_bytes(b"content")
    link = tmp_path / "link"
    os.symlink(target, link)

    followed = get_info_for_path(link, follow_symlinks=True)
    not_followed = get_info_for_path(link, follow_symlinks=False)

    assert followed == get_info_for_path(target)
    assert followed.node_type == NodeType.FILE
    assert not_followed.is_symlink
    assert not_followed.node_type == NodeType.SYMLINK
    assert not_followed != followed


@needs_symlinks
def test_dangling_symlink_is_missing_only_when_followed(tmp_path) -> None:
    link = tmp_path / "dangling"
    os.symlink(tmp_path / "gone", link)

    assert get_info_for_path(link).is_missing
    assert get_info_for_path(link, follow_symlinks=False).is_symlink


def test_unchanged_file_gives_equal_signature(tmp_path) -> None:
    target = tmp_path / "stable.txt"
    target.write_text("same", encoding="utf-8")

    assert get_info_for_path(target) == get_info_for_path(target)
