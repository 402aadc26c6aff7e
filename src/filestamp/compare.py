from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import UTC, datetime

from .checksum import get_checksum_for_path
from .config import FileStampConfig
from .file_info import get_info_for_path
from .models import ChangeState, FileChecksum, FileInfo, FileTimestamp


@dataclass(frozen=True)
class InfoDiff:
    state: ChangeState
    changed_fields: tuple[str, ...] = ()
    details: tuple[str, ...] = ()


@dataclass(frozen=True)
class FileState:
    info: FileInfo
    checksum: FileChecksum | None = None


def _format_mode(mode: int) -> str:
    return f"0o{mode:06o}"


def _format_mtime(value: FileTimestamp) -> str:
    try:
        dt = datetime.fromtimestamp(value.seconds, tz=UTC)
    except (ValueError, OverflowError, OSError):
        # outside the range datetime can represent
        return f"{value.seconds}.{value.nanoseconds:09d}"
    return f"{dt.strftime('%Y-%m-%d %H:%M:%S')}.{value.nanoseconds:09d} UTC"


def _presence_state(previous_missing: bool, current_missing: bool) -> ChangeState | None:
    if previous_missing and current_missing:
        return ChangeState.STILL_MISSING
    if previous_missing:
        return ChangeState.CREATED
    if current_missing:
        return ChangeState.REMOVED
    return None


def compare_info(previous: FileInfo, current: FileInfo) -> InfoDiff:
    presence = _presence_state(previous.is_missing, current.is_missing)
    if presence is not None:
        return InfoDiff(state=presence)

    diff: list[str] = []
    details: list[str] = []
    if previous.device != current.device:
        diff.append("device")
        details.append(f"device: previous={previous.device} current={current.device}")
    if previous.inode != current.inode:
        diff.append("inode")
        details.append(f"inode: previous={previous.inode} current={current.inode}")
    if previous.mode != current.mode:
        diff.append("mode")
        details.append(
            f"mode: previous={_format_mode(previous.mode)} current={_format_mode(current.mode)}"
        )
    if previous.size != current.size:
        diff.append("size")
        details.append(f"size: previous={previous.size} current={current.size}")
    if previous.mod_time != current.mod_time:
        diff.append("mtime")
        details.append(
            f"mtime: previous={_format_mtime(previous.mod_time)} current={_format_mtime(current.mod_time)}"
        )

    state = ChangeState.MODIFIED if diff else ChangeState.UNCHANGED
    return InfoDiff(state=state, changed_fields=tuple(diff), details=tuple(details))


def compare_checksums(previous: FileChecksum, current: FileChecksum) -> ChangeState:
    presence = _presence_state(previous.is_missing, current.is_missing)
    if presence is not None:
        return presence
    return ChangeState.UNCHANGED if previous == current else ChangeState.MODIFIED


def capture_state(
    path: str | os.PathLike[str],
    *,
    follow_symlinks: bool = True,
    with_checksum: bool = False,
    config: FileStampConfig | None = None,
) -> FileState:
    info = get_info_for_path(path, follow_symlinks=follow_symlinks)
    checksum = get_checksum_for_path(path, config) if with_checksum else None
    return FileState(info=info, checksum=checksum)


def state_changed(previous: FileState, current: FileState) -> bool:
    """Decide whether a path changed between two captures.

    Checksums win when both captures carry one, so a touched but otherwise
    identical file counts as unchanged. Without checksums any metadata
    difference is a change.
    """
    if previous.checksum is not None and current.checksum is not None:
        return compare_checksums(previous.checksum, current.checksum) not in {
            ChangeState.UNCHANGED,
            ChangeState.STILL_MISSING,
        }
    return compare_info(previous.info, current.info).state not in {
        ChangeState.UNCHANGED,
        ChangeState.STILL_MISSING,
    }
