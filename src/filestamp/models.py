from __future__ import annotations

import stat
from dataclasses import dataclass
from enum import Enum

CHECKSUM_SIZE = 32


class NodeType(str, Enum):
    MISSING = "missing"
    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    OTHER = "other"


class ChangeState(str, Enum):
    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    CREATED = "created"
    REMOVED = "removed"
    STILL_MISSING = "still_missing"


@dataclass(frozen=True)
class FileTimestamp:
    seconds: int = 0
    nanoseconds: int = 0

    @property
    def total_ns(self) -> int:
        return self.seconds * 1_000_000_000 + self.nanoseconds


@dataclass(frozen=True)
class FileInfo:
    """Stat-derived signature of a filesystem entry.

    The all-zero value is reserved for paths that could not be stat'd; use
    `FileInfo.missing()` to build it and `is_missing` to test for it.
    """

    device: int = 0
    inode: int = 0
    mode: int = 0
    size: int = 0
    mod_time: FileTimestamp = FileTimestamp()

    @classmethod
    def missing(cls) -> FileInfo:
        return cls()

    @property
    def is_missing(self) -> bool:
        return (
            self.device == 0
            and self.inode == 0
            and self.mode == 0
            and self.size == 0
            and self.mod_time.seconds == 0
            and self.mod_time.nanoseconds == 0
        )

    @property
    def is_directory(self) -> bool:
        return (self.mode & stat.S_IFDIR) != 0

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)

    @property
    def node_type(self) -> NodeType:
        if self.is_missing:
            return NodeType.MISSING
        if stat.S_ISDIR(self.mode):
            return NodeType.DIR
        if self.is_symlink:
            return NodeType.SYMLINK
        if stat.S_ISREG(self.mode):
            return NodeType.FILE
        return NodeType.OTHER


@dataclass(frozen=True)
class FileChecksum:
    """Fixed 32-byte content checksum.

    All zero bytes mean the path is missing, a leading 0x01 followed by zeros
    marks a directory. Anything else is a digest left-aligned and zero-padded.
    """

    data: bytes = bytes(CHECKSUM_SIZE)

    def __post_init__(self) -> None:
        if len(self.data) != CHECKSUM_SIZE:
            raise ValueError(
                f"checksum must be {CHECKSUM_SIZE} bytes, got {len(self.data)}"
            )

    @classmethod
    def missing(cls) -> FileChecksum:
        return cls(bytes(CHECKSUM_SIZE))

    @classmethod
    def directory(cls) -> FileChecksum:
        return cls(b"\x01" + bytes(CHECKSUM_SIZE - 1))

    @classmethod
    def from_digest(cls, digest: bytes) -> FileChecksum:
        if len(digest) > CHECKSUM_SIZE:
            raise ValueError(
                f"digest of {len(digest)} bytes does not fit in {CHECKSUM_SIZE}"
            )
        return cls(digest + bytes(CHECKSUM_SIZE - len(digest)))

    @property
    def is_missing(self) -> bool:
        return self.data == bytes(CHECKSUM_SIZE)

    @property
    def is_directory(self) -> bool:
        return self == FileChecksum.directory()

    def hex(self) -> str:
        return self.data.hex()
