from __future__ import annotations

import os


class FileStampError(Exception):
    pass


class ConfigError(FileStampError, ValueError):
    pass


class ChecksumIOError(FileStampError, OSError):
    """Raised when a path that stat'd successfully cannot be read for hashing."""

    def __init__(self, path: str | os.PathLike[str], reason: str) -> None:
        self.path = os.fspath(path)
        self.reason = reason
        super().__init__(f"cannot read {self.path} for checksum: {reason}")
