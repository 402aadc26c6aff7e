from __future__ import annotations

import logging
import os

from .config import DEFAULT_CONFIG, FileStampConfig
from .errors import ChecksumIOError
from .file_info import get_info_for_path
from .models import FileChecksum

logger = logging.getLogger(__name__)


def digest_file(path: str | os.PathLike[str], config: FileStampConfig) -> bytes:
    hasher = config.new_hasher()
    try:
        with open(path, "rb") as handle:
            while chunk := handle.read(config.chunk_size):
                hasher.update(chunk)
    except OSError as exc:
        raise ChecksumIOError(path, exc.strerror or str(exc)) from exc
    return hasher.digest()


def get_checksum_for_path(
    path: str | os.PathLike[str], config: FileStampConfig | None = None
) -> FileChecksum:
    """Return the content checksum of `path`, following symlinks.

    Missing paths and directories get reserved marker values instead of a
    digest. Raises `ChecksumIOError` when the file stat'd fine but could not
    be opened or read.
    """
    config = config or DEFAULT_CONFIG
    info = get_info_for_path(path)
    if info.is_missing:
        return FileChecksum.missing()
    if info.is_directory:
        return FileChecksum.directory()

    digest = digest_file(path, config)
    logger.debug("%s digest of %s: %s", config.algorithm, path, digest.hex())
    return FileChecksum.from_digest(digest)
