from __future__ import annotations

import hashlib
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError
from .models import CHECKSUM_SIZE

DEFAULT_ALGORITHM = "sha256"
DEFAULT_CHUNK_SIZE = 4 * 4096
CONFIG_TABLE = "filestamp"


@dataclass(frozen=True)
class FileStampConfig:
    algorithm: str = DEFAULT_ALGORITHM
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, str):
            raise ConfigError(f"algorithm must be a string, got {self.algorithm!r}")
        if self.algorithm not in hashlib.algorithms_available:
            raise ConfigError(f"unknown digest algorithm: {self.algorithm!r}")
        try:
            digest_size = self.new_hasher().digest_size
        except ValueError as exc:
            raise ConfigError(
                f"digest algorithm {self.algorithm!r} is unavailable: {exc}"
            ) from exc
        if digest_size == 0 or digest_size > CHECKSUM_SIZE:
            raise ConfigError(
                f"digest algorithm {self.algorithm!r} produces {digest_size} bytes;"
                f" at most {CHECKSUM_SIZE} fit in a checksum"
            )
        if not isinstance(self.chunk_size, int) or isinstance(self.chunk_size, bool):
            raise ConfigError(f"chunk_size must be an integer, got {self.chunk_size!r}")
        if self.chunk_size <= 0:
            raise ConfigError(f"chunk_size must be positive, got {self.chunk_size}")

    def new_hasher(self):
        return hashlib.new(self.algorithm)


DEFAULT_CONFIG = FileStampConfig()


def _config_section(data: dict[str, object]) -> dict[str, object]:
    tool = data.get("tool")
    if isinstance(tool, dict) and isinstance(tool.get(CONFIG_TABLE), dict):
        return tool[CONFIG_TABLE]
    section = data.get(CONFIG_TABLE)
    if isinstance(section, dict):
        return section
    return data


def load_config(path: Path | None) -> FileStampConfig:
    """Read settings from a TOML file.

    Accepts a pyproject with a `[tool.filestamp]` table, a file with a
    `[filestamp]` table, or a file whose top-level keys are the settings.
    A missing file yields the defaults.
    """
    if path is None or not path.exists():
        return DEFAULT_CONFIG
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc

    section = _config_section(data)
    algorithm = section.get("algorithm", DEFAULT_ALGORITHM)
    chunk_size = section.get("chunk_size", DEFAULT_CHUNK_SIZE)
    if not isinstance(algorithm, str):
        raise ConfigError(f"algorithm must be a string in {path}")
    if not isinstance(chunk_size, int) or isinstance(chunk_size, bool):
        raise ConfigError(f"chunk_size must be an integer in {path}")
    return FileStampConfig(algorithm=algorithm.strip().lower(), chunk_size=chunk_size)
