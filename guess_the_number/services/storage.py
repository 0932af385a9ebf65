"""Key/value storage backends for persisted game data."""

import os
import re
from pathlib import Path
from typing import Protocol

import structlog

log = structlog.stdlib.get_logger()

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class Storage(Protocol):
    """A durable key/value slot store."""

    def get(self, key: str) -> bytes | None:
        """Return the stored value, or None when the key was never written."""
        ...

    def set(self, key: str, data: bytes) -> None:
        """Replace the value stored under ``key``."""
        ...


class MemoryStorage:
    """In-process storage, lost when the process exits."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._values: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._values.get(key)

    def set(self, key: str, data: bytes) -> None:
        self._values[key] = bytes(data)

    def keys(self) -> list[str]:
        return list(self._values)


class FileStorage:
    """Storage keeping one file per key inside a data directory.

    Writes go to a temporary file that is then renamed over the target, so a
    failed write never leaves a half-written value behind.
    """

    def __init__(self, base_path: Path, suffix: str = ".json") -> None:
        """Initialize the file storage.

        Args:
            base_path: Directory holding the value files (created on first write)
            suffix: File extension appended to each key
        """
        self.base_path = base_path
        self.suffix = suffix
        log.debug("File storage initialized", base_path=str(self.base_path))

    def path_for(self, key: str) -> Path:
        """Map a key to its file path.

        Raises:
            ValueError: If the key contains characters unsafe for a file name
        """
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_path / f"{key}{self.suffix}"

    def get(self, key: str) -> bytes | None:
        """Read the value for ``key``.

        Raises:
            OSError: If the file exists but cannot be read
        """
        path = self.path_for(key)
        if not path.exists():
            log.debug("Storage key not found", key=key, path=str(path))
            return None

        data = path.read_bytes()
        log.debug("Storage key read", key=key, size=len(data))
        return data

    def set(self, key: str, data: bytes) -> None:
        """Atomically replace the value for ``key``.

        Raises:
            OSError: If the directory or file cannot be written
        """
        path = self.path_for(key)
        temp_path = path.with_suffix(path.suffix + ".tmp")

        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            temp_path.replace(path)
        except OSError as e:
            log.error("Failed to write storage key", key=key, path=str(path), error=str(e))
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    log.warning("Could not remove temporary file", path=str(temp_path))
            raise

        log.debug("Storage key written", key=key, size=len(data))
