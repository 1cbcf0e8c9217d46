"""Installed-version marker and latest-version cache on local disk."""
import time
from pathlib import Path
from typing import Optional

from vulnera_adapter.binaries.constants import (
    CACHED_VERSION_FILE,
    CACHED_VERSION_TIMESTAMP_FILE,
    INSTALLED_VERSION_FILE,
)
from vulnera_adapter.errors import LocalStateWriteError, log_error
from vulnera_adapter.logging import get_logger
from vulnera_adapter.types import CachedVersion
from vulnera_adapter.utils.fs import atomic_write_text

logger = get_logger(__name__)


def now_secs() -> int:
    """Seconds since the Unix epoch."""
    return int(time.time())


def _read_value(path: Path) -> Optional[str]:
    try:
        value = path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return None
    return value or None


def _parse_timestamp(value: Optional[str]) -> int:
    if value is None:
        return 0
    try:
        timestamp = int(value)
    except ValueError:
        return 0
    return timestamp if timestamp >= 0 else 0


class LocalState:
    """Three single-value text records kept under the install root.

    Reads never fail: missing or unreadable files read as absent. Writes are
    best effort and only log on failure, since a lost record costs at most a
    redundant download or GitHub query on the next resolution.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    @property
    def installed_version_path(self) -> Path:
        return self.root / INSTALLED_VERSION_FILE

    @property
    def cached_version_path(self) -> Path:
        return self.root / CACHED_VERSION_FILE

    @property
    def cached_timestamp_path(self) -> Path:
        return self.root / CACHED_VERSION_TIMESTAMP_FILE

    def read_installed_version(self) -> Optional[str]:
        return _read_value(self.installed_version_path)

    def write_installed_version(self, version: str) -> bool:
        return self._write(self.installed_version_path, version)

    def read_latest_cache(self) -> Optional[CachedVersion]:
        """Cached latest version, or None when no version was ever cached.

        A version without a readable timestamp is treated as fetched at the
        epoch, i.e. maximally stale.
        """
        version = _read_value(self.cached_version_path)
        if version is None:
            return None
        fetched_at = _parse_timestamp(_read_value(self.cached_timestamp_path))
        return CachedVersion(version=version, fetched_at=fetched_at)

    def write_latest_cache(self, version: str, fetched_at: Optional[int] = None) -> bool:
        if fetched_at is None:
            fetched_at = now_secs()
        written = self._write(self.cached_version_path, version)
        return self._write(self.cached_timestamp_path, str(fetched_at)) and written

    def _write(self, path: Path, value: str) -> bool:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            atomic_write_text(path, value)
        except OSError as e:
            log_error(LocalStateWriteError(str(path), e), logger=logger)
            return False
        return True
