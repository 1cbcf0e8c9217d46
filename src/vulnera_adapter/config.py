"""Runtime settings."""

from dataclasses import dataclass, field
from pathlib import Path

import appdirs

from vulnera_adapter.binaries.constants import (
    GITHUB_REPO,
    MINIMUM_ADAPTER_VERSION,
    SERVER_ID,
    VERSION_CACHE_TTL_SECS,
)

APP_NAME = "vulnera-adapter"


def default_install_root() -> Path:
    """Directory holding the adapter binary and its state files."""
    return Path(appdirs.user_data_dir(APP_NAME)) / "server"


@dataclass(frozen=True)
class Settings:
    """Adapter manager configuration"""
    install_root: Path = field(default_factory=default_install_root)
    cache_ttl: int = VERSION_CACHE_TTL_SECS
    minimum_version: str = MINIMUM_ADAPTER_VERSION
    repo: str = GITHUB_REPO
    server_id: str = SERVER_ID
    http_timeout: float = 30.0
    download_timeout: float = 300.0
