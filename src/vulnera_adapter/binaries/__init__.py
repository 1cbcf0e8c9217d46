"""Adapter binary management."""
from vulnera_adapter.binaries.installer import (
    binary_path,
    download_url,
    ensure_binary,
)
from vulnera_adapter.binaries.platforms import (
    current_platform,
    resolve_platform,
)
from vulnera_adapter.binaries.releases import (
    fetch_latest_stable_version,
    parse_latest_stable_version,
)
from vulnera_adapter.binaries.resolver import resolve_version
from vulnera_adapter.binaries.state import LocalState

__all__ = [
    "LocalState",
    "binary_path",
    "current_platform",
    "download_url",
    "ensure_binary",
    "fetch_latest_stable_version",
    "parse_latest_stable_version",
    "resolve_platform",
    "resolve_version",
]
