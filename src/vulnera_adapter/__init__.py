"""Vulnera adapter binary lifecycle manager."""

from vulnera_adapter.binaries import (
    LocalState,
    ensure_binary,
    fetch_latest_stable_version,
    parse_latest_stable_version,
    resolve_platform,
    resolve_version,
)
from vulnera_adapter.config import Settings
from vulnera_adapter.errors import (
    AdapterError,
    InstallError,
    LocalStateWriteError,
    RemoteUnavailableError,
    Severity,
    UnknownServerError,
    UnsupportedPlatformError,
)
from vulnera_adapter.launcher import (
    BinaryCache,
    build_env,
    language_server_command,
    resolve_command,
)
from vulnera_adapter.types import Arch, CachedVersion, Os, PlatformDescriptor, ResolutionResult

__version__ = "0.1.0"

__all__ = [
    # Types
    "Arch",
    "CachedVersion",
    "Os",
    "PlatformDescriptor",
    "ResolutionResult",
    "Settings",

    # Lifecycle
    "BinaryCache",
    "LocalState",
    "build_env",
    "ensure_binary",
    "fetch_latest_stable_version",
    "language_server_command",
    "parse_latest_stable_version",
    "resolve_command",
    "resolve_platform",
    "resolve_version",

    # Error types
    "AdapterError",
    "InstallError",
    "LocalStateWriteError",
    "RemoteUnavailableError",
    "Severity",
    "UnknownServerError",
    "UnsupportedPlatformError",
]
