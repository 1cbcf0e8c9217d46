"""Error types for the adapter manager.

Errors carry a severity. Fatal errors stop the resolution pipeline and reach
the host; advisory errors are logged where they occur and the pipeline falls
back to the next source.
"""
from enum import Enum
from typing import Any, Dict, Optional

from vulnera_adapter.logging import get_logger

logger = get_logger(__name__)

Severity = Enum("Severity", ["ADVISORY", "FATAL"])


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[Any] = None
) -> None:
    """Log an error with context."""
    logger = logger or get_logger(__name__)

    error_info: Dict[str, Any] = {
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, AdapterError):
        error_info["severity"] = error.severity.name.lower()
        error_info["details"] = error.details

    if isinstance(error, AdapterError) and error.is_advisory:
        logger.warning("adapter_advisory_error", **error_info)
    else:
        logger.error("adapter_error", **error_info)


class AdapterError(Exception):
    """Base error class for the adapter manager."""
    def __init__(
        self,
        message: str,
        severity: Severity = Severity.FATAL,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.severity = severity
        self.details = details or {}

    @property
    def is_advisory(self) -> bool:
        return self.severity == Severity.ADVISORY


class UnsupportedPlatformError(AdapterError):
    """No release asset is published for this OS/architecture pair."""
    def __init__(self, os_name: str, arch: str):
        super().__init__(
            f"Vulnera: unsupported platform ({os_name} / {arch}). "
            "Build vulnera-adapter from source and set VULNERA_ADAPTER_PATH.",
            details={"os": os_name, "arch": arch}
        )
        self.os_name = os_name
        self.arch = arch


class InstallError(AdapterError):
    """Creating the install directory, downloading or chmod failed."""
    def __init__(self, message: str, url: str, path: str, cause: BaseException):
        super().__init__(
            f"Vulnera: {message} ({url} -> {path}): {cause}",
            details={"url": url, "path": path, "cause": str(cause)}
        )
        self.url = url
        self.path = path
        self.cause = cause


class UnknownServerError(AdapterError):
    """The host asked for a language server this extension does not provide."""
    def __init__(self, server_id: str):
        super().__init__(
            f"Vulnera: unknown language server id '{server_id}'",
            details={"server_id": server_id}
        )


class RemoteUnavailableError(AdapterError):
    """Release listing could not be fetched or did not look like one."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, severity=Severity.ADVISORY, details=details)


class LocalStateWriteError(AdapterError):
    """A marker or cache file could not be written."""
    def __init__(self, path: str, cause: BaseException):
        super().__init__(
            f"Failed to write {path}: {cause}",
            severity=Severity.ADVISORY,
            details={"path": path, "cause": str(cause)}
        )
