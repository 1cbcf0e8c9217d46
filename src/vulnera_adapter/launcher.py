"""Language server command resolution.

Entry point called by the host every time it needs to start the Vulnera
language server. Composes platform resolution, version resolution and
installation, and returns the command to spawn.
"""
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from vulnera_adapter.binaries.constants import (
    ADAPTER_PATH_ENV,
    ADAPTER_VERSION_ENV,
    DEFAULT_LOG_FILTER,
    FORWARDED_ENV_KEYS,
    LOG_ENV,
)
from vulnera_adapter.binaries.installer import ensure_binary
from vulnera_adapter.binaries.platforms import current_platform, resolve_platform
from vulnera_adapter.binaries.resolver import resolve_version
from vulnera_adapter.binaries.state import LocalState
from vulnera_adapter.config import Settings
from vulnera_adapter.errors import UnknownServerError
from vulnera_adapter.logging import get_logger
from vulnera_adapter.types import Arch, Os, ResolutionResult
from vulnera_adapter.utils.fetching import AiohttpTransport, Transport

logger = get_logger(__name__)


class BinaryCache:
    """Last successfully resolved adapter path, owned by the host session.

    The path is only handed back after checking that the file still exists
    and that the installed-version marker matches the version just resolved.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path

    def lookup(self, state: LocalState, version: str) -> Optional[Path]:
        if self.path is None or not self.path.exists():
            return None
        if state.read_installed_version() != version:
            return None
        return self.path

    def remember(self, path: Path) -> None:
        self.path = path

    def invalidate(self) -> None:
        self.path = None


def _env_value(shell_env: Mapping[str, str], key: str) -> Optional[str]:
    value = shell_env.get(key, "").strip()
    return value or None


def read_overrides(shell_env: Mapping[str, str]) -> Tuple[Optional[str], Optional[str]]:
    """Return the (adapter path, adapter version) overrides set in shell_env."""
    return _env_value(shell_env, ADAPTER_PATH_ENV), _env_value(shell_env, ADAPTER_VERSION_ENV)


def build_env(shell_env: Mapping[str, str]) -> List[Tuple[str, str]]:
    """Environment forwarded to the adapter process."""
    env = [
        (key, value)
        for key, value in shell_env.items()
        if key in FORWARDED_ENV_KEYS and value.strip()
    ]

    if not any(key == LOG_ENV for key, _ in env):
        env.append((LOG_ENV, DEFAULT_LOG_FILTER))

    return env


async def resolve_command(
    shell_env: Mapping[str, str],
    *,
    settings: Optional[Settings] = None,
    state: Optional[LocalState] = None,
    transport: Optional[Transport] = None,
    cache: Optional[BinaryCache] = None,
    platform_info: Optional[Tuple[Os, Arch]] = None,
    now: Optional[int] = None,
) -> ResolutionResult:
    """Resolve the adapter executable and the environment to launch it with.

    Raises:
        UnsupportedPlatformError: no release asset for this platform
        InstallError: the adapter could not be installed
    """
    settings = settings or Settings()
    path_override, version_override = read_overrides(shell_env)

    # Development / CI escape hatch: skips platform, version and install checks
    if path_override is not None:
        logger.info("adapter_path_override", path=path_override)
        return ResolutionResult(command=Path(path_override), env=build_env(shell_env))

    state = state or LocalState(settings.install_root)
    transport = transport or AiohttpTransport(settings.http_timeout, settings.download_timeout)
    cache = cache if cache is not None else BinaryCache()

    os_, arch = platform_info or current_platform()
    descriptor = resolve_platform(os_, arch)

    version = await resolve_version(
        state,
        transport,
        explicit_override=version_override,
        now=now,
        ttl=settings.cache_ttl,
        minimum_version=settings.minimum_version,
        repo=settings.repo,
    )

    binary = cache.lookup(state, version)
    if binary is None:
        binary = await ensure_binary(descriptor, version, state, transport, settings.repo)
        cache.remember(binary)
    else:
        logger.debug("adapter_session_cache_hit", version=version, path=str(binary))

    return ResolutionResult(command=binary, env=build_env(shell_env))


async def language_server_command(
    server_id: str,
    shell_env: Mapping[str, str],
    **kwargs,
) -> ResolutionResult:
    """Resolve the command for server_id, which must be the Vulnera server."""
    settings = kwargs.get("settings") or Settings()
    if server_id != settings.server_id:
        raise UnknownServerError(server_id)
    return await resolve_command(shell_env, **kwargs)
