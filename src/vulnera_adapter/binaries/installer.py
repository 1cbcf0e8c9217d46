"""Adapter binary download and installation."""
from pathlib import Path

from vulnera_adapter.binaries.constants import (
    BINARY_NAME,
    DOWNLOAD_PATH,
    GITHUB_DOWNLOAD_BASE,
    GITHUB_REPO,
    RELEASES_PATH,
    TAG_PREFIX,
)
from vulnera_adapter.binaries.state import LocalState
from vulnera_adapter.errors import InstallError
from vulnera_adapter.logging import get_logger
from vulnera_adapter.types import PlatformDescriptor
from vulnera_adapter.utils.fetching import Transport
from vulnera_adapter.utils.fs import make_executable

logger = get_logger(__name__)


def binary_path(root: Path, descriptor: PlatformDescriptor) -> Path:
    """Install location of the adapter for this platform."""
    name = f"{BINARY_NAME}.exe" if descriptor.is_windows else BINARY_NAME
    return root / name


def download_url(descriptor: PlatformDescriptor, version: str, repo: str = GITHUB_REPO) -> str:
    return (
        f"{GITHUB_DOWNLOAD_BASE}/{repo}/{RELEASES_PATH}/{DOWNLOAD_PATH}/"
        f"{TAG_PREFIX}{version}/{descriptor.asset_name}"
    )


def needs_install(path: Path, state: LocalState, version: str) -> bool:
    """True when the binary is missing or the marker names another version."""
    return not path.exists() or state.read_installed_version() != version


async def download_binary(
    descriptor: PlatformDescriptor,
    version: str,
    state: LocalState,
    transport: Transport,
    repo: str = GITHUB_REPO,
) -> Path:
    """Download the release asset for version over the installed binary.

    Raises:
        InstallError: directory creation, download or chmod failed
    """
    url = download_url(descriptor, version, repo)
    dest = binary_path(state.root, descriptor)

    try:
        state.root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InstallError(f"failed to create {state.root}", url, str(dest), e) from e

    logger.info(
        "downloading_adapter",
        version=version,
        target=descriptor.target_triple,
        url=url,
    )

    try:
        await transport.download(url, dest)
    except Exception as e:
        raise InstallError("download failed", url, str(dest), e) from e

    if not descriptor.is_windows:
        try:
            make_executable(dest)
        except OSError as e:
            raise InstallError("chmod +x failed", url, str(dest), e) from e

    state.write_installed_version(version)

    logger.info("adapter_installed", version=version, path=str(dest))
    return dest


async def ensure_binary(
    descriptor: PlatformDescriptor,
    version: str,
    state: LocalState,
    transport: Transport,
    repo: str = GITHUB_REPO,
) -> Path:
    """Ensure the installed adapter is exactly version, downloading if not.

    Returns:
        Path to the adapter binary
    """
    dest = binary_path(state.root, descriptor)

    if needs_install(dest, state, version):
        return await download_binary(descriptor, version, state, transport, repo)

    logger.info("adapter_already_installed", version=version, path=str(dest))
    return dest
