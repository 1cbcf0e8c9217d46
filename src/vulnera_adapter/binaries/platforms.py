"""Platform detection and mapping."""
import platform
from typing import Dict, Tuple

from vulnera_adapter.binaries.constants import BINARY_NAME
from vulnera_adapter.errors import UnsupportedPlatformError
from vulnera_adapter.types import Arch, Os, PlatformDescriptor


def _descriptor(target_triple: str, is_windows: bool = False) -> PlatformDescriptor:
    suffix = ".exe" if is_windows else ""
    return PlatformDescriptor(
        target_triple=target_triple,
        asset_name=f"{BINARY_NAME}-{target_triple}{suffix}",
        is_windows=is_windows,
    )


PLATFORM_MAPPINGS: Dict[Tuple[Os, Arch], PlatformDescriptor] = {
    (Os.LINUX, Arch.X86_64): _descriptor("x86_64-unknown-linux-gnu"),
    (Os.LINUX, Arch.AARCH64): _descriptor("aarch64-unknown-linux-gnu"),
    (Os.MAC, Arch.X86_64): _descriptor("x86_64-apple-darwin"),
    (Os.MAC, Arch.AARCH64): _descriptor("aarch64-apple-darwin"),
    (Os.WINDOWS, Arch.X86_64): _descriptor("x86_64-pc-windows-msvc", is_windows=True),
}

# platform.system() / platform.machine() spellings
SYSTEM_NAMES = {
    "linux": Os.LINUX,
    "darwin": Os.MAC,
    "windows": Os.WINDOWS,
}

MACHINE_NAMES = {
    "x86_64": Arch.X86_64,
    "amd64": Arch.X86_64,
    "aarch64": Arch.AARCH64,
    "arm64": Arch.AARCH64,
    "i386": Arch.X86,
    "i686": Arch.X86,
    "x86": Arch.X86,
}


def resolve_platform(os_: Os, arch: Arch) -> PlatformDescriptor:
    """Map an OS/architecture pair to its release asset."""
    descriptor = PLATFORM_MAPPINGS.get((os_, arch))
    if descriptor is None:
        raise UnsupportedPlatformError(os_.name.lower(), arch.name.lower())
    return descriptor


def current_platform() -> Tuple[Os, Arch]:
    """Detect the running OS and architecture."""
    system = platform.system()
    machine = platform.machine()

    os_ = SYSTEM_NAMES.get(system.lower())
    arch = MACHINE_NAMES.get(machine.lower())
    if os_ is None or arch is None:
        raise UnsupportedPlatformError(system, machine)
    return os_, arch
