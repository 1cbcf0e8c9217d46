"""Core type definitions"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple
from enum import Enum
from pathlib import Path

Os = Enum("Os", ["LINUX", "MAC", "WINDOWS"])
Arch = Enum("Arch", ["X86_64", "AARCH64", "X86"])


@dataclass(frozen=True)
class PlatformDescriptor:
    """Release asset metadata for one supported OS/architecture pair"""
    target_triple: str
    asset_name: str
    is_windows: bool


@dataclass(frozen=True)
class CachedVersion:
    """Latest release version as last seen on GitHub"""
    version: str
    fetched_at: int

    def age(self, now: int) -> int:
        return max(now - self.fetched_at, 0)


@dataclass(frozen=True)
class ResolutionResult:
    """Command the host should spawn for the language server"""
    command: Path
    env: List[Tuple[str, str]]
    args: List[str] = field(default_factory=list)

    def env_dict(self) -> Dict[str, str]:
        return dict(self.env)
