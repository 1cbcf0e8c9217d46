import json
from pathlib import Path
from typing import Tuple

import aiohttp
import pytest

from vulnera_adapter.binaries.state import LocalState
from vulnera_adapter.config import Settings
from vulnera_adapter.types import Arch, Os
from vulnera_adapter.utils.fetching import HttpResponse

ADAPTER_BYTES = b"\x7fELF fake adapter"


def release_listing(*releases: Tuple[str, bool, bool]) -> str:
    """Compact GitHub-style releases body, newest first."""
    return json.dumps(
        [
            {
                "url": f"https://api.github.com/repos/vulnera-rs/adapter/releases/{i}",
                "tag_name": tag,
                "name": tag,
                "prerelease": prerelease,
                "draft": draft,
                "body": "notes",
            }
            for i, (tag, prerelease, draft) in enumerate(releases)
        ],
        separators=(",", ":"),
    )


class FakeTransport:
    """In-memory transport recording every request"""

    def __init__(self, body="[]", status=200, get_error=None, download_error=None, payload=ADAPTER_BYTES):
        self.body = body.encode() if isinstance(body, str) else body
        self.status = status
        self.get_error = get_error
        self.download_error = download_error
        self.payload = payload
        self.get_calls = []
        self.download_calls = []

    async def get(self, url, headers=None):
        self.get_calls.append((url, dict(headers or {})))
        if self.get_error is not None:
            raise self.get_error
        return HttpResponse(status=self.status, body=self.body)

    async def download(self, url, dest: Path):
        self.download_calls.append((url, dest))
        if self.download_error is not None:
            raise self.download_error
        dest.write_bytes(self.payload)


class UnreachableTransport(FakeTransport):
    """Transport that must never be used"""

    async def get(self, url, headers=None):
        raise AssertionError(f"unexpected GET {url}")

    async def download(self, url, dest):
        raise AssertionError(f"unexpected download {url}")


@pytest.fixture
def install_root(tmp_path) -> Path:
    return tmp_path / "server"


@pytest.fixture
def state(install_root) -> LocalState:
    return LocalState(install_root)


@pytest.fixture
def settings(install_root) -> Settings:
    return Settings(install_root=install_root)


@pytest.fixture
def linux_x64():
    return (Os.LINUX, Arch.X86_64)


@pytest.fixture
def offline_transport() -> FakeTransport:
    return FakeTransport(get_error=aiohttp.ClientConnectionError("network down"))


@pytest.fixture
def unreachable_transport() -> FakeTransport:
    return UnreachableTransport()
