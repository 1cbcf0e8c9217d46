"""HTTP transport used for the release listing and binary downloads."""
import os
from pathlib import Path
from typing import Mapping, NamedTuple, Optional, Protocol

import aiohttp

from vulnera_adapter.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 8192


class HttpResponse(NamedTuple):
    """Status and raw body of a completed request."""
    status: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Network boundary of the adapter manager."""

    async def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> HttpResponse:
        ...

    async def download(self, url: str, dest: Path) -> None:
        ...


class AiohttpTransport:
    """Transport backed by a fresh aiohttp session per request."""

    def __init__(self, timeout: float = 30.0, download_timeout: float = 300.0):
        self.timeout = timeout
        self.download_timeout = download_timeout

    async def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> HttpResponse:
        """GET url following redirects. Raises aiohttp.ClientError on transport failure."""
        client_timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            async with session.get(url, headers=dict(headers or {}), allow_redirects=True) as response:
                body = await response.read()
                logger.debug("http_get_complete", url=url, status=response.status, size=len(body))
                return HttpResponse(status=response.status, body=body)

    async def download(self, url: str, dest: Path) -> None:
        """Stream url to dest uncompressed.

        The body is written to a sibling ``.part`` file which replaces dest
        only once complete, so an interrupted download never leaves a
        truncated binary behind.
        """
        partial = dest.with_name(dest.name + ".part")
        client_timeout = aiohttp.ClientTimeout(total=self.download_timeout)
        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                logger.info("binary_download_started", url=url, destination=str(dest))

                async with session.get(url, allow_redirects=True) as response:
                    if response.status != 200:
                        raise RuntimeError(f"Download failed with status {response.status}")

                    downloaded = 0
                    with open(partial, "wb") as f:
                        while chunk := await response.content.read(CHUNK_SIZE):
                            f.write(chunk)
                            downloaded += len(chunk)

            os.replace(partial, dest)
            logger.info("binary_download_complete", url=url, size=downloaded)

        except Exception as e:
            partial.unlink(missing_ok=True)
            raise RuntimeError(f"Failed to download {url}: {e}") from e
        except BaseException:
            # cancellation and interrupts propagate unchanged
            partial.unlink(missing_ok=True)
            raise
