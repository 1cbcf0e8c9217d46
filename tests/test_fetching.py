"""Tests for the aiohttp transport."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from vulnera_adapter.utils.fetching import AiohttpTransport, HttpResponse


def mock_session(response):
    request = MagicMock()
    request.__aenter__ = AsyncMock(return_value=response)
    request.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    session.get = MagicMock(return_value=request)
    return session


def mock_response(status=200, body=b"", chunks=None):
    response = MagicMock()
    response.status = status
    response.read = AsyncMock(return_value=body)
    response.content.read = AsyncMock(side_effect=chunks if chunks is not None else [b""])
    return response


def test_http_response_ok():
    assert HttpResponse(200, b"").ok
    assert HttpResponse(204, b"").ok
    assert not HttpResponse(301, b"").ok
    assert not HttpResponse(404, b"").ok


@pytest.mark.asyncio
async def test_get_follows_redirects_with_headers():
    session = mock_session(mock_response(status=200, body=b"[]"))

    with patch("aiohttp.ClientSession", return_value=session):
        response = await AiohttpTransport().get("https://example.test/releases", headers={"Accept": "x"})

    assert response == HttpResponse(200, b"[]")
    session.get.assert_called_once_with(
        "https://example.test/releases", headers={"Accept": "x"}, allow_redirects=True
    )


@pytest.mark.asyncio
async def test_get_returns_error_status():
    session = mock_session(mock_response(status=500, body=b"oops"))

    with patch("aiohttp.ClientSession", return_value=session):
        response = await AiohttpTransport().get("https://example.test/releases")

    assert response.status == 500
    assert not response.ok


@pytest.mark.asyncio
async def test_download_streams_to_destination(tmp_path):
    dest = tmp_path / "vulnera-adapter"
    session = mock_session(mock_response(chunks=[b"\x7fELF", b" body", b""]))

    with patch("aiohttp.ClientSession", return_value=session):
        await AiohttpTransport().download("https://example.test/asset", dest)

    assert dest.read_bytes() == b"\x7fELF body"
    assert not (tmp_path / "vulnera-adapter.part").exists()


@pytest.mark.asyncio
async def test_download_bad_status(tmp_path):
    dest = tmp_path / "vulnera-adapter"
    session = mock_session(mock_response(status=404))

    with patch("aiohttp.ClientSession", return_value=session):
        with pytest.raises(RuntimeError, match="404"):
            await AiohttpTransport().download("https://example.test/asset", dest)

    assert not dest.exists()
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_interrupted_download_keeps_previous_binary(tmp_path):
    dest = tmp_path / "vulnera-adapter"
    dest.write_bytes(b"old adapter")
    session = mock_session(
        mock_response(chunks=[b"new ", aiohttp.ClientPayloadError("connection reset")])
    )

    with patch("aiohttp.ClientSession", return_value=session):
        with pytest.raises(RuntimeError, match="connection reset"):
            await AiohttpTransport().download("https://example.test/asset", dest)

    assert dest.read_bytes() == b"old adapter"
    assert not (tmp_path / "vulnera-adapter.part").exists()


@pytest.mark.asyncio
async def test_cancelled_download_removes_partial_file(tmp_path):
    dest = tmp_path / "vulnera-adapter"
    session = mock_session(mock_response(chunks=[b"half ", asyncio.CancelledError()]))

    with patch("aiohttp.ClientSession", return_value=session):
        with pytest.raises(asyncio.CancelledError):
            await AiohttpTransport().download("https://example.test/asset", dest)

    assert list(tmp_path.iterdir()) == []
