"""
Tests for ROM fetching over HTTP (httpx.MockTransport) and from disk.
"""

import httpx
import pytest

from owotnes.emulator.rom_loader import fetch_rom
from owotnes.models.errors import RomLoadError

ROM = b"NES\x1a" + bytes(16)


def mock_transport(status_code=200, content=ROM):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=content)
    return httpx.MockTransport(handler)


class TestHttpFetch:

    @pytest.mark.asyncio
    async def test_success(self):
        data = await fetch_rom("https://example.org/game.nes", transport=mock_transport())
        assert data == ROM

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        with pytest.raises(RomLoadError) as info:
            await fetch_rom("https://example.org/missing.nes", transport=mock_transport(404))
        assert info.value.reason == "HTTP 404"

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(RomLoadError) as info:
            await fetch_rom("https://example.org/game.nes", transport=httpx.MockTransport(handler))
        assert "ConnectError" in info.value.reason

    @pytest.mark.asyncio
    async def test_empty_body(self):
        with pytest.raises(RomLoadError) as info:
            await fetch_rom("https://example.org/empty.nes", transport=mock_transport(content=b""))
        assert info.value.reason == "empty response"


class TestLocalFetch:

    @pytest.mark.asyncio
    async def test_plain_path_and_file_url(self, tmp_path):
        path = tmp_path / "game.nes"
        path.write_bytes(ROM)
        assert await fetch_rom(str(path)) == ROM
        assert await fetch_rom(path.as_uri()) == ROM

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(RomLoadError):
            await fetch_rom(str(tmp_path / "nope.nes"))

    @pytest.mark.asyncio
    async def test_no_url(self):
        with pytest.raises(RomLoadError):
            await fetch_rom(None)
