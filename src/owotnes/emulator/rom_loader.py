"""
ROM loader

Fetches cartridge bytes once at startup and again on every reload.
http(s) URLs go through httpx.AsyncClient; file:// URLs and bare paths are
read from disk so local runs need no web server.
"""

from __future__ import annotations
import asyncio
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import httpx

from owotnes.models.enums import LogCategory
from owotnes.models.errors import RomLoadError
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EMULATOR)

DEFAULT_TIMEOUT = 30.0


def _local_path(url: str) -> Optional[Path]:
    parsed = urlparse(url)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    if parsed.scheme not in ("http", "https"):
        # bare path (a Windows drive letter parses as a one-letter scheme)
        if not parsed.scheme or len(parsed.scheme) == 1:
            return Path(url)
    return None


async def fetch_rom(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> bytes:
    """
    Download ROM bytes.

    Args:
        url: http(s) URL, file:// URL or filesystem path
        timeout: Overall request timeout in seconds
        transport: Custom httpx transport (tests use httpx.MockTransport)

    Returns:
        Raw cartridge image

    Raises:
        RomLoadError: On HTTP error status, network failure, unreadable file
            or an empty body
    """
    if not url:
        raise RomLoadError(url or "", "no ROM URL configured")

    path = _local_path(url)
    if path is not None:
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise RomLoadError(url, str(e)) from e
    else:
        try:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.content
        except httpx.HTTPStatusError as e:
            raise RomLoadError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise RomLoadError(url, f"{type(e).__name__}: {e}") from e

    if not data:
        raise RomLoadError(url, "empty response")

    log.info("ROM fetched", url=url, bytes=len(data))
    return data
