"""Plain HTTP backend for servers that only offer HTML directory listings."""

import logging
from typing import AsyncIterator

import httpx

from ..listing import parse_listing
from ..models import DirectoryEntry
from ..paths import sanitize_url
from .responses import HttpFileResponse

logger = logging.getLogger(__name__)


class HttpBackend:
    """Files are plain GETs; directories are scraped from listing pages."""

    def __init__(self, client: httpx.AsyncClient, base_url: str):
        self._client = client
        self._base_url = base_url

    def url_for(self, path: str) -> str:
        return sanitize_url(self._base_url, path)

    async def read_file(self, path: str) -> HttpFileResponse:
        """GET a file.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response (response attached)
        """
        url = self.url_for(path)
        response = await self._client.get(url)
        if response.is_error:
            logger.info("Status %d for %s", response.status_code, url)
        response.raise_for_status()
        return HttpFileResponse(response)

    async def list_directory(self, path: str) -> DirectoryEntry:
        response = await self.read_file(path)
        return parse_listing(await response.text())

    async def open_stream(self, path: str) -> AsyncIterator[bytes]:
        async with self._client.stream("GET", self.url_for(path)) as response:
            response.raise_for_status()
            async for chunk in response.aiter_bytes():
                yield chunk
