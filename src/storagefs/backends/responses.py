"""FileResponse implementations."""

import json
from typing import Any, AsyncIterator, Union

import httpx

DEFAULT_CHUNK_SIZE = 64 * 1024


async def _chunks(data: bytes, chunk_size: int) -> AsyncIterator[bytes]:
    for start in range(0, len(data), chunk_size):
        yield data[start : start + chunk_size]


class HttpFileResponse:
    """Response of a plain or authenticated HTTP GET.

    The underlying ``httpx.Response`` stays reachable for status and headers.
    """

    def __init__(self, response: httpx.Response):
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    async def text(self) -> str:
        return self.response.text

    async def json(self) -> Any:
        return self.response.json()

    async def blob(self) -> bytes:
        return self.response.content

    def stream(self) -> AsyncIterator[bytes]:
        return self.response.aiter_bytes()


class ContentFileResponse:
    """File content already held in memory, as text or bytes.

    Used for GitHub payloads, whose content arrives inside a JSON document.
    """

    def __init__(self, content: Union[str, bytes], chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.content = content
        self._chunk_size = chunk_size

    async def text(self) -> str:
        if isinstance(self.content, bytes):
            return self.content.decode("utf-8", errors="replace")
        return self.content

    async def json(self) -> Any:
        return json.loads(await self.text())

    async def blob(self) -> bytes:
        if isinstance(self.content, str):
            return self.content.encode("utf-8")
        return self.content

    def stream(self) -> AsyncIterator[bytes]:
        return self._stream()

    async def _stream(self) -> AsyncIterator[bytes]:
        async for chunk in _chunks(await self.blob(), self._chunk_size):
            yield chunk


class HandleFileResponse:
    """A file behind a host folder handle; every accessor reads through it."""

    def __init__(self, handle: Any, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.handle = handle
        self._chunk_size = chunk_size

    @property
    def name(self) -> str:
        return self.handle.name

    async def text(self) -> str:
        return (await self.handle.read_bytes()).decode("utf-8")

    async def json(self) -> Any:
        return json.loads(await self.text())

    async def blob(self) -> bytes:
        return await self.handle.read_bytes()

    def stream(self) -> AsyncIterator[bytes]:
        return self._stream()

    async def _stream(self) -> AsyncIterator[bytes]:
        async for chunk in _chunks(await self.blob(), self._chunk_size):
            yield chunk
