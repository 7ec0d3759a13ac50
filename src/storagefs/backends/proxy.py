"""Private object-store backend behind a bearer-token proxy."""

import logging
import re
from typing import AsyncIterator, Optional
from urllib.parse import urljoin

import httpx

from ..auth import TokenProvider, exchange_token
from ..errors import AuthenticationError
from ..listing import PARSERS, parse_anchor_listing, sniff_dialect
from ..models import DirectoryEntry
from .responses import HttpFileResponse

logger = logging.getLogger(__name__)

# a final ".ext" segment marks a file-like path
_FILE_SUFFIX = re.compile(r"\.[a-zA-Z0-9]+$")


class AuthenticatedProxyBackend:
    """Backend for a listing-capable HTTP server that requires a bearer token.

    A fresh token is exchanged with the parent context for every request.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        token_provider: Optional[TokenProvider] = None,
        auth_timeout: float = 30.0,
    ):
        """Initialize backend.

        Args:
            client: Shared async HTTP client
            base_url: Root URL of the proxied bucket
            token_provider: Host channel answering token requests
            auth_timeout: Seconds to wait for the token reply
        """
        self._client = client
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._token_provider = token_provider
        self._auth_timeout = auth_timeout

    async def _auth_headers(self) -> dict[str, str]:
        if self._token_provider is None:
            raise AuthenticationError("No authentication channel configured. Please log in.")
        token = await exchange_token(self._token_provider, self._auth_timeout)
        return {"Authorization": f"Bearer {token.access_token}"}

    def file_url(self, path: str) -> str:
        return f"{self._base_url.rstrip('/')}/{path.strip('/')}"

    def directory_url(self, path: str) -> str:
        """Resolve a listing URL; directory-like paths get one trailing ``/``.

        The suffix test sees the trailing ``/``, so ``berlin-v6.3/`` stays a
        folder while ``berlin-v6.3`` is treated as a file.
        """
        path = path.lstrip("/")
        full = urljoin(self._base_url, path)
        if _FILE_SUFFIX.search(path):
            return full.rstrip("/")
        return full.rstrip("/") + "/"

    async def _get(self, url: str) -> httpx.Response:
        headers = await self._auth_headers()
        response = await self._client.get(url, headers=headers)
        if response.is_error:
            logger.info("Status %d for %s", response.status_code, url)
        response.raise_for_status()
        return response

    async def read_file(self, path: str) -> HttpFileResponse:
        """Authenticated GET of a file.

        Raises:
            AuthenticationError: If the token exchange fails
            httpx.HTTPStatusError: On a non-2xx response (response attached)
        """
        return HttpFileResponse(await self._get(self.file_url(path)))

    async def list_directory(self, path: str) -> DirectoryEntry:
        """Fetch and parse the proxy's HTML listing.

        Known server dialects are tried first; anything else goes through the
        anchor-walking parse.
        """
        response = await self._get(self.directory_url(path))
        html = response.text

        dialect = sniff_dialect(html)
        if dialect is not None:
            return PARSERS[dialect](html)
        return parse_anchor_listing(html)

    async def open_stream(self, path: str) -> AsyncIterator[bytes]:
        headers = await self._auth_headers()
        async with self._client.stream("GET", self.file_url(path), headers=headers) as response:
            response.raise_for_status()
            async for chunk in response.aiter_bytes():
                yield chunk
