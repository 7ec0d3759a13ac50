"""StorageFileSystem: one file/directory contract over every backend kind.

Reads are never caught here. Errors propagate to the caller, which owns all
user-visible recovery ("throw early, catch late").
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, AsyncIterator, Optional

import httpx
import yaml

from . import discovery
from .backends import create_backend
from .cache import DirectoryCache
from .config import Config
from .errors import DirectoryListingError
from .gunzip import gunzip
from .models import BackendKind, DirectoryEntry, StorageRoot, YamlConfigSet
from .paths import normalize_directory_path, sanitize_url

if TYPE_CHECKING:
    from .auth import TokenProvider
    from .backends.local import PermissionPrompt
    from .backends.protocol import StorageBackend

logger = logging.getLogger(__name__)


def _detached(entry: DirectoryEntry) -> DirectoryEntry:
    """Shallow copy of a cached entry with its own dirs/files/handles containers."""
    return entry.model_copy(
        update={
            "dirs": list(entry.dirs),
            "files": list(entry.files),
            "handles": dict(entry.handles),
        }
    )


class StorageFileSystem:
    """Front door for one storage root.

    The backend is chosen once, from the root's kind. Directory listings are
    cached per root until ``invalidate_cache`` is called.

    Usage:
        root = StorageRoot(slug="public", base_url="https://svn.example.org/public")
        async with StorageFileSystem(root) as fs:
            listing = await fs.list_directory("/data/scenarioA/")
            events = await fs.read_json("/data/scenarioA/events.json.gz")
    """

    def __init__(
        self,
        root: StorageRoot,
        config: Optional[Config] = None,
        cache: Optional[DirectoryCache] = None,
        client: Optional[httpx.AsyncClient] = None,
        token_provider: Optional[TokenProvider] = None,
        permission_prompt: Optional[PermissionPrompt] = None,
    ) -> None:
        """Bind a front door to a storage root.

        Args:
            root: Storage root to serve
            config: Runtime configuration (defaults to ``Config()``)
            cache: Listing cache; share one between front doors to share listings
            client: Async HTTP client; for network roots one is created (and
                owned) if omitted, local-handle roots never get one
            token_provider: Auth channel for authenticated-proxy roots
            permission_prompt: Permission callback for local-handle roots
        """
        self.root = root
        self.config = config or Config()
        self.cache = cache if cache is not None else DirectoryCache()

        self._owns_client = client is None and root.kind != BackendKind.LOCAL_HANDLE
        if self._owns_client:
            client = httpx.AsyncClient(timeout=self.config.request_timeout, follow_redirects=True)
        self._client = client
        self._backend = create_backend(
            root,
            self._client,
            self.config,
            token_provider=token_provider,
            permission_prompt=permission_prompt,
            parent_lister=self.list_directory,
        )

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    async def aclose(self) -> None:
        """Close the HTTP client if this front door created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()

    async def __aenter__(self) -> "StorageFileSystem":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # -- files ---------------------------------------------------------------

    async def read_text(self, path: str) -> str:
        response = await self._backend.read_file(path)
        return await response.text()

    async def read_json(self, path: str) -> Any:
        """Read a JSON file, unwrapping any number of gzip layers first."""
        response = await self._backend.read_file(path)
        raw = gunzip(await response.blob(), max_depth=self.config.max_gunzip_depth)
        return json.loads(raw.decode("utf-8"))

    async def read_binary(self, path: str) -> bytes:
        response = await self._backend.read_file(path)
        return await response.blob()

    def open_stream(self, path: str) -> AsyncIterator[bytes]:
        """Stream a file's bytes; errors surface on first iteration."""
        return self._backend.open_stream(path)

    async def read_yaml(self, path: str) -> Any:
        """Read a YAML file with ``yaml.safe_load``; parse errors propagate."""
        return yaml.safe_load(await self.read_text(path))

    # -- directories ---------------------------------------------------------

    async def list_directory(self, path: str) -> DirectoryEntry:
        """List a directory, served from the cache when possible.

        Every call returns a fresh entry with its own lists, so callers may
        modify it without touching the cache.

        Raises:
            DirectoryListingError: Wrapping whatever the backend raised;
                nothing is cached in that case
        """
        normalized = normalize_directory_path(path)

        cached = self.cache.get(self.root.slug, normalized)
        if cached is not None:
            logger.debug("Cache hit %s:%s", self.root.slug, normalized)
            return _detached(cached)

        logger.debug("Cache miss %s:%s", self.root.slug, normalized)
        try:
            entry = await self._backend.list_directory(normalized)
        except Exception as e:
            raise DirectoryListingError(normalized, e) from e

        # human-friendly order regardless of how the backend built the entry
        entry = DirectoryEntry(dirs=entry.dirs, files=entry.files, handles=entry.handles)
        self.cache.put(self.root.slug, normalized, entry)
        return _detached(entry)

    def invalidate_cache(self) -> None:
        """Forget every cached listing of this storage root."""
        self.cache.clear(self.root.slug)

    def sanitize_path(self, raw_path: str) -> str:
        """Absolute URL for a user-supplied path below this root.

        Best-effort hardening against header/query injection only; this is not
        a security boundary for untrusted input.
        """
        return sanitize_url(self.root.base_url, raw_path)

    # -- discovery -----------------------------------------------------------

    async def find_yaml_configs(self, folder: str) -> YamlConfigSet:
        return await discovery.find_yaml_configs(self, folder)

    async def expand_wildcard(self, filepath: str) -> str:
        return await discovery.expand_wildcard(self, filepath)
