"""Directory listing cache, partitioned per storage root."""

import logging
from typing import Optional

from .models import DirectoryEntry

logger = logging.getLogger(__name__)


class DirectoryCache:
    """Memoized directory listings keyed by ``(slug, normalized_path)``.

    Entries never expire on their own; ``clear(slug)`` drops one root's
    partition, e.g. when the user asks for a refresh. Entries are only written
    after a listing has been fully parsed, so readers never see partial data.

    Example:
        cache = DirectoryCache()
        cache.put("public", "/data/", entry)
        cache.get("public", "/data/")  # -> entry
        cache.clear("public")
    """

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, DirectoryEntry]] = {}

    def get(self, slug: str, path: str) -> Optional[DirectoryEntry]:
        return self._entries.get(slug, {}).get(path)

    def put(self, slug: str, path: str, entry: DirectoryEntry) -> None:
        self._entries.setdefault(slug, {})[path] = entry

    def clear(self, slug: str) -> None:
        """Drop every cached listing of one storage root."""
        dropped = len(self._entries.pop(slug, {}))
        logger.debug("Cleared %d cached listing(s) for %s", dropped, slug)

    def paths(self, slug: str) -> list[str]:
        """Cached paths of one storage root."""
        return list(self._entries.get(slug, {}))

    def __contains__(self, key: tuple[str, str]) -> bool:
        slug, path = key
        return path in self._entries.get(slug, {})
