"""GitHub repository backend over the REST content API.

Paths look like ``owner/repo/path/inside/repo``. The credential is injected
through ``Config.github_token``; public repositories also work without one,
subject to GitHub's anonymous rate limit.
"""

import base64
import logging
import re
from typing import Any, AsyncIterator, Optional, Union

import httpx

from ..errors import FileMissingError, FolderNotFoundError, InvalidPathError
from ..models import DirectoryEntry
from ..paths import collapse_separators, split_segments, strip_unsafe_prefix
from .responses import ContentFileResponse

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"

# GitHub doesn't report file types, so guess from the extension
BINARY_EXTENSIONS = re.compile(
    r".*\.(avro|dbf|gpkg|gz|h5|jpg|jpeg|omx|png|shp|shx|sqlite|zip|zst)$", re.IGNORECASE
)


def is_binary_path(path: str) -> bool:
    """Check whether a file should be kept as raw bytes."""
    return bool(BINARY_EXTENSIONS.match(path))


def decode_content(payload: dict[str, Any], path: str) -> Union[str, bytes]:
    """Decode the ``content`` of a contents/blob API payload.

    Args:
        payload: JSON document from the contents or blobs endpoint
        path: Requested file path, used to classify binary files

    Returns:
        Raw bytes for known binary extensions, UTF-8 text otherwise
    """
    content = payload.get("content") or ""
    encoding = payload.get("encoding")

    if encoding == "base64":
        raw = base64.b64decode(content)
        if is_binary_path(path):
            return raw
        return raw.decode("utf-8")
    return content


def split_repo_path(path: str) -> Optional[tuple[str, str, str]]:
    """Split ``owner/repo/rest`` into its parts; None with fewer than two segments."""
    segments = split_segments(collapse_separators(strip_unsafe_prefix(path)))
    if len(segments) < 2:
        return None
    return segments[0], segments[1], "/".join(segments[2:])


class GitHubBackend:
    """Read-only access to GitHub repositories."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
    ):
        """Initialize backend.

        Args:
            client: Shared async HTTP client
            token: GitHub token sent as a bearer credential, if any
            api_url: API root, overridable for GitHub Enterprise
        """
        self._client = client
        self._token = token
        self._api_url = api_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def contents_url(self, owner: str, repo: str, path: str) -> str:
        return f"{self._api_url}/repos/{owner}/{repo}/contents/{path}"

    def blob_url(self, owner: str, repo: str, sha: str) -> str:
        return f"{self._api_url}/repos/{owner}/{repo}/git/blobs/{sha}"

    async def _get_json(self, url: str) -> Any:
        logger.info("GET %s", url)
        response = await self._client.get(url, headers=self._headers())
        response.raise_for_status()
        return response.json()

    async def read_file(self, path: str) -> ContentFileResponse:
        """Fetch a file, following up with the blob API for large files.

        Raises:
            InvalidPathError: If the path names no owner/repo pair
            FileMissingError: If the path is a folder, or the payload has
                neither content nor a blob SHA
            httpx.HTTPStatusError: On a non-2xx API response
        """
        parts = split_repo_path(path)
        if parts is None:
            raise InvalidPathError(f"GitHub paths start with owner/repo: {path!r}")
        owner, repo, rest = parts

        payload = await self._get_json(self.contents_url(owner, repo, rest))
        if not isinstance(payload, dict):
            # a folder comes back as a list of entries
            raise FileMissingError(rest or repo)

        # large files come without inline content; fetch the blob by SHA
        if not payload.get("content"):
            sha = payload.get("sha")
            if not sha:
                raise FileMissingError(rest or repo)
            payload = await self._get_json(self.blob_url(owner, repo, sha))

        return ContentFileResponse(decode_content(payload, rest))

    async def list_directory(self, path: str) -> DirectoryEntry:
        """List a repository folder. Fewer than two segments lists nothing.

        Raises:
            FolderNotFoundError: If the path is a file rather than a folder
        """
        parts = split_repo_path(path)
        if parts is None:
            return DirectoryEntry()
        owner, repo, rest = parts

        payload = await self._get_json(self.contents_url(owner, repo, rest))
        if not isinstance(payload, list):
            raise FolderNotFoundError(rest or repo)

        dirs = [entry["name"] for entry in payload if entry.get("type") == "dir"]
        files = [entry["name"] for entry in payload if entry.get("type") == "file"]
        return DirectoryEntry(dirs=dirs, files=files)

    async def open_stream(self, path: str) -> AsyncIterator[bytes]:
        response = await self.read_file(path)
        async for chunk in response.stream():
            yield chunk
