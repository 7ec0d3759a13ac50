"""Local folder backend over a host-granted folder handle."""

import asyncio
import logging
import os
from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable, Optional

from ..errors import FileMissingError, FolderNotFoundError, PermissionTimeoutError
from ..models import DirectoryEntry
from ..paths import (
    collapse_separators,
    eat_dots,
    remove_dot_segments,
    split_segments,
    strip_unsafe_prefix,
)
from .protocol import FolderHandle
from .responses import HandleFileResponse

logger = logging.getLogger(__name__)

PermissionPrompt = Callable[[FolderHandle], Awaitable[bool]]
DirectoryLister = Callable[[str], Awaitable[DirectoryEntry]]


def _kind_of(path: Path) -> str:
    return "directory" if path.is_dir() else "file"


class PathFolderHandle:
    """FolderHandle over a path on the local disk.

    The Python-side stand-in for a browser folder-picker handle. Blocking disk
    access runs in a worker thread.
    """

    def __init__(self, path: str | Path, kind: Optional[str] = None):
        self._path = Path(path)
        # children get their kind from the enumerating thread
        self._kind = kind

    def __repr__(self) -> str:
        return f"PathFolderHandle({str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def kind(self) -> str:
        if self._kind is None:
            self._kind = _kind_of(self._path)
        return self._kind

    async def query_permission(self, mode: str = "read") -> str:
        readable = await asyncio.to_thread(os.access, self._path, os.R_OK)
        return "granted" if readable else "prompt"

    def __aiter__(self) -> AsyncIterator[tuple[str, "PathFolderHandle"]]:
        return self._children()

    async def _children(self) -> AsyncIterator[tuple[str, "PathFolderHandle"]]:
        entries = await asyncio.to_thread(
            lambda: [(entry, _kind_of(entry)) for entry in sorted(self._path.iterdir())]
        )
        for entry, kind in entries:
            yield entry.name, PathFolderHandle(entry, kind)

    async def read_bytes(self) -> bytes:
        return await asyncio.to_thread(self._path.read_bytes)


class LocalHandleBackend:
    """Backend walking a folder handle one segment at a time.

    The handle has no notion of nested paths, so ``/data/project/folder`` is
    reached by finding ``data`` in the root, ``project`` in ``data`` and so on.
    The front door caches every level it lists, which keeps repeated walks
    cheap.
    """

    def __init__(
        self,
        handle: FolderHandle,
        permission_prompt: Optional[PermissionPrompt] = None,
        permission_timeout: float = 120.0,
        parent_lister: Optional[DirectoryLister] = None,
    ):
        """Initialize backend bound to a root folder handle.

        Args:
            handle: Root folder handle granted by the host
            permission_prompt: Async callback asking the user for read access;
                resolves to True when granted
            permission_timeout: Seconds to wait for the user's decision
            parent_lister: Lists the parent folder when reading a file; the
                front door passes its cached ``list_directory`` here
        """
        self._handle = handle
        self._permission_prompt = permission_prompt
        self._permission_timeout = permission_timeout
        self._parent_lister = parent_lister or self.list_directory

    @property
    def handle(self) -> FolderHandle:
        return self._handle

    async def ensure_permission(self) -> bool:
        """Make sure the user allowed reading this folder.

        Without a prompt callback an ungranted handle is used optimistically;
        the read itself will fail if access really is denied.

        Raises:
            PermissionTimeoutError: If the prompt is not answered in time
        """
        status = await self._handle.query_permission("read")
        if status == "granted" or self._permission_prompt is None:
            return True

        logger.info("Requesting read permission for %s", self._handle.name)
        try:
            return await asyncio.wait_for(
                self._permission_prompt(self._handle), timeout=self._permission_timeout
            )
        except asyncio.TimeoutError as e:
            raise PermissionTimeoutError(
                f"No answer to the permission request for {self._handle.name}"
            ) from e

    async def _find_child(self, folder: FolderHandle, name: str) -> FolderHandle:
        async for child_name, child in folder:
            if child_name == name:
                return child
        raise FolderNotFoundError(name)

    async def list_directory(self, path: str) -> DirectoryEntry:
        """List a folder, keeping each child's handle for later reads.

        Raises:
            FolderNotFoundError: If a path segment does not exist
        """
        if not await self.ensure_permission():
            logger.warning("Read permission denied for %s", self._handle.name)
            return DirectoryEntry()

        current = self._handle
        for segment in eat_dots(split_segments(path)):
            current = await self._find_child(current, segment)

        dirs: list[str] = []
        files: list[str] = []
        handles: dict[str, FolderHandle] = {}
        async for name, child in current:
            handles[name] = child
            if child.kind == "file":
                files.append(name)
            else:
                dirs.append(name)

        return DirectoryEntry(dirs=dirs, files=files, handles=handles)

    async def read_file(self, path: str) -> HandleFileResponse:
        """Resolve a file through its parent folder's listing.

        Raises:
            FileMissingError: If the folder has no such file
        """
        clean = remove_dot_segments(collapse_separators(strip_unsafe_prefix(path)))
        folder, _, filename = clean.rpartition("/")

        listing = await self._parent_lister(folder or "/")
        handle = listing.handles.get(filename)
        if handle is None:
            raise FileMissingError(filename)

        return HandleFileResponse(handle)

    async def open_stream(self, path: str) -> AsyncIterator[bytes]:
        response = await self.read_file(path)
        async for chunk in response.stream():
            yield chunk
