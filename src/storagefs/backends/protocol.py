"""Protocol definitions for storage backends and host folder handles."""

from typing import Any, AsyncIterator, Protocol, runtime_checkable

from ..models import DirectoryEntry


@runtime_checkable
class FileResponse(Protocol):
    """A fetched file whose body can be read in several shapes."""

    async def text(self) -> str:
        """Body decoded as UTF-8 text."""
        ...

    async def json(self) -> Any:
        """Body parsed as JSON. Parse errors propagate."""
        ...

    async def blob(self) -> bytes:
        """Raw body bytes."""
        ...

    def stream(self) -> AsyncIterator[bytes]:
        """Body as an async iterator of byte chunks."""
        ...


@runtime_checkable
class StorageBackend(Protocol):
    """Protocol for storage backends.

    A backend is bound to one storage root; paths are relative to that root.
    Backends never retry and never cache: errors propagate to the caller and
    caching is the front door's job.
    """

    async def list_directory(self, path: str) -> DirectoryEntry:
        """List the immediate children of a directory.

        Args:
            path: Directory path, normalized with a trailing ``/``

        Returns:
            DirectoryEntry of the folder's dirs and files
        """
        ...

    async def read_file(self, path: str) -> FileResponse:
        """Fetch a file.

        Args:
            path: File path within the storage root

        Returns:
            FileResponse exposing text/json/blob/stream accessors
        """
        ...

    def open_stream(self, path: str) -> AsyncIterator[bytes]:
        """Stream a file's bytes without buffering the whole body if possible."""
        ...


@runtime_checkable
class FolderHandle(Protocol):
    """Host-granted capability over a directory tree or one file in it.

    Handles cannot resolve multi-segment paths: every step down the tree is an
    explicit child lookup through async iteration of ``(name, child)`` pairs.
    File handles (``kind == "file"``) provide ``read_bytes``.
    """

    @property
    def name(self) -> str:
        ...

    @property
    def kind(self) -> str:
        """Either ``"directory"`` or ``"file"``."""
        ...

    async def query_permission(self, mode: str = "read") -> str:
        """Return ``"granted"``, ``"denied"`` or ``"prompt"``."""
        ...

    def __aiter__(self) -> AsyncIterator[tuple[str, "FolderHandle"]]:
        ...

    async def read_bytes(self) -> bytes:
        ...
