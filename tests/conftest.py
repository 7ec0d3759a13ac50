"""Pytest configuration and shared fixtures."""

from typing import Callable, Union

import httpx
import pytest

from storagefs.config import Config
from storagefs.models import BackendKind, StorageRoot


class MemoryHandle:
    """In-memory FolderHandle for tests.

    Nested dicts are directories, str/bytes values are files. ``iterations``
    counts how often a folder was enumerated.

    Example:
        MemoryHandle("root", {
            "data": {"trips.csv": "a,b\\n1,2"},
            "README.md": "# hello",
        })
    """

    def __init__(
        self,
        name: str,
        value: Union[dict, str, bytes],
        permission: str = "granted",
    ):
        self._name = name
        self.permission = permission
        self.iterations = 0
        if isinstance(value, dict):
            self._children = {
                child: MemoryHandle(child, child_value, permission)
                for child, child_value in value.items()
            }
            self._content = None
        else:
            self._children = None
            self._content = value.encode("utf-8") if isinstance(value, str) else value

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> str:
        return "directory" if self._children is not None else "file"

    async def query_permission(self, mode: str = "read") -> str:
        return self.permission

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        self.iterations += 1
        for name, child in (self._children or {}).items():
            yield name, child

    async def read_bytes(self) -> bytes:
        if self._content is None:
            raise IsADirectoryError(self._name)
        return self._content

    def child(self, *names: str) -> "MemoryHandle":
        handle = self
        for name in names:
            handle = handle._children[name]
        return handle


@pytest.fixture
def config() -> Config:
    """Provide a test configuration with short timeouts."""
    return Config(
        github_token="test-token",
        request_timeout=5.0,
        auth_timeout=0.5,
        permission_timeout=0.5,
    )


@pytest.fixture
def memory_handle() -> Callable[..., MemoryHandle]:
    """Factory for in-memory folder handles."""
    return MemoryHandle


@pytest.fixture
def local_root() -> Callable[[MemoryHandle], StorageRoot]:
    """Factory wrapping a folder handle in a local-handle storage root."""

    def factory(handle: MemoryHandle, slug: str = "fs1-local") -> StorageRoot:
        return StorageRoot(slug=slug, name=handle.name, kind=BackendKind.LOCAL_HANDLE, handle=handle)

    return factory


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory for AsyncClients answering through a mock handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


NGINX_LISTING = """<html>
<head><title>Index of /data/scenarioA/</title></head>
<body>
<h1>Index of /data/scenarioA/</h1><hr><pre><a href="../">../</a>
<a href="run10/">run10/</a>                                             01-Jan-2024 10:00                   -
<a href="run2/">run2/</a>                                              01-Jan-2024 10:00                   -
<a href="output_trips.csv.gz">output_trips.csv.gz</a>                                01-Jan-2024 10:00               12345
<a href="Events.xml">Events.xml</a>                                         01-Jan-2024 10:00                  99
</pre><hr></body>
</html>
"""


@pytest.fixture
def nginx_listing() -> str:
    """nginx autoindex page with a parent link, two folders and two files."""
    return NGINX_LISTING
