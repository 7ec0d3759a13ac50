"""Tests for the authenticated proxy backend."""

import asyncio

import httpx
import pytest

from storagefs.auth import static_token_provider
from storagefs.backends import AuthenticatedProxyBackend
from storagefs.errors import AuthenticationError
from storagefs.filesystem import StorageFileSystem
from storagefs.models import BackendKind, StorageRoot


BASE = "https://cdn.example.org/user-scenarios/jane/"

PROXY_LISTING = """<html><body>
  <div><a href="../">..</a></div>
  <div><a href="/user-scenarios/jane/run1/">run1/</a> <a href="/user-scenarios/jane/run1/">Open</a></div>
  <div><a href="output.csv">output.csv</a></div>
</body></html>
"""


class TestAuthenticatedProxyBackend:
    """Tests for AuthenticatedProxyBackend."""

    @pytest.fixture
    def requests(self):
        return []

    @pytest.fixture
    def client(self, make_client, requests):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.headers.get("Authorization") != "Bearer secret":
                return httpx.Response(401)
            if request.url.path.endswith("/private.csv"):
                return httpx.Response(403, text="Forbidden")
            if request.url.path.endswith("/"):
                return httpx.Response(200, text=PROXY_LISTING)
            return httpx.Response(200, content=b"a,b\n")

        return make_client(handler)

    @pytest.fixture
    def backend(self, client):
        return AuthenticatedProxyBackend(client, BASE, token_provider=static_token_provider("secret", "jane"))

    async def test_read_file_sends_bearer(self, backend, requests):
        response = await backend.read_file("/run1/output.csv")
        assert await response.text() == "a,b\n"
        assert requests[0].headers["Authorization"] == "Bearer secret"
        assert str(requests[0].url) == BASE + "run1/output.csv"

    async def test_list_directory(self, backend, requests):
        entry = await backend.list_directory("/run1")
        assert entry.dirs == ["run1"]
        assert entry.files == ["output.csv"]
        assert str(requests[0].url) == BASE + "run1/"

    async def test_known_dialect_is_used(self, make_client, nginx_listing):
        def handler(request):
            return httpx.Response(200, text=nginx_listing)

        backend = AuthenticatedProxyBackend(
            make_client(handler), BASE, token_provider=static_token_provider("t", "jane")
        )
        entry = await backend.list_directory("/")
        assert entry.dirs == ["run2", "run10"]

    async def test_forbidden_raises_with_response(self, backend):
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await backend.read_file("private.csv")
        assert exc_info.value.response.status_code == 403

    async def test_missing_username_fails_before_request(self, client, requests):
        async def provider(request):
            return {"accessToken": "secret"}

        backend = AuthenticatedProxyBackend(client, BASE, token_provider=provider)
        with pytest.raises(AuthenticationError):
            await backend.read_file("a.csv")
        assert requests == []

    async def test_token_timeout(self, client):
        async def provider(request):
            await asyncio.sleep(5)

        backend = AuthenticatedProxyBackend(client, BASE, token_provider=provider, auth_timeout=0.05)
        with pytest.raises(AuthenticationError):
            await backend.list_directory("/")

    async def test_no_token_channel(self, client):
        with pytest.raises(AuthenticationError):
            await AuthenticatedProxyBackend(client, BASE).read_file("a.csv")

    async def test_fresh_token_per_request(self, client):
        issued = []

        async def provider(request):
            issued.append(request)
            return {"accessToken": "secret", "username": "jane"}

        backend = AuthenticatedProxyBackend(client, BASE, token_provider=provider)
        await backend.read_file("a.csv")
        await backend.read_file("b.csv")
        assert len(issued) == 2

    async def test_open_stream(self, backend):
        chunks = [chunk async for chunk in backend.open_stream("a.csv")]
        assert b"".join(chunks) == b"a,b\n"


class TestDirectoryUrl:
    """Tests for listing URL resolution."""

    @pytest.fixture
    def backend(self, make_client):
        return AuthenticatedProxyBackend(make_client(lambda r: httpx.Response(200)), BASE)

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/", BASE),
            ("run1", BASE + "run1/"),
            ("/run1//", BASE + "run1/"),
            ("run1/output.csv", BASE + "run1/output.csv"),
            ("run1/output.csv/", BASE + "run1/output.csv/"),
            ("/berlin-v6.3/", BASE + "berlin-v6.3/"),
            ("berlin-v6.3", BASE + "berlin-v6.3"),
        ],
    )
    def test_directory_url(self, backend, path, expected):
        assert backend.directory_url(path) == expected

    async def test_dotted_folder_listed_through_front_door(self, make_client, config):
        """Normalized listing paths keep their trailing slash on the wire."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            if not request.url.path.endswith("/"):
                return httpx.Response(404)
            return httpx.Response(200, text=PROXY_LISTING)

        root = StorageRoot(slug="mine", base_url=BASE, kind=BackendKind.AUTHENTICATED_PROXY)
        fs = StorageFileSystem(
            root,
            config=config,
            client=make_client(handler),
            token_provider=static_token_provider("secret", "jane"),
        )

        entry = await fs.list_directory("/berlin-v6.3/")

        assert seen == [BASE + "berlin-v6.3/"]
        assert entry.files == ["output.csv"]

    def test_base_url_gets_trailing_slash(self, make_client):
        backend = AuthenticatedProxyBackend(
            make_client(lambda r: httpx.Response(200)), BASE.rstrip("/")
        )
        assert backend.directory_url("run1") == BASE + "run1/"
