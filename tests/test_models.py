"""Tests for data models."""

import pytest
from pydantic import ValidationError

from storagefs.models import AuthToken, BackendKind, DirectoryEntry, StorageRoot, YamlConfigSet


class TestStorageRoot:
    """Tests for StorageRoot."""

    def test_base_url_gets_trailing_slash(self):
        root = StorageRoot(slug="public", base_url="https://svn.example.org/public")
        assert root.base_url == "https://svn.example.org/public/"

    def test_empty_base_url_stays_empty(self):
        assert StorageRoot(slug="github", kind=BackendKind.GITHUB).base_url == ""

    def test_defaults(self):
        root = StorageRoot(slug="x")
        assert root.kind == BackendKind.GENERIC_HTTP
        assert root.handle is None
        assert root.hidden is False

    def test_frozen(self):
        root = StorageRoot(slug="x")
        with pytest.raises(ValidationError):
            root.slug = "y"

    def test_handle_excluded_from_dump(self):
        root = StorageRoot(slug="fs1-data", kind=BackendKind.LOCAL_HANDLE, handle=object())
        assert "handle" not in root.model_dump()

    @pytest.mark.parametrize(
        "flags, expected",
        [
            ({"handle": object(), "is_github": True, "need_password": True}, BackendKind.LOCAL_HANDLE),
            ({"is_github": True, "need_password": True}, BackendKind.GITHUB),
            ({"need_password": True}, BackendKind.AUTHENTICATED_PROXY),
            ({}, BackendKind.GENERIC_HTTP),
        ],
    )
    def test_from_flags_precedence(self, flags, expected):
        """Local handle beats GitHub beats the proxy beats plain HTTP."""
        assert StorageRoot.from_flags("r", **flags).kind == expected


class TestDirectoryEntry:
    """Tests for DirectoryEntry."""

    def test_sorted_naturally(self):
        entry = DirectoryEntry(dirs=["run10", "run2"], files=["b.csv", "A.csv"])
        assert entry.dirs == ["run2", "run10"]
        assert entry.files == ["A.csv", "b.csv"]

    def test_dir_trailing_slash_stripped(self):
        assert DirectoryEntry(dirs=["data/"]).dirs == ["data"]

    def test_separator_in_name_rejected(self):
        with pytest.raises(ValidationError):
            DirectoryEntry(files=["a/b.csv"])

    def test_is_empty(self):
        assert DirectoryEntry().is_empty
        assert not DirectoryEntry(files=["a"]).is_empty


class TestSmallModels:
    """Tests for YamlConfigSet and AuthToken."""

    def test_yaml_config_set_defaults_are_independent(self):
        first = YamlConfigSet()
        first.dashboards["dashboard-1.yaml"] = "/dashboard-1.yaml"
        assert YamlConfigSet().dashboards == {}

    def test_auth_token(self):
        token = AuthToken(access_token="abc", username="jane")
        assert token.access_token == "abc"
        assert token.username == "jane"
