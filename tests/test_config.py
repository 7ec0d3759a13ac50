"""Tests for configuration loading."""

from pathlib import Path

from storagefs.config import DEFAULT_CONFIG_FOLDERS, Config


def test_config_defaults():
    """Defaults apply when nothing is set."""
    config = Config()

    assert config.github_token is None
    assert config.github_api_url == "https://api.github.com"
    assert config.max_gunzip_depth == 8
    assert config.config_folders == DEFAULT_CONFIG_FOLDERS
    assert config.roots_file is None


def test_config_from_env_overrides(monkeypatch, tmp_path):
    """Environment variables should override defaults."""
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    monkeypatch.setenv("HTTP_TIMEOUT", "7.5")
    monkeypatch.setenv("MAX_GUNZIP_DEPTH", "3")
    monkeypatch.setenv("ROOTS_FILE", str(tmp_path / "roots.yaml"))
    monkeypatch.setenv("CONFIG_FOLDERS", "Project-Config, .viz")

    config = Config.from_env()

    assert config.github_token == "ghp_test"
    assert config.request_timeout == 7.5
    assert config.max_gunzip_depth == 3
    assert Path(config.roots_file) == tmp_path / "roots.yaml"

    # Extra config folders are lowercased and appended to the defaults
    assert set(DEFAULT_CONFIG_FOLDERS).issubset(set(config.config_folders))
    assert "project-config" in config.config_folders
    assert ".viz" in config.config_folders


def test_config_invalid_numbers_fall_back(monkeypatch):
    """Unparseable numbers keep their defaults."""
    monkeypatch.setenv("AUTH_TIMEOUT", "soon")
    monkeypatch.setenv("MAX_GUNZIP_DEPTH", "many")

    config = Config.from_env()

    assert config.auth_timeout == 30.0
    assert config.max_gunzip_depth == 8


def test_empty_github_token_is_none(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "")
    assert Config.from_env().github_token is None
