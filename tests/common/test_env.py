"""Tests for environment configuration interface."""

from pathlib import Path

from common.env import Environment, env


class TestEnvironment:
    """Tests for Environment class."""

    def test_api_url_default(self, monkeypatch):
        """Test joplin_api_url returns default value."""
        monkeypatch.delenv("JOPLIN_API_URL", raising=False)
        assert Environment.joplin_api_url() == "http://localhost:41184"

    def test_api_url_strips_trailing_slash(self, monkeypatch):
        """Test joplin_api_url reads from environment without trailing slash."""
        monkeypatch.setenv("JOPLIN_API_URL", "http://127.0.0.1:27583/")
        assert Environment.joplin_api_url() == "http://127.0.0.1:27583"

    def test_token_unset(self, monkeypatch):
        """Test joplin_token is None when unset or empty."""
        monkeypatch.delenv("JOPLIN_TOKEN", raising=False)
        assert Environment.joplin_token() is None
        monkeypatch.setenv("JOPLIN_TOKEN", "")
        assert Environment.joplin_token() is None

    def test_token_from_env(self, monkeypatch):
        """Test joplin_token reads from environment."""
        monkeypatch.setenv("JOPLIN_TOKEN", "abc123")
        assert Environment.joplin_token() == "abc123"

    def test_notebook(self, monkeypatch):
        """Test joplin_notebook reads from environment."""
        monkeypatch.delenv("JOPLIN_NOTEBOOK", raising=False)
        assert Environment.joplin_notebook() is None
        monkeypatch.setenv("JOPLIN_NOTEBOOK", "Inbox")
        assert Environment.joplin_notebook() == "Inbox"

    def test_timeout(self, monkeypatch):
        """Test joplin_timeout default and override."""
        monkeypatch.delenv("JOPLIN_TIMEOUT", raising=False)
        assert Environment.joplin_timeout() == 30.0
        monkeypatch.setenv("JOPLIN_TIMEOUT", "2.5")
        assert Environment.joplin_timeout() == 2.5

    def test_workers(self, monkeypatch):
        """Test joplin_workers default and override."""
        monkeypatch.delenv("JOPLIN_WORKERS", raising=False)
        assert Environment.joplin_workers() == 1
        monkeypatch.setenv("JOPLIN_WORKERS", "4")
        assert Environment.joplin_workers() == 4

    def test_state_dir_default(self, monkeypatch):
        """Test state_dir expands the home directory."""
        monkeypatch.delenv("DISK_USAGE_STATE_DIR", raising=False)
        assert Environment.state_dir() == Path.home() / ".joplin-disk-usage"

    def test_state_dir_from_env(self, monkeypatch, tmp_path):
        """Test state_dir reads from environment."""
        monkeypatch.setenv("DISK_USAGE_STATE_DIR", str(tmp_path))
        assert Environment.state_dir() == tmp_path


def test_singleton_instance():
    """Test that env is an Environment instance."""
    assert isinstance(env, Environment)
