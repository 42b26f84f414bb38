"""
Tests for the git config backed store
"""

import subprocess
from unittest.mock import patch

import pytest

from git_win_updater.core.exceptions import ConfigError
from git_win_updater.storage.git_config import GitConfigStore, MemoryConfigStore

RUN = "git_win_updater.storage.git_config.subprocess.run"


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess([], returncode, stdout, stderr)


class TestGitConfigStore:
    """Tests for GitConfigStore"""

    def test_get_value(self):
        """Test a stored value is returned stripped"""
        with patch(RUN, return_value=completed(stdout="http://proxy.corp:8080\n")) as run:
            assert GitConfigStore().get("http.proxy") == "http://proxy.corp:8080"

        assert run.call_args[0][0] == ["git", "config", "--global", "--get", "http.proxy"]

    def test_get_missing_key(self):
        """Test exit status 1 means the key is unset"""
        with patch(RUN, return_value=completed(returncode=1)):
            assert GitConfigStore().get("winUpdater.recentlySeenVersion") is None

    def test_get_failure(self):
        """Test other failures raise ConfigError"""
        with patch(RUN, return_value=completed(returncode=3, stderr="error: invalid config file")):
            with pytest.raises(ConfigError):
                GitConfigStore().get("http.proxy")

    def test_set_value(self):
        """Test a value is written to the global config"""
        with patch(RUN, return_value=completed()) as run:
            GitConfigStore("C:/Git/cmd/git.exe").set("winUpdater.recentlySeenVersion", "2.42.0.windows.1")

        assert run.call_args[0][0] == [
            "C:/Git/cmd/git.exe",
            "config",
            "--global",
            "winUpdater.recentlySeenVersion",
            "2.42.0.windows.1",
        ]

    def test_set_failure(self):
        """Test a failed write raises ConfigError"""
        with patch(RUN, return_value=completed(returncode=4, stderr="could not lock config file")):
            with pytest.raises(ConfigError):
                GitConfigStore().set("http.proxy", "http://proxy.corp:8080")

    def test_git_missing(self):
        """Test a missing git raises ConfigError"""
        with patch(RUN, side_effect=FileNotFoundError("git")):
            with pytest.raises(ConfigError):
                GitConfigStore().get("http.proxy")


class TestMemoryConfigStore:
    """Tests for MemoryConfigStore"""

    def test_get_set(self):
        """Test values round trip"""
        store = MemoryConfigStore()
        store.set("http.proxy", "http://proxy.corp:8080")

        assert store.get("http.proxy") == "http://proxy.corp:8080"
        assert store.get("winUpdater.recentlySeenVersion") is None

    def test_initial_values_are_copied(self):
        """Test the initial mapping is not mutated"""
        initial = {"http.proxy": "http://a:1"}
        store = MemoryConfigStore(initial)
        store.set("http.proxy", "http://b:2")

        assert initial == {"http.proxy": "http://a:1"}
