"""
Persisted configuration store

Values live in the user's global git configuration, next to the
``http.proxy`` setting git itself uses.
"""

import logging
import subprocess

from git_win_updater.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


class GitConfigStore:
    """
    Key-value store backed by ``git config --global``

    Example:
        store = GitConfigStore()
        store.set("winUpdater.recentlySeenVersion", "2.41.0.windows.1")
        store.get("http.proxy")
    """

    def __init__(self, git_executable: str = "git", scope: str = "--global"):
        self.git_executable = git_executable
        self.scope = scope

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        cmd = [self.git_executable, "config", self.scope, *args]
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=30,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ConfigError(f"Unable to run {' '.join(cmd)}: {e}") from e

    def get(self, key: str) -> str | None:
        """
        Read a value

        Returns:
            str or None: Value, or None when the key is unset

        Raises:
            ConfigError: If git config fails for another reason
        """
        result = self._run("--get", key)
        # git config --get exits 1 for a missing key
        if result.returncode == 1:
            return None
        if result.returncode != 0:
            raise ConfigError(f"Failed to read {key}: {result.stderr.strip()}")
        return result.stdout.strip()

    def set(self, key: str, value: str) -> None:
        """
        Write a value

        Raises:
            ConfigError: If git config fails
        """
        result = self._run(key, value)
        if result.returncode != 0:
            raise ConfigError(f"Failed to write {key}: {result.stderr.strip()}")
        logger.debug(f"Set {key}={value}")


class MemoryConfigStore:
    """In-memory key-value store"""

    def __init__(self, values: dict[str, str] | None = None):
        self.values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
