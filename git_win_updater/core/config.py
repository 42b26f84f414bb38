"""
Configuration management

Centralized settings using Pydantic BaseSettings for type-safe configuration
with environment variable support (prefix ``GIT_UPDATER_``).
"""

import logging
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def get_package_root() -> Path:
    """
    Get the directory containing the git_win_updater/ package

    Returns:
        Path: Absolute path to the project root
    """
    return Path(__file__).parent.parent.parent.resolve()


class Settings(BaseSettings):
    """
    Updater settings with environment variable support

    Settings can be overridden via environment variables:
    - GIT_UPDATER_LATEST_TAG_URL=https://mirror.example.com/latest-tag.txt
    - GIT_UPDATER_SHELL_COMMAND=/usr/bin/bash
    - GIT_UPDATER_LOG_LEVEL=DEBUG
    """

    # Release endpoints
    latest_tag_url: str = "https://gitforwindows.org/latest-tag.txt"
    releases_url: str = "https://api.github.com/repos/git-for-windows/git/releases/latest"

    # Config store (git config --global)
    git_executable: str = "git"
    config_section: str = "winUpdater"
    proxy_key: str = "http.proxy"

    # Processes
    shell_command: str = "/usr/bin/bash"
    ps_command: list[str] = ["ps"]
    kill_command: list[str] = ["kill", "-9"]

    # Confirmation helpers
    toast_helper: str = "wintoast.exe"
    toast_app_name: str = "Git for Windows"
    toast_app_id: str = "GitForWindows.Updater"
    toast_expiration_ms: int = 61000
    dialog_title: str = "Git Update Available"

    # Proxy discovery
    proxy_lookup_helper: str = "proxy-lookup.exe"

    # Installer
    installer_args: list[str] = ["/SILENT", "/NORESTART"]

    # Logging
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(
        env_prefix="GIT_UPDATER_",
        env_file=str(get_package_root() / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def seen_version_key(self) -> str:
        """Config key holding the most recently offered (or declined) version"""
        return f"{self.config_section}.recentlySeenVersion"


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get updater settings (singleton)

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        logger.debug(f"Loaded settings: {_settings.model_dump()}")
    return _settings
