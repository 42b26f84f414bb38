"""
Update Management Package

Provides self-update functionality for Git for Windows.

Features:
- Check gitforwindows.org / GitHub Releases for a newer version
- Proxy discovery when a direct connection fails
- Download the installer matching this machine and launch it detached
- Orchestrate confirmation, download, install and shell termination
"""

from git_win_updater.update.checker import fetch_latest_version, get_current_version
from git_win_updater.update.fetcher import HttpFetcher
from git_win_updater.update.installer import download_installer, launch_installer
from git_win_updater.update.models import ReleaseInfo, UpdateResult, UpdateState
from git_win_updater.update.orchestrator import UpdateOrchestrator
from git_win_updater.update.version import compare_versions

__all__ = [
    "HttpFetcher",
    "ReleaseInfo",
    "UpdateOrchestrator",
    "UpdateResult",
    "UpdateState",
    "compare_versions",
    "download_installer",
    "fetch_latest_version",
    "get_current_version",
    "launch_installer",
]
