"""
Update Installer Service

Downloads the installer to a temporary directory and launches it
detached so it outlives the updater and the shells it replaces.
"""

import logging
import platform
import subprocess
import tempfile
from pathlib import Path

from git_win_updater.core.interfaces import IFetcher

logger = logging.getLogger(__name__)

# Windows-specific flags so the installer gets its own process group and
# no console; on other platforms start_new_session does the same job
if platform.system() == "Windows":
    DETACH_FLAGS = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
else:
    DETACH_FLAGS = 0


def download_installer(fetcher: IFetcher, download_url: str, dest_dir: Path | None = None) -> Path:
    """
    Download an installer

    Args:
        fetcher: Fetcher used for the transfer
        download_url: Installer URL
        dest_dir: Target directory (a fresh temporary directory by default)

    Returns:
        Path: Path to the downloaded installer

    Raises:
        FetchError: If the download fails
    """
    if dest_dir is None:
        dest_dir = Path(tempfile.mkdtemp(prefix="git-update-"))

    filename = download_url.rstrip("/").split("/")[-1] or "git-installer.exe"
    return fetcher.download(download_url, dest_dir / filename)


def launch_installer(installer_path: Path, args: list[str]) -> subprocess.Popen:
    """
    Start the installer without waiting for it

    Args:
        installer_path: Downloaded installer
        args: Installer arguments (e.g. ["/SILENT", "/NORESTART"])

    Returns:
        subprocess.Popen: Handle of the detached process
    """
    cmd = [str(installer_path), *args]
    logger.info(f"Launching installer: {' '.join(cmd)}")

    if DETACH_FLAGS:
        return subprocess.Popen(cmd, close_fds=True, creationflags=DETACH_FLAGS)
    return subprocess.Popen(cmd, close_fds=True, start_new_session=True)
