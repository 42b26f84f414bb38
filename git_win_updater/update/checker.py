"""
Update Checker Service

Determines the installed Git for Windows version and reads the latest
release published on gitforwindows.org / GitHub Releases.
"""

import json
import logging
import platform
import re
import subprocess
from typing import Callable

from pydantic import ValidationError

from git_win_updater.core.exceptions import (
    ReleaseAssetNotFoundError,
    UpdaterError,
    VersionDetectionError,
)
from git_win_updater.update.models import GithubRelease, ReleaseAsset, ReleaseInfo
from git_win_updater.update.version import normalize_version

logger = logging.getLogger(__name__)

# platform.machine() value -> bitness marker used in installer file names
_BITNESS_MARKERS = {
    "amd64": "64-bit",
    "x86_64": "64-bit",
    "arm64": "arm64",
    "aarch64": "arm64",
    "x86": "32-bit",
    "i386": "32-bit",
    "i686": "32-bit",
}

_GIT_VERSION_PATTERN = re.compile(r"git version (\S+)")


def get_current_version(git_executable: str = "git") -> str:
    """
    Get the installed Git version

    Returns:
        str: Version string (e.g., "2.41.0.windows.1")

    Raises:
        VersionDetectionError: If git cannot be run or its output is not understood
    """
    try:
        result = subprocess.run(
            [git_executable, "--version"],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise VersionDetectionError(f"Unable to run {git_executable}: {e}") from e

    match = _GIT_VERSION_PATTERN.search(result.stdout)
    if result.returncode != 0 or not match:
        raise VersionDetectionError(f"Unexpected output from '{git_executable} --version': {result.stdout.strip()!r}")

    return match.group(1)


def fetch_latest_version(fetch: Callable[[str], str], url: str) -> str:
    """
    Fetch the latest published version tag

    Args:
        fetch: Callable performing a GET and returning the body
        url: Plaintext "latest tag" resource

    Returns:
        str: Version without leading "v"
    """
    tag = fetch(url)
    version = normalize_version(tag)
    if not version:
        raise UpdaterError(f"Empty version tag received from {url}", component="Release")
    logger.info(f"Latest version: {version}")
    return version


def parse_release(body: str) -> ReleaseInfo:
    """
    Parse a GitHub ``releases/latest`` JSON document

    Args:
        body: JSON text

    Returns:
        ReleaseInfo: Version, name and installer candidates

    Raises:
        UpdaterError: If the document is not a valid release
    """
    try:
        release = GithubRelease.model_validate(json.loads(body))
    except (json.JSONDecodeError, ValidationError) as e:
        raise UpdaterError(f"Invalid release metadata: {e}", component="Release") from e

    version = normalize_version(release.tag_name)
    return ReleaseInfo(
        version=version,
        name=release.name or f"Git for Windows {version}",
        assets=[ReleaseAsset(name=a.name, download_url=a.browser_download_url) for a in release.assets],
    )


def fetch_release_info(fetch: Callable[[str], str], url: str) -> ReleaseInfo:
    """Fetch and parse the latest release metadata"""
    release = parse_release(fetch(url))
    logger.info(f"Release '{release.name}' offers {len(release.assets)} assets")
    return release


def get_bitness_marker(machine: str | None = None) -> str:
    """
    Get the installer bitness marker for this machine

    Args:
        machine: Machine name (defaults to platform.machine())

    Returns:
        str: "64-bit", "32-bit" or "arm64"
    """
    machine = (machine if machine is not None else platform.machine()).lower()
    marker = _BITNESS_MARKERS.get(machine)
    if marker is None:
        logger.warning(f"Unknown machine type '{machine}', assuming 64-bit")
        marker = "64-bit"
    return marker


def select_installer_asset(release: ReleaseInfo, marker: str) -> ReleaseAsset:
    """
    Pick the installer matching a bitness marker

    Only full installers (``Git-<version>-<marker>.exe``) qualify; portable
    and MinGit archives are skipped.

    Raises:
        ReleaseAssetNotFoundError: If the release has no matching installer
    """
    pattern = re.compile(rf"^Git-.+-{re.escape(marker)}\.exe$")
    for asset in release.assets:
        if pattern.match(asset.name):
            logger.debug(f"Selected installer {asset.name}")
            return asset
    raise ReleaseAssetNotFoundError(marker, release.name)
