"""
Update data models

Defines release metadata (as published by GitHub and as used internally),
the orchestrator states and the final result of an update run.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class GithubAsset(BaseModel):
    """One downloadable file of a GitHub release"""

    name: str
    browser_download_url: str


class GithubRelease(BaseModel):
    """Subset of the GitHub ``releases/latest`` response the updater reads"""

    tag_name: str
    name: str | None = None
    assets: list[GithubAsset] = []


@dataclass
class ReleaseAsset:
    """
    Installer candidate of a release

    Attributes:
        name: File name (e.g., "Git-2.41.0-64-bit.exe")
        download_url: Direct download URL
    """

    name: str
    download_url: str


@dataclass
class ReleaseInfo:
    """
    Latest release metadata

    Attributes:
        version: Version without leading "v" (e.g., "2.41.0.windows.1")
        name: Human-readable release name (e.g., "Git for Windows 2.41.0")
        assets: Candidate downloads
    """

    version: str
    name: str
    assets: list[ReleaseAsset] = field(default_factory=list)


class UpdateState(str, Enum):
    """Orchestrator state"""

    INIT = "init"
    RESOLVE_PROXY = "resolve_proxy"
    FETCH_LATEST_VERSION = "fetch_latest_version"
    COMPARE_VERSIONS = "compare_versions"
    UP_TO_DATE = "up_to_date"
    ALREADY_SEEN = "already_seen"
    NEEDS_PROMPT = "needs_prompt"
    CONFIRM = "confirm"
    DECLINED = "declined"
    IGNORED = "ignored"
    ACCEPTED = "accepted"
    DOWNLOAD = "download"
    INSTALL = "install"
    TERMINATE_SIBLINGS = "terminate_siblings"
    COMPLETE = "complete"


@dataclass
class UpdateResult:
    """
    Outcome of an update run

    Attributes:
        state: Terminal state reached
        exit_code: Process exit status to report
        message: Human-readable summary
        current_version: Installed version (if determined)
        latest_version: Latest published version (if fetched)
        installer_path: Downloaded installer (if any)
        terminated: Shell pids that were sent a kill signal
    """

    state: UpdateState
    exit_code: int
    message: str = ""
    current_version: str | None = None
    latest_version: str | None = None
    installer_path: Path | None = None
    terminated: list[int] = field(default_factory=list)
