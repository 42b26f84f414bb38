"""
Tests for the update checker

Covers version detection, latest-tag and release metadata parsing,
and installer selection by bitness.
"""

import json
import subprocess
from unittest.mock import patch

import pytest

from git_win_updater.core.exceptions import (
    ReleaseAssetNotFoundError,
    UpdaterError,
    VersionDetectionError,
)
from git_win_updater.update.checker import (
    fetch_latest_version,
    fetch_release_info,
    get_bitness_marker,
    get_current_version,
    parse_release,
    select_installer_asset,
)

RELEASE = {
    "tag_name": "v2.42.0.windows.1",
    "name": "Git for Windows 2.42.0",
    "html_url": "https://github.com/git-for-windows/git/releases/tag/v2.42.0.windows.1",
    "prerelease": False,
    "assets": [
        {
            "name": "PortableGit-2.42.0-64-bit.7z.exe",
            "browser_download_url": "https://example.com/PortableGit-2.42.0-64-bit.7z.exe",
        },
        {
            "name": "Git-2.42.0-32-bit.exe",
            "browser_download_url": "https://example.com/Git-2.42.0-32-bit.exe",
        },
        {
            "name": "Git-2.42.0-64-bit.exe",
            "browser_download_url": "https://example.com/Git-2.42.0-64-bit.exe",
        },
        {
            "name": "MinGit-2.42.0-64-bit.zip",
            "browser_download_url": "https://example.com/MinGit-2.42.0-64-bit.zip",
        },
    ],
}


class TestGetCurrentVersion:
    """Tests for get_current_version"""

    def test_parses_git_version_output(self):
        """Test the version is extracted from 'git --version'"""
        completed = subprocess.CompletedProcess(["git", "--version"], 0, "git version 2.41.0.windows.1\n", "")
        with patch("git_win_updater.update.checker.subprocess.run", return_value=completed) as run:
            assert get_current_version() == "2.41.0.windows.1"

        assert run.call_args[0][0] == ["git", "--version"]

    def test_unexpected_output(self):
        """Test unrecognized output raises VersionDetectionError"""
        completed = subprocess.CompletedProcess(["git", "--version"], 0, "hello\n", "")
        with patch("git_win_updater.update.checker.subprocess.run", return_value=completed):
            with pytest.raises(VersionDetectionError):
                get_current_version()

    def test_git_missing(self):
        """Test a missing git executable raises VersionDetectionError"""
        with patch("git_win_updater.update.checker.subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(VersionDetectionError):
                get_current_version("git")


class TestFetchLatestVersion:
    """Tests for fetch_latest_version"""

    def test_strips_tag(self):
        """Test the tag is normalized"""
        calls = []

        def fetch(url):
            calls.append(url)
            return "v2.42.0.windows.1\n"

        assert fetch_latest_version(fetch, "https://gitforwindows.org/latest-tag.txt") == "2.42.0.windows.1"
        assert calls == ["https://gitforwindows.org/latest-tag.txt"]

    def test_empty_tag(self):
        """Test an empty body is an error"""
        with pytest.raises(UpdaterError):
            fetch_latest_version(lambda url: "\n", "https://example.com/tag")


class TestParseRelease:
    """Tests for parse_release and fetch_release_info"""

    def test_parses_release(self):
        """Test version, name and assets are read"""
        release = parse_release(json.dumps(RELEASE))

        assert release.version == "2.42.0.windows.1"
        assert release.name == "Git for Windows 2.42.0"
        assert len(release.assets) == 4
        assert release.assets[2].download_url == "https://example.com/Git-2.42.0-64-bit.exe"

    def test_missing_name_gets_default(self):
        """Test a release without a name is named after its version"""
        data = dict(RELEASE, name=None)

        assert parse_release(json.dumps(data)).name == "Git for Windows 2.42.0.windows.1"

    def test_invalid_json(self):
        """Test malformed JSON raises UpdaterError"""
        with pytest.raises(UpdaterError):
            parse_release("<html>rate limited</html>")

    def test_missing_tag(self):
        """Test a document without tag_name raises UpdaterError"""
        with pytest.raises(UpdaterError):
            parse_release(json.dumps({"name": "x", "assets": []}))

    def test_fetch_release_info(self):
        """Test fetch_release_info fetches then parses"""
        release = fetch_release_info(lambda url: json.dumps(RELEASE), "https://example.com/releases/latest")

        assert release.version == "2.42.0.windows.1"


class TestInstallerSelection:
    """Tests for get_bitness_marker and select_installer_asset"""

    @pytest.mark.parametrize(
        "machine,expected",
        [
            ("AMD64", "64-bit"),
            ("x86_64", "64-bit"),
            ("ARM64", "arm64"),
            ("aarch64", "arm64"),
            ("x86", "32-bit"),
            ("i686", "32-bit"),
            ("sparc", "64-bit"),
        ],
    )
    def test_bitness_marker(self, machine, expected):
        """Test machine names map to installer markers"""
        assert get_bitness_marker(machine) == expected

    def test_selects_64_bit_installer(self):
        """Test the full 64-bit installer is chosen over portable and MinGit"""
        asset = select_installer_asset(parse_release(json.dumps(RELEASE)), "64-bit")

        assert asset.name == "Git-2.42.0-64-bit.exe"

    def test_selects_32_bit_installer(self):
        """Test the 32-bit installer is chosen"""
        asset = select_installer_asset(parse_release(json.dumps(RELEASE)), "32-bit")

        assert asset.download_url == "https://example.com/Git-2.42.0-32-bit.exe"

    def test_missing_marker(self):
        """Test a release without a matching installer raises"""
        with pytest.raises(ReleaseAssetNotFoundError) as exc_info:
            select_installer_asset(parse_release(json.dumps(RELEASE)), "arm64")

        assert exc_info.value.marker == "arm64"
