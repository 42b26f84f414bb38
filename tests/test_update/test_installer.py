"""
Tests for installer download and launch
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

from git_win_updater.update.installer import download_installer, launch_installer


class RecordingFetcher:
    proxy = None

    def __init__(self):
        self.downloads = []

    def get(self, url):
        raise AssertionError("get should not be called")

    def download(self, url, dest):
        self.downloads.append((url, dest))
        dest.write_bytes(b"installer")
        return dest


class TestDownloadInstaller:
    """Tests for download_installer"""

    def test_downloads_into_given_directory(self, tmp_path):
        """Test the file name is taken from the URL"""
        fetcher = RecordingFetcher()

        path = download_installer(fetcher, "https://example.com/dl/Git-2.42.0-64-bit.exe", tmp_path)

        assert path == tmp_path / "Git-2.42.0-64-bit.exe"
        assert path.read_bytes() == b"installer"
        assert fetcher.downloads == [("https://example.com/dl/Git-2.42.0-64-bit.exe", path)]

    def test_downloads_into_fresh_temp_directory(self):
        """Test a temporary directory is created when none is given"""
        fetcher = RecordingFetcher()

        path = download_installer(fetcher, "https://example.com/Git-2.42.0-64-bit.exe")

        try:
            assert path.parent.name.startswith("git-update-")
            assert path.name == "Git-2.42.0-64-bit.exe"
        finally:
            path.unlink()
            path.parent.rmdir()


class TestLaunchInstaller:
    """Tests for launch_installer"""

    def test_new_session_when_not_windows(self):
        """Test the installer gets its own session on POSIX"""
        with patch("git_win_updater.update.installer.DETACH_FLAGS", 0):
            with patch("git_win_updater.update.installer.subprocess.Popen") as popen:
                launch_installer(Path("/tmp/Git-2.42.0-64-bit.exe"), ["/SILENT", "/NORESTART"])

        args, kwargs = popen.call_args
        assert args[0] == [str(Path("/tmp/Git-2.42.0-64-bit.exe")), "/SILENT", "/NORESTART"]
        assert kwargs["start_new_session"] is True
        assert "creationflags" not in kwargs

    def test_creation_flags_on_windows(self):
        """Test the installer is detached with creation flags on Windows"""
        with patch("git_win_updater.update.installer.DETACH_FLAGS", 0x208):
            with patch("git_win_updater.update.installer.subprocess.Popen", return_value=MagicMock()) as popen:
                launch_installer(Path("C:/Temp/Git-2.42.0-64-bit.exe"), ["/SILENT"])

        kwargs = popen.call_args[1]
        assert kwargs["creationflags"] == 0x208
        assert kwargs["close_fds"] is True
