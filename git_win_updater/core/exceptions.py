"""
Base exception hierarchy

Provides a consistent exception structure across the updater
with clear error messages, recovery hints and process exit codes.
"""


class UpdaterError(Exception):
    """
    Base exception for all updater errors

    Attributes:
        message: Error message
        component: Component that raised the error
        recovery_hint: Optional hint for recovery
        exit_code: Process exit status the CLI reports for this error
    """

    exit_code = 1

    def __init__(self, message: str, component: str = "", recovery_hint: str = ""):
        self.message = message
        self.component = component
        self.recovery_hint = recovery_hint
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        if self.component:
            msg = f"[{self.component}] {msg}"
        if self.recovery_hint:
            msg += f"\nHint: {self.recovery_hint}"
        return msg


class FetchError(UpdaterError):
    """Network retrieval failed"""

    def __init__(self, message: str, url: str = "", recovery_hint: str = ""):
        self.url = url
        super().__init__(message, component="Network", recovery_hint=recovery_hint)


class TransportError(FetchError):
    """No response was obtained (connection, DNS, proxy or timeout failure)"""

    exit_code = 2

    def __init__(self, message: str, url: str = "", recovery_hint: str = ""):
        super().__init__(
            message,
            url=url,
            recovery_hint=recovery_hint or "Check network connectivity and the http.proxy setting",
        )


class HttpError(FetchError):
    """A response was obtained but its status signals failure (>= 400)"""

    exit_code = 3

    def __init__(self, status_code: int, body: str = "", url: str = ""):
        self.status_code = status_code
        self.body = body
        message = f"HTTP {status_code} from {url}" if url else f"HTTP {status_code}"
        if body:
            message += f": {body.strip()}"
        super().__init__(message, url=url)


class ConfigError(UpdaterError):
    """Config store could not be read or written"""

    def __init__(self, message: str, recovery_hint: str = ""):
        super().__init__(
            message,
            component="Configuration",
            recovery_hint=recovery_hint or "Check that git is on PATH and ~/.gitconfig is writable",
        )


class ProcessError(UpdaterError):
    """Process listing or termination is unavailable"""

    def __init__(self, message: str, recovery_hint: str = ""):
        super().__init__(
            message,
            component="Processes",
            recovery_hint=recovery_hint or "Run the updater from a Git Bash session",
        )


class VersionDetectionError(UpdaterError):
    """The installed version could not be determined"""

    def __init__(self, message: str, recovery_hint: str = ""):
        super().__init__(
            message,
            component="Version",
            recovery_hint=recovery_hint or "Verify that 'git --version' works",
        )


class ReleaseAssetNotFoundError(UpdaterError):
    """The release offers no installer for this platform"""

    def __init__(self, marker: str, release_name: str = ""):
        self.marker = marker
        super().__init__(
            f"No {marker} installer found in release {release_name}".rstrip(),
            component="Release",
            recovery_hint="Download the installer manually from https://gitforwindows.org/",
        )
