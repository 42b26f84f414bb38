"""
Core interfaces and protocols

Defines the collaborator protocols the orchestrator depends on, so that
git config, ``ps``/``kill`` and the dialog helpers can be swapped for
in-memory implementations.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from git_win_updater.confirm.channels import ConfirmationOutcome
    from git_win_updater.processes.census import ProcessRecord


class IConfigStore(Protocol):
    """Protocol for persisted key-value configuration"""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when unset"""
        ...

    def set(self, key: str, value: str) -> None:
        """Persist a value"""
        ...


class IFetcher(Protocol):
    """Protocol for the HTTP retrieval layer"""

    proxy: str | None

    def get(self, url: str) -> str:
        """GET a URL and return its body"""
        ...

    def download(self, url: str, dest: Path) -> Path:
        """Stream a URL into a file"""
        ...


class IProcessTable(Protocol):
    """Protocol for OS process listing and termination"""

    def list_processes(self) -> list["ProcessRecord"]:
        """Return every process visible to the current user"""
        ...

    def terminate(self, pid: int) -> bool:
        """Terminate a process by id, returning True on success"""
        ...


class IConfirmationChannel(Protocol):
    """Protocol for asking the user whether to install an update"""

    name: str
    interactive: bool

    def prompt(self, text: str) -> "ConfirmationOutcome":
        """Ask the question and return the outcome"""
        ...
