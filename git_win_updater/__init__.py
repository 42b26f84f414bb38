"""
Git for Windows Updater

Checks for a newer Git for Windows release, asks whether to install it,
runs the installer and closes the Git Bash sessions it needs to replace.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from git_win_updater.update.orchestrator import UpdateOrchestrator
from git_win_updater.update.version import compare_versions

__all__ = [
    "UpdateOrchestrator",
    "compare_versions",
]
