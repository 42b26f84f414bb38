"""
Confirmation package

Headless, terminal, dialog and toast channels for asking whether to
install an update.
"""

from git_win_updater.confirm.channels import (
    AutoConfirm,
    ConfirmationOutcome,
    GraphicalConfirm,
    TerminalConfirm,
    ToastConfirm,
)
from git_win_updater.confirm.probe import select_channel

__all__ = [
    "AutoConfirm",
    "ConfirmationOutcome",
    "GraphicalConfirm",
    "TerminalConfirm",
    "ToastConfirm",
    "select_channel",
]
