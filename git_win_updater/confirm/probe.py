"""
Confirmation channel selection

Probes the platform once at startup and builds the channel the
orchestrator will use.
"""

import logging
import platform
import shutil

from git_win_updater.confirm.channels import (
    AutoConfirm,
    GraphicalConfirm,
    TerminalConfirm,
    ToastConfirm,
)
from git_win_updater.core.config import Settings
from git_win_updater.core.interfaces import IConfirmationChannel

logger = logging.getLogger(__name__)


def is_windows() -> bool:
    return platform.system() == "Windows"


def find_toast_helper(helper: str) -> str | None:
    """
    Locate the toast helper if this system can show toasts

    Toast notifications with actions need Windows 10 or later.

    Returns:
        str or None: Helper path, or None if toasts are unavailable
    """
    if not is_windows():
        return None

    try:
        major = int(platform.release().split(".")[0])
    except ValueError:
        logger.debug(f"Unrecognized Windows release: {platform.release()!r}")
        return None
    if major < 10:
        return None

    return shutil.which(helper)


def select_channel(auto_yes: bool, gui: bool, settings: Settings) -> IConfirmationChannel:
    """
    Pick the confirmation channel

    Args:
        auto_yes: Accept without asking (--yes)
        gui: Prefer toast/dialog over the terminal (--gui)
        settings: Updater settings

    Returns:
        The selected channel
    """
    if auto_yes:
        channel = AutoConfirm()
    elif gui and is_windows():
        terminal = TerminalConfirm()
        dialog = GraphicalConfirm(
            command=[settings.git_executable, "askyesno"],
            title=settings.dialog_title,
            fallback=terminal,
        )
        toast_helper = find_toast_helper(settings.toast_helper)
        if toast_helper:
            channel = ToastConfirm(
                helper=toast_helper,
                app_name=settings.toast_app_name,
                app_id=settings.toast_app_id,
                expiration_ms=settings.toast_expiration_ms,
                fallback=dialog,
            )
        else:
            channel = dialog
    else:
        if gui:
            logger.info("Graphical confirmation is only available on Windows, using terminal")
        channel = TerminalConfirm()

    logger.debug(f"Selected confirmation channel: {channel.name}")
    return channel
