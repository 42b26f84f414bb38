"""
Confirmation channels

Each channel asks "Download and install ...?" in its own way and reduces
the answer to a ConfirmationOutcome:

- ACCEPT: go ahead with download and install
- DECLINE: the user said no; the version is remembered as seen
- IGNORE: no usable answer; nothing is remembered
"""

import logging
import subprocess
from enum import Enum
from typing import Callable

import click

logger = logging.getLogger(__name__)


class ConfirmationOutcome(str, Enum):
    """Result of a confirmation prompt"""

    ACCEPT = "accept"
    DECLINE = "decline"
    IGNORE = "ignore"


# WinToast exit codes
TOAST_CLICKED = 0
TOAST_DISMISSED = 1
TOAST_TIMED_OUT = 2
TOAST_HIDDEN = 3
TOAST_NOT_ACTIVATED = 4
TOAST_FAILED = 5
TOAST_NOT_SUPPORTED = 6
TOAST_UNKNOWN_ERROR = 7
TOAST_ACTION_YES = 16
TOAST_ACTION_NO = 17

# None means "ask again through the fallback channel"
TOAST_OUTCOMES: dict[int, ConfirmationOutcome | None] = {
    TOAST_ACTION_YES: ConfirmationOutcome.ACCEPT,
    TOAST_ACTION_NO: ConfirmationOutcome.DECLINE,
    TOAST_DISMISSED: ConfirmationOutcome.DECLINE,
    TOAST_TIMED_OUT: ConfirmationOutcome.IGNORE,
    TOAST_HIDDEN: ConfirmationOutcome.IGNORE,
    TOAST_UNKNOWN_ERROR: ConfirmationOutcome.IGNORE,
    TOAST_CLICKED: None,
    TOAST_NOT_ACTIVATED: None,
    TOAST_FAILED: None,
    TOAST_NOT_SUPPORTED: None,
}

_AFFIRMATIVE = ("y", "yes")


class AutoConfirm:
    """Headless channel (``--yes``): always accepts without asking"""

    name = "auto"
    interactive = False

    def prompt(self, text: str) -> ConfirmationOutcome:
        logger.info(f"Auto-accepting: {text}")
        return ConfirmationOutcome.ACCEPT


def _ask_on_terminal(text: str) -> str:
    return click.prompt(f"{text} [y/N]", default="", show_default=False, prompt_suffix=" ")


class TerminalConfirm:
    """
    Yes/no question on the terminal

    Only "y"/"yes" accept; any other answer declines. No answer at all
    (end of input, Ctrl+C) is ignored.
    """

    name = "terminal"
    interactive = True

    def __init__(self, ask: Callable[[str], str] | None = None):
        self.ask = ask or _ask_on_terminal

    def prompt(self, text: str) -> ConfirmationOutcome:
        try:
            answer = self.ask(text)
        except (click.Abort, EOFError):
            logger.info("No answer received on terminal")
            return ConfirmationOutcome.IGNORE

        if answer.strip().lower() in _AFFIRMATIVE:
            return ConfirmationOutcome.ACCEPT
        return ConfirmationOutcome.DECLINE


class GraphicalConfirm:
    """
    Yes/no dialog through ``git askyesno``

    Exit status 0 accepts, anything else declines. If the dialog cannot be
    started at all the question goes to the fallback channel.
    """

    name = "graphical"
    interactive = True

    def __init__(
        self,
        command: list[str],
        title: str,
        fallback: "TerminalConfirm | None" = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.command = command
        self.title = title
        self.fallback = fallback or TerminalConfirm()
        self.runner = runner

    def prompt(self, text: str) -> ConfirmationOutcome:
        cmd = [*self.command, "--title", self.title, text]
        try:
            result = self.runner(cmd)
        except OSError as e:
            logger.warning(f"Unable to show dialog ({e}), asking on terminal instead")
            return self.fallback.prompt(text)

        logger.debug(f"Dialog returned {result.returncode}")
        if result.returncode == 0:
            return ConfirmationOutcome.ACCEPT
        return ConfirmationOutcome.DECLINE


class ToastConfirm:
    """
    Windows toast notification with Yes/No actions

    The helper's exit code is mapped through TOAST_OUTCOMES. Codes meaning
    the toast could not be shown, and codes outside the table, fall back
    to the graphical dialog.
    """

    name = "toast"
    interactive = True

    def __init__(
        self,
        helper: str,
        app_name: str,
        app_id: str,
        expiration_ms: int,
        fallback: GraphicalConfirm,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.helper = helper
        self.app_name = app_name
        self.app_id = app_id
        self.expiration_ms = expiration_ms
        self.fallback = fallback
        self.runner = runner

    def prompt(self, text: str) -> ConfirmationOutcome:
        cmd = [
            self.helper,
            "--appname", self.app_name,
            "--appid", self.app_id,
            "--text", text,
            "--action", "Yes",
            "--action", "No",
            "--expirationtime", str(self.expiration_ms),
        ]
        try:
            code = self.runner(cmd).returncode
        except OSError as e:
            logger.warning(f"Unable to show toast ({e}), falling back to {self.fallback.name}")
            return self.fallback.prompt(text)

        if code not in TOAST_OUTCOMES:
            logger.warning(f"Unexpected toast result {code}, falling back to {self.fallback.name}")
            return self.fallback.prompt(text)

        outcome = TOAST_OUTCOMES[code]
        if outcome is None:
            logger.info(f"Toast not usable (code {code}), falling back to {self.fallback.name}")
            return self.fallback.prompt(text)

        logger.debug(f"Toast returned {code} -> {outcome.value}")
        return outcome
