"""
Update orchestration

Drives one update run end to end:

    INIT -> RESOLVE_PROXY -> FETCH_LATEST_VERSION -> COMPARE_VERSIONS
         -> UP_TO_DATE | NEEDS_PROMPT -> CONFIRM -> DECLINED | IGNORED | ACCEPTED
         -> DOWNLOAD -> INSTALL -> TERMINATE_SIBLINGS -> COMPLETE

Fetch and download failures propagate as FetchError subclasses before any
version mark is written. A declined prompt remembers the version so
``--quiet`` runs stay silent until a newer release appears; an ignored
prompt remembers nothing.
"""

import logging
import os
from pathlib import Path
from typing import Callable

from git_win_updater.confirm.channels import ConfirmationOutcome
from git_win_updater.core.config import Settings, get_settings
from git_win_updater.core.exceptions import TransportError
from git_win_updater.core.interfaces import IConfigStore, IConfirmationChannel, IFetcher
from git_win_updater.processes.census import ProcessCensus
from git_win_updater.update.checker import (
    fetch_latest_version,
    fetch_release_info,
    get_bitness_marker,
    get_current_version,
    select_installer_asset,
)
from git_win_updater.update.installer import download_installer, launch_installer
from git_win_updater.update.models import UpdateResult, UpdateState
from git_win_updater.update.proxy import discover_proxy
from git_win_updater.update.version import (
    compare_versions,
    is_release_candidate,
    release_base,
)

logger = logging.getLogger(__name__)


def format_warning(count: int) -> str:
    """Build the clause appended to the question when other shells will be killed"""
    if count <= 0:
        return ""
    if count == 1:
        return " (killing one Git Bash)"
    return f" (killing {count} Git Bash sessions)"


class UpdateOrchestrator:
    """
    Update decision and execution flow

    All collaborators are injected so the flow can run against in-memory
    implementations.

    Example:
        orchestrator = UpdateOrchestrator(
            config_store=GitConfigStore(),
            fetcher=HttpFetcher(),
            census=ProcessCensus(PsProcessTable()),
            channel=select_channel(auto_yes=False, gui=True, settings=settings),
        )
        result = orchestrator.run(quiet=True)
    """

    def __init__(
        self,
        config_store: IConfigStore,
        fetcher: IFetcher,
        census: ProcessCensus,
        channel: IConfirmationChannel,
        settings: Settings | None = None,
        current_version: str | None = None,
        native_pid: int | None = None,
        machine: str | None = None,
        proxy_discovery: Callable[[str], str | None] | None = None,
        installer_launcher: Callable[[Path, list[str]], object] = launch_installer,
        download_dir: Path | None = None,
    ):
        """
        Initialize orchestrator

        Args:
            config_store: Persisted proxy and seen-version values
            fetcher: HTTP retrieval
            census: Shell session census and termination
            channel: Confirmation channel chosen at startup
            settings: Updater settings (defaults to get_settings())
            current_version: Installed version (detected with git if None)
            native_pid: Pid of this process (defaults to os.getpid())
            machine: Machine type for installer selection (defaults to platform.machine())
            proxy_discovery: Callable returning a proxy for a URL
            installer_launcher: Callable starting the installer detached
            download_dir: Directory for the installer (temporary if None)
        """
        self.config_store = config_store
        self.fetcher = fetcher
        self.census = census
        self.channel = channel
        self.settings = settings or get_settings()
        self.current_version = current_version
        self.native_pid = native_pid if native_pid is not None else os.getpid()
        self.machine = machine
        self.proxy_discovery = proxy_discovery or (
            lambda url: discover_proxy(url, self.settings.proxy_lookup_helper)
        )
        self.installer_launcher = installer_launcher
        self.download_dir = download_dir

        self.state = UpdateState.INIT

    def _transition(self, state: UpdateState) -> None:
        logger.debug(f"State: {self.state.value} -> {state.value}")
        self.state = state

    def _finish(self, state: UpdateState, exit_code: int, message: str, **kwargs) -> UpdateResult:
        self._transition(state)
        logger.info(message)
        return UpdateResult(state=state, exit_code=exit_code, message=message, **kwargs)

    # Network

    def _resolve_proxy(self) -> None:
        self._transition(UpdateState.RESOLVE_PROXY)
        proxy = self.config_store.get(self.settings.proxy_key)
        if proxy:
            logger.info(f"Using configured proxy {proxy}")
            self.fetcher.proxy = proxy

    def _fetch(self, url: str) -> str:
        """
        GET with a single proxy-discovery retry

        Only a TransportError while no proxy is set triggers the retry. The
        discovered proxy is persisted only after the retry succeeds.
        """
        try:
            return self.fetcher.get(url)
        except TransportError as e:
            if self.fetcher.proxy:
                raise
            logger.info(f"Direct connection failed ({e.message}), looking for a proxy")
            proxy = self.proxy_discovery(url)
            if not proxy:
                raise
            self.fetcher.proxy = proxy
            body = self.fetcher.get(url)
            self.config_store.set(self.settings.proxy_key, proxy)
            return body

    # Decision

    def _is_up_to_date(self, current: str, latest: str) -> bool:
        if compare_versions(current, latest) == 0:
            return True
        # never offer a pre-release user an older or equal stable release
        if is_release_candidate(current) and compare_versions(release_base(current), latest) >= 0:
            return True
        return False

    def _confirmation_text(self, release_name: str) -> str:
        warning = ""
        if self.channel.interactive:
            warning = format_warning(self.census.count_sibling_shells(self.native_pid))
        return f"Download and install {release_name}{warning}?"

    def run(self, quiet: bool = False, testing: bool = False) -> UpdateResult:
        """
        Run the update flow

        Args:
            quiet: Stay silent if the latest version was already offered
            testing: Skip the up-to-date and downgrade checks

        Returns:
            UpdateResult: Terminal state and exit code

        Raises:
            FetchError: If the version check, metadata fetch or download fails
            UpdaterError: For other unrecoverable failures
        """
        self.state = UpdateState.INIT
        self._resolve_proxy()

        self._transition(UpdateState.FETCH_LATEST_VERSION)
        latest = fetch_latest_version(self._fetch, self.settings.latest_tag_url)
        current = self.current_version or get_current_version(self.settings.git_executable)
        versions = {"current_version": current, "latest_version": latest}

        self._transition(UpdateState.COMPARE_VERSIONS)
        seen_key = self.settings.seen_version_key
        if not testing and self._is_up_to_date(current, latest):
            if compare_versions(current, latest) == 0:
                self.config_store.set(seen_key, latest)
            return self._finish(UpdateState.UP_TO_DATE, 0, f"Up to date ({current})", **versions)

        if quiet and self.config_store.get(seen_key) == latest:
            return self._finish(
                UpdateState.ALREADY_SEEN, 0, f"Update {latest} was already offered", **versions
            )

        self._transition(UpdateState.NEEDS_PROMPT)
        release = fetch_release_info(self._fetch, self.settings.releases_url)
        asset = select_installer_asset(release, get_bitness_marker(self.machine))

        self._transition(UpdateState.CONFIRM)
        text = self._confirmation_text(release.name)
        outcome = self.channel.prompt(text)
        logger.info(f"Confirmation via {self.channel.name}: {outcome.value}")

        if outcome == ConfirmationOutcome.DECLINE:
            self.config_store.set(seen_key, latest)
            return self._finish(UpdateState.DECLINED, 1, f"Update {latest} declined", **versions)
        if outcome == ConfirmationOutcome.IGNORE:
            return self._finish(UpdateState.IGNORED, 1, f"Update {latest} not confirmed", **versions)

        self._transition(UpdateState.ACCEPTED)

        self._transition(UpdateState.DOWNLOAD)
        installer_path = download_installer(self.fetcher, asset.download_url, self.download_dir)

        self._transition(UpdateState.INSTALL)
        self.installer_launcher(installer_path, list(self.settings.installer_args))

        self._transition(UpdateState.TERMINATE_SIBLINGS)
        terminated = self.census.terminate_shells()

        return self._finish(
            UpdateState.COMPLETE,
            0,
            f"Installing {release.name}",
            installer_path=installer_path,
            terminated=terminated,
            **versions,
        )
