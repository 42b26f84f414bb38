"""
Command-line interface for the Git for Windows updater
"""

import logging
import sys

import click
from rich.console import Console
from rich.markup import escape

from git_win_updater.core.exceptions import UpdaterError

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def configure_logging(level: str, fmt: str) -> None:
    """Configure root logging on stderr"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=fmt,
        stream=sys.stderr,
    )


class UpdaterCommand(click.Command):
    """Command whose usage errors exit with status 1"""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _show_usage(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(ctx.get_help())
    ctx.exit(1)


@click.command(cls=UpdaterCommand, add_help_option=False)
@click.option("-y", "--yes", "auto_yes", is_flag=True, help="Install the update without asking")
@click.option("-g", "--gui", is_flag=True, help="Ask through a toast notification or dialog")
@click.option("--quiet", is_flag=True, help="Do nothing if the latest version was already offered")
@click.option("--testing", is_flag=True, help="Offer the latest release even if it is not newer")
@click.option(
    "-h",
    "-?",
    "--help",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_show_usage,
    help="Show this message and exit",
)
def main(auto_yes: bool, gui: bool, quiet: bool, testing: bool) -> None:
    """Check for, download and install a newer Git for Windows"""
    from git_win_updater.confirm.probe import select_channel
    from git_win_updater.core.config import get_settings
    from git_win_updater.processes.census import ProcessCensus
    from git_win_updater.processes.table import PsProcessTable
    from git_win_updater.storage.git_config import GitConfigStore
    from git_win_updater.update.fetcher import HttpFetcher
    from git_win_updater.update.models import UpdateState
    from git_win_updater.update.orchestrator import UpdateOrchestrator

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    orchestrator = UpdateOrchestrator(
        config_store=GitConfigStore(settings.git_executable),
        fetcher=HttpFetcher(),
        census=ProcessCensus(
            PsProcessTable(settings.ps_command, settings.kill_command),
            settings.shell_command,
        ),
        channel=select_channel(auto_yes=auto_yes, gui=gui, settings=settings),
        settings=settings,
    )

    try:
        result = orchestrator.run(quiet=quiet, testing=testing)
    except UpdaterError as e:
        logger.debug("Update failed", exc_info=True)
        err_console.print(f"[bold red]Update failed:[/bold red] {escape(str(e))}", highlight=False)
        sys.exit(e.exit_code)

    if result.state == UpdateState.UP_TO_DATE:
        console.print(f"[green]{result.message}[/green]")
    elif result.state == UpdateState.COMPLETE:
        console.print(f"[bold cyan]{result.message}[/bold cyan]")
    elif result.state in (UpdateState.DECLINED, UpdateState.IGNORED):
        console.print(f"[yellow]{result.message}[/yellow]")

    sys.exit(result.exit_code)
