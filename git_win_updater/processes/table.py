"""
Process table backed by ``ps`` and ``kill``

Uses the MSYS2 tools shipped with Git for Windows, so pids are in the
same numbering the shells themselves use. The ``ps`` output is parsed by
header column names, which also makes procps-style listings such as
``ps -eo pid,ppid,pgid,comm`` work.
"""

import logging
import subprocess

from git_win_updater.core.exceptions import ProcessError
from git_win_updater.processes.census import ProcessRecord

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = ("PID", "PPID", "PGID")
_COMMAND_COLUMNS = ("COMMAND", "CMD", "COMM")


def _to_int(token: str) -> int | None:
    try:
        return int(token)
    except ValueError:
        return None


def parse_ps_output(output: str) -> list[ProcessRecord]:
    """
    Parse ``ps`` output into process records

    MSYS2 ``ps`` prints a one-character status flag (``I``, ``S``, ``O``)
    in an unnamed first column; it is skipped.

    Args:
        output: Full ``ps`` output including its header line

    Returns:
        list[ProcessRecord]: One record per parsable row

    Raises:
        ProcessError: If the header lacks PID/PPID/PGID/COMMAND columns
    """
    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        return []

    header = lines[0]
    columns = header.split()
    upper = [c.upper() for c in columns]
    missing = [name for name in _REQUIRED_COLUMNS if name not in upper]
    command_name = next((name for name in _COMMAND_COLUMNS if name in upper), None)
    if missing or command_name is None:
        raise ProcessError(f"Unrecognized ps header: {header.strip()!r}")

    index = {name: upper.index(name) for name in (*_REQUIRED_COLUMNS, "WINPID") if name in upper}
    command_offset = header.upper().index(command_name)

    records = []
    for line in lines[1:]:
        tokens = line.split()
        if tokens and _to_int(tokens[0]) is None:
            tokens = tokens[1:]
        if len(tokens) < len(columns):
            logger.debug(f"Skipping short ps row: {line!r}")
            continue

        values = {name: _to_int(tokens[i]) for name, i in index.items()}
        if any(values[name] is None for name in _REQUIRED_COLUMNS):
            logger.debug(f"Skipping unparsable ps row: {line!r}")
            continue

        command = line[command_offset:].strip()
        if not command or line[command_offset - 1 : command_offset] not in (" ", "\t", ""):
            command = tokens[-1]

        records.append(
            ProcessRecord(
                pid=values["PID"],
                ppid=values["PPID"],
                pgid=values["PGID"],
                command=command,
                winpid=values.get("WINPID"),
            )
        )
    return records


class PsProcessTable:
    """
    Process table using external ``ps``/``kill`` commands

    Example:
        table = PsProcessTable()
        shells = [p for p in table.list_processes() if p.command == "/usr/bin/bash"]
    """

    def __init__(self, ps_command: list[str] | None = None, kill_command: list[str] | None = None):
        self.ps_command = ps_command or ["ps"]
        # interactive bash ignores SIGTERM, so the default is SIGKILL
        self.kill_command = kill_command or ["kill", "-9"]

    def list_processes(self) -> list[ProcessRecord]:
        """
        List all processes

        Raises:
            ProcessError: If ps cannot be run
        """
        try:
            result = subprocess.run(
                self.ps_command,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=30,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ProcessError(f"Unable to list processes with {self.ps_command[0]}: {e}") from e

        if result.returncode != 0:
            raise ProcessError(f"{' '.join(self.ps_command)} failed: {result.stderr.strip()}")

        records = parse_ps_output(result.stdout)
        logger.debug(f"Listed {len(records)} processes")
        return records

    def terminate(self, pid: int) -> bool:
        """Send the kill signal to a pid"""
        cmd = [*self.kill_command, str(pid)]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=30)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Failed to run {' '.join(cmd)}: {e}")
            return False

        if result.returncode != 0:
            logger.warning(f"{' '.join(cmd)} failed: {result.stderr.strip()}")
            return False
        return True
