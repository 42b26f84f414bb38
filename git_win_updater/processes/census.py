"""
Shell session census

Counts the interactive shell sessions that an update would kill.

Under Git for Windows a process is visible through two numberings: the
MSYS2 pid used by ``ps``/``kill`` and the native Windows pid (the WINPID
column). The updater itself typically runs inside a process group led by
``git.exe`` (or ``sh.exe``), whose parent is the user's shell. That shell
is the caller's own session and is not counted as a sibling.
"""

import logging
from dataclasses import dataclass

from git_win_updater.core.interfaces import IProcessTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessRecord:
    """
    One row of the process table

    Attributes:
        pid: Process id (MSYS2 numbering under Git for Windows)
        ppid: Parent process id
        pgid: Process group id
        command: Command path (e.g. "/usr/bin/bash")
        winpid: Native Windows pid, when the listing provides it
    """

    pid: int
    ppid: int
    pgid: int
    command: str
    winpid: int | None = None


def resolve_self_id(records: list[ProcessRecord], native_pid: int) -> int:
    """
    Translate a native pid into the process table's numbering

    Args:
        records: Process table
        native_pid: Pid as reported by os.getpid()

    Returns:
        int: Matching pid from the table, or native_pid if no row maps it
    """
    for record in records:
        if record.winpid == native_pid:
            return record.pid
    return native_pid


def find_launching_shell(records: list[ProcessRecord], self_id: int) -> int | None:
    """
    Find the shell session that launched the caller

    For each row R1 with pid == self_id, look for the group leader R2
    (R2.pid == R1.pgid) that is either R1's child or R1's parent, but not
    both. The launching shell is the parent of whichever of the two sits
    higher in the tree.

    Args:
        records: Process table
        self_id: Caller's pid in the table's numbering

    Returns:
        int or None: Pid of the launching shell, or None if no pair bridges
    """
    by_pid: dict[int, list[ProcessRecord]] = {}
    for record in records:
        by_pid.setdefault(record.pid, []).append(record)

    for first in by_pid.get(self_id, []):
        for leader in by_pid.get(first.pgid, []):
            if leader is first:
                continue
            leader_is_child = leader.ppid == first.pid
            leader_is_parent = first.ppid == leader.pid
            if leader_is_child == leader_is_parent:
                continue
            ancestor = first.ppid if leader_is_child else leader.ppid
            logger.debug(f"Bridged pid {self_id} via group leader {leader.pid} to shell {ancestor}")
            return ancestor

    logger.debug(f"No launching shell found for pid {self_id}")
    return None


def count_sibling_shells(records: list[ProcessRecord], self_id: int, shell_command: str) -> int:
    """
    Count shell sessions other than the one that launched the caller

    Args:
        records: Process table
        self_id: Caller's pid in the table's numbering
        shell_command: Exact command path of the interactive shell

    Returns:
        int: Number of sibling shell sessions
    """
    ancestor = find_launching_shell(records, self_id)
    return sum(1 for r in records if r.command == shell_command and r.pid != ancestor)


class ProcessCensus:
    """
    Shell session census over a process table

    Example:
        census = ProcessCensus(PsProcessTable(), "/usr/bin/bash")
        others = census.count_sibling_shells(os.getpid())
    """

    def __init__(self, table: IProcessTable, shell_command: str = "/usr/bin/bash"):
        self.table = table
        self.shell_command = shell_command

    def count_sibling_shells(self, native_pid: int) -> int:
        """
        Count shell sessions other than the caller's own

        The pid translation and the count use the same process listing.

        Args:
            native_pid: Caller's pid as reported by os.getpid()
        """
        records = self.table.list_processes()
        self_id = resolve_self_id(records, native_pid)
        count = count_sibling_shells(records, self_id, self.shell_command)
        logger.info(f"Found {count} other shell session(s)")
        return count

    def list_shells(self) -> list[ProcessRecord]:
        return [r for r in self.table.list_processes() if r.command == self.shell_command]

    def terminate_shells(self) -> list[int]:
        """
        Kill every shell session, the caller's own included

        Returns:
            list[int]: Pids that were successfully signalled
        """
        terminated = []
        for record in self.list_shells():
            if self.table.terminate(record.pid):
                terminated.append(record.pid)
            else:
                logger.warning(f"Could not terminate shell {record.pid}")
        logger.info(f"Terminated {len(terminated)} shell session(s)")
        return terminated
