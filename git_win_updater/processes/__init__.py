"""
Process census package

Lists processes, counts sibling shell sessions and terminates them
before an installer replaces files in use.
"""

from git_win_updater.processes.census import (
    ProcessCensus,
    ProcessRecord,
    count_sibling_shells,
    find_launching_shell,
    resolve_self_id,
)
from git_win_updater.processes.table import PsProcessTable, parse_ps_output

__all__ = [
    "ProcessCensus",
    "ProcessRecord",
    "PsProcessTable",
    "count_sibling_shells",
    "find_launching_shell",
    "parse_ps_output",
    "resolve_self_id",
]
