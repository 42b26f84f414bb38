"""
Tests for the shell session census

Synthetic process tables exercise the pid bridging between the MSYS2
and native numberings and the launching-shell exclusion.
"""

import pytest

from git_win_updater.processes.census import (
    ProcessCensus,
    ProcessRecord,
    count_sibling_shells,
    find_launching_shell,
    resolve_self_id,
)

BASH = "/usr/bin/bash"


def bash(pid, ppid=1, pgid=None, winpid=None):
    return ProcessRecord(pid=pid, ppid=ppid, pgid=pgid if pgid is not None else pid, command=BASH, winpid=winpid)


@pytest.fixture
def table():
    """bash 100 -> git 200 (group leader) -> updater 300, plus shells 400 and 500"""
    return [
        bash(100, winpid=4100),
        ProcessRecord(pid=200, ppid=100, pgid=200, command="/mingw64/bin/git", winpid=4200),
        ProcessRecord(pid=300, ppid=200, pgid=200, command="/usr/bin/sh", winpid=4300),
        bash(400, winpid=4400),
        bash(500, winpid=4500),
    ]


class FakeTable:
    def __init__(self, records, failing=()):
        self.records = records
        self.failing = set(failing)
        self.killed = []

    def list_processes(self):
        return list(self.records)

    def terminate(self, pid):
        self.killed.append(pid)
        return pid not in self.failing


class TestResolveSelfId:
    """Tests for resolve_self_id"""

    def test_maps_native_pid(self, table):
        """Test the WINPID column translates to the table's pid"""
        assert resolve_self_id(table, 4300) == 300

    def test_unmapped_pid_is_returned_unchanged(self, table):
        """Test a pid without a WINPID row is used as is"""
        assert resolve_self_id(table, 300) == 300
        assert resolve_self_id([], 9999) == 9999


class TestFindLaunchingShell:
    """Tests for find_launching_shell"""

    def test_group_leader_is_parent(self, table):
        """Test the leader's parent is the launching shell"""
        assert find_launching_shell(table, 300) == 100

    def test_group_leader_is_child(self):
        """Test the caller's parent is the launching shell when the leader is its child"""
        records = [
            bash(100),
            ProcessRecord(pid=300, ppid=100, pgid=310, command="/usr/bin/sh"),
            ProcessRecord(pid=310, ppid=300, pgid=310, command="/usr/bin/ps"),
        ]

        assert find_launching_shell(records, 300) == 100

    def test_own_group_leader_does_not_bridge(self):
        """Test a caller leading its own group has no bridge"""
        records = [bash(100), ProcessRecord(pid=300, ppid=100, pgid=300, command="/usr/bin/sh")]

        assert find_launching_shell(records, 300) is None

    def test_unrelated_leader_does_not_bridge(self):
        """Test a leader that is neither parent nor child is skipped"""
        records = [
            bash(100),
            ProcessRecord(pid=300, ppid=100, pgid=700, command="/usr/bin/sh"),
            ProcessRecord(pid=700, ppid=1, pgid=700, command="/usr/bin/mintty"),
        ]

        assert find_launching_shell(records, 300) is None

    def test_unknown_self_id(self, table):
        """Test no row for the caller means no launching shell"""
        assert find_launching_shell(table, 12345) is None


class TestCountSiblingShells:
    """Tests for count_sibling_shells"""

    def test_excludes_launching_shell(self, table):
        """Test the launching shell is not counted"""
        assert count_sibling_shells(table, 300, BASH) == 2

    def test_removing_other_shell_decrements(self, table):
        """Test dropping one non-launching shell lowers the count by one"""
        before = count_sibling_shells(table, 300, BASH)
        reduced = [r for r in table if r.pid != 400]

        assert count_sibling_shells(reduced, 300, BASH) == before - 1

    def test_counts_all_shells_without_bridge(self, table):
        """Test every shell counts when the caller cannot be bridged"""
        assert count_sibling_shells(table, 12345, BASH) == 3

    def test_only_exact_command_counts(self):
        """Test commands other than the shell path are ignored"""
        records = [
            bash(400),
            ProcessRecord(pid=401, ppid=1, pgid=401, command="/usr/bin/bash.exe"),
            ProcessRecord(pid=402, ppid=1, pgid=402, command="/usr/bin/sh"),
        ]

        assert count_sibling_shells(records, 999, BASH) == 1


class TestProcessCensus:
    """Tests for ProcessCensus"""

    def test_count_through_native_pid(self, table):
        """Test the census resolves and counts in one go"""
        census = ProcessCensus(FakeTable(table), BASH)

        assert census.count_sibling_shells(4300) == 2

    def test_count_uses_one_listing(self, table):
        """Test pid translation and counting share a single process listing"""
        fake = FakeTable(table)
        listings = []
        original = fake.list_processes
        fake.list_processes = lambda: listings.append(1) or original()

        assert ProcessCensus(fake, BASH).count_sibling_shells(4300) == 2
        assert len(listings) == 1

    def test_list_shells(self, table):
        """Test only shell rows are listed"""
        census = ProcessCensus(FakeTable(table), BASH)

        assert [r.pid for r in census.list_shells()] == [100, 400, 500]

    def test_terminate_shells_kills_every_shell(self, table):
        """Test the launching shell is terminated too"""
        fake = FakeTable(table)

        terminated = ProcessCensus(fake, BASH).terminate_shells()

        assert fake.killed == [100, 400, 500]
        assert terminated == [100, 400, 500]

    def test_terminate_failures_are_skipped(self, table):
        """Test a failed kill is left out of the result"""
        fake = FakeTable(table, failing=[400])

        terminated = ProcessCensus(fake, BASH).terminate_shells()

        assert fake.killed == [100, 400, 500]
        assert terminated == [100, 500]
