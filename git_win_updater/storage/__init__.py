"""
Storage package

Persisted key-value configuration (proxy URL, most recently seen version).
"""

from git_win_updater.storage.git_config import GitConfigStore, MemoryConfigStore

__all__ = ["GitConfigStore", "MemoryConfigStore"]
