"""
Core module - Base abstractions and interfaces

Provides foundational components used across the updater:
- Interfaces and protocols
- Base exception hierarchy
- Configuration management
"""

from git_win_updater.core.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
