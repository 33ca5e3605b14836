"""Core business logic layer.

This module contains the grouping logic and the session object that
bridges storage with the presentation layer.

Classes:
    AllocationMode: How a target value is interpreted.
    GroupingSession: Session state with Qt signals.
    ConfigManager: QSettings wrapper for preferences.

Functions:
    allocate: Balanced random partition of members into groups.
    move_member: Move one member between groups.
"""

from groupctrl.core.allocator import AllocationMode, allocate, resolve_group_count
from groupctrl.core.config import ConfigManager
from groupctrl.core.mutator import move_member
from groupctrl.core.session import GroupingSession

__all__ = [
    "AllocationMode",
    "ConfigManager",
    "GroupingSession",
    "allocate",
    "move_member",
    "resolve_group_count",
]
