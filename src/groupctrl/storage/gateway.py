"""Persistence gateway contract for the roster and group-set snapshots.

All operations are coroutines. Implementations raise NotFoundError for
unknown member ids and PersistenceError for storage failures.
"""

from abc import ABC, abstractmethod

from groupctrl.models.group_set import GroupSet, GroupSetRecord
from groupctrl.models.member import Member


class PersistenceGateway(ABC):
    """Abstract base class for durable storage backends."""

    @abstractmethod
    async def init(self) -> None:
        """Open the store. Must be awaited before any other call."""

    @abstractmethod
    async def get_all_members(self) -> list[Member]:
        """Return all stored members in insertion order."""

    @abstractmethod
    async def add_member(self, name: str) -> Member:
        """Store a new member and return it with its assigned id."""

    @abstractmethod
    async def update_member(self, member_id: str, name: str) -> Member:
        """Rename a stored member and return the updated value."""

    @abstractmethod
    async def delete_member(self, member_id: str) -> None:
        """Delete a stored member."""

    @abstractmethod
    async def clear_all_members(self) -> None:
        """Delete every stored member."""

    @abstractmethod
    async def get_latest_group_set(self) -> GroupSetRecord | None:
        """Return the most recently saved group set, or None."""

    @abstractmethod
    async def save_group_set(self, group_set: GroupSet) -> None:
        """Store a group-set snapshot as the latest one."""

    @abstractmethod
    async def clear_all_group_sets(self) -> None:
        """Delete every stored group set."""
