"""In-process storage backend, used by tests and as a scratch store."""

import logging
import time

from groupctrl.models.group_set import GroupSet, GroupSetRecord
from groupctrl.models.member import Member
from groupctrl.models.roster import Roster
from groupctrl.storage.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


class MemoryGateway(PersistenceGateway):
    """Keeps members and group sets in memory for the life of the object.

    Saved group sets are copied, so later edits by the caller do not
    change what was stored.
    """

    def __init__(self, members: list[Member] | None = None) -> None:
        self._roster = Roster(members or [])
        self._records: list[GroupSetRecord] = []
        self.initialized = False

    async def init(self) -> None:
        self.initialized = True

    async def get_all_members(self) -> list[Member]:
        return self._roster.members

    async def add_member(self, name: str) -> Member:
        return self._roster.add(name)

    async def update_member(self, member_id: str, name: str) -> Member:
        return self._roster.update(member_id, name)

    async def delete_member(self, member_id: str) -> None:
        self._roster.remove(member_id)

    async def clear_all_members(self) -> None:
        self._roster.clear()

    async def get_latest_group_set(self) -> GroupSetRecord | None:
        if not self._records:
            return None
        latest = self._records[-1]
        return GroupSetRecord(data=latest.data.copy(), saved_at=latest.saved_at)

    async def save_group_set(self, group_set: GroupSet) -> None:
        self._records.append(GroupSetRecord(data=group_set.copy(), saved_at=time.time()))
        logger.debug("Stored group set #%d (%d groups)", len(self._records), group_set.group_count)

    async def clear_all_group_sets(self) -> None:
        self._records.clear()

    @property
    def saved_count(self) -> int:
        """Return how many group sets have been saved."""
        return len(self._records)
