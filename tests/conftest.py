"""Test fixtures for groupctrl tests."""

import os
import random

import pytest

from groupctrl.core.session import GroupingSession
from groupctrl.errors import PersistenceError
from groupctrl.models.group_set import GroupSet
from groupctrl.models.member import Member
from groupctrl.storage.memory import MemoryGateway

# Run Qt without a display (CI)
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FailingGateway(MemoryGateway):
    """MemoryGateway that raises PersistenceError for chosen operations.

    Example:
        gateway = FailingGateway(fail={"save_group_set"})
    """

    def __init__(self, members: list[Member] | None = None, fail: set[str] | None = None) -> None:
        super().__init__(members)
        self.fail = set(fail or ())

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.fail:
            raise PersistenceError(operation, "disk full")

    async def init(self) -> None:
        self._maybe_fail("init")
        await super().init()

    async def get_all_members(self) -> list[Member]:
        self._maybe_fail("get_all_members")
        return await super().get_all_members()

    async def add_member(self, name: str) -> Member:
        self._maybe_fail("add_member")
        return await super().add_member(name)

    async def delete_member(self, member_id: str) -> None:
        self._maybe_fail("delete_member")
        await super().delete_member(member_id)

    async def clear_all_members(self) -> None:
        self._maybe_fail("clear_all_members")
        await super().clear_all_members()

    async def save_group_set(self, group_set: GroupSet) -> None:
        self._maybe_fail("save_group_set")
        await super().save_group_set(group_set)


def make_members(*names: str) -> list[Member]:
    """Return members with predictable IDs m1, m2, ..."""
    return [Member(id=f"m{i}", name=name) for i, name in enumerate(names, start=1)]


@pytest.fixture
def five_members() -> list[Member]:
    """Return members A..E."""
    return make_members("A", "B", "C", "D", "E")


@pytest.fixture
def seven_members() -> list[Member]:
    """Return members A..G."""
    return make_members("A", "B", "C", "D", "E", "F", "G")


@pytest.fixture
def gateway(five_members: list[Member]) -> MemoryGateway:
    """Return an in-memory store pre-filled with members A..E."""
    return MemoryGateway(five_members)


@pytest.fixture
def session(gateway: MemoryGateway) -> GroupingSession:
    """Return a session over the pre-filled store with a seeded random source."""
    return GroupingSession(gateway, rng=random.Random(1234))
