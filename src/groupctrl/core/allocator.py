"""Balanced random allocation of roster members into groups.

Members are shuffled with an injectable random source, then dealt
round-robin so that group sizes never differ by more than one.
"""

import logging
import math
import random
from collections.abc import Sequence
from enum import Enum

from groupctrl.errors import InvalidTargetError
from groupctrl.models.group_set import Group, GroupSet
from groupctrl.models.member import Member

logger = logging.getLogger(__name__)


class AllocationMode(Enum):
    """How the target value is interpreted."""

    BY_GROUP_COUNT = "count"  # target is the number of groups
    BY_GROUP_SIZE = "size"  # target is the members per group

    @property
    def label(self) -> str:
        """Return a short human-readable label."""
        return "Number of groups" if self is AllocationMode.BY_GROUP_COUNT else "Members per group"


def shuffle_members(members: Sequence[Member], rng: random.Random) -> list[Member]:
    """Return a uniformly random permutation of members.

    Args:
        members: Members to shuffle. Not modified.
        rng: Random source.

    Returns:
        New list with the same members in random order.
    """
    shuffled = list(members)
    rng.shuffle(shuffled)
    return shuffled


def resolve_group_count(
    roster_size: int, target_value: int, mode: AllocationMode
) -> tuple[int, int]:
    """Resolve the number of groups and nominal group size.

    The target is clamped to the roster size so every group gets at
    least one member.

    Args:
        roster_size: Number of members (at least 1).
        target_value: Requested group count or group size (at least 1).
        mode: How to interpret target_value.

    Returns:
        Tuple of (group_count, size_per_group).
    """
    if mode is AllocationMode.BY_GROUP_COUNT:
        group_count = min(target_value, roster_size)
        size_per_group = math.ceil(roster_size / group_count)
    else:
        size_per_group = min(target_value, roster_size)
        group_count = math.ceil(roster_size / size_per_group)
    return group_count, size_per_group


def allocate(
    members: Sequence[Member],
    target_value: int,
    mode: AllocationMode,
    rng: random.Random | None = None,
) -> GroupSet:
    """Partition members into balanced random groups.

    Args:
        members: Roster members to distribute.
        target_value: Group count or group size, depending on mode.
        mode: How to interpret target_value.
        rng: Random source. A fresh random.Random() when omitted.

    Returns:
        GroupSet containing every member exactly once. Empty when
        members is empty.

    Raises:
        InvalidTargetError: If target_value is below 1.
    """
    if target_value < 1:
        raise InvalidTargetError(target_value)
    if not members:
        return GroupSet()

    shuffled = shuffle_members(members, rng or random.Random())
    group_count, size_per_group = resolve_group_count(len(shuffled), target_value, mode)
    logger.debug(
        "Allocating %d members into %d groups (~%d each, mode=%s)",
        len(shuffled),
        group_count,
        size_per_group,
        mode.value,
    )

    groups: list[Group] = [[] for _ in range(group_count)]
    for index, member in enumerate(shuffled):
        groups[index % group_count].append(member)
    return GroupSet(groups=groups)
