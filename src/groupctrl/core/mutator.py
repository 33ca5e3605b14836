"""Manual rebalancing: moving one member between groups."""

import logging

from groupctrl.errors import IndexOutOfRangeError
from groupctrl.models.group_set import GroupSet

logger = logging.getLogger(__name__)


def _check_index(kind: str, index: int, bound: int) -> None:
    if not 0 <= index < bound:
        raise IndexOutOfRangeError(kind, index, bound)


def move_member(group_set: GroupSet, from_group: int, member_index: int, to_group: int) -> GroupSet:
    """Move one member to the end of another group.

    The GroupSet is edited in place. All indices are validated before
    anything changes, so a failed call leaves it untouched. Group sizes
    are not rebalanced afterwards.

    Args:
        group_set: The partition to edit.
        from_group: Index of the source group.
        member_index: Index of the member within the source group.
        to_group: Index of the destination group.

    Returns:
        The same GroupSet.

    Raises:
        IndexOutOfRangeError: If any index is outside current bounds.
    """
    if from_group == to_group:
        return group_set

    group_count = group_set.group_count
    _check_index("Source group", from_group, group_count)
    _check_index("Destination group", to_group, group_count)
    source = group_set.groups[from_group]
    _check_index("Member", member_index, len(source))

    member = source.pop(member_index)
    group_set.groups[to_group].append(member)
    logger.debug("Moved %s from group %d to group %d", member.name, from_group, to_group)
    return group_set
