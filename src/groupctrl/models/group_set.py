"""GroupSet model: one partition of the roster into groups."""

from dataclasses import dataclass, field
from typing import Self

from groupctrl.models.member import Member

# A group is an ordered list of members
Group = list[Member]


@dataclass(slots=True)
class GroupSet:
    """The complete partition produced by one allocation.

    A GroupSet is an independent snapshot. It is not recomputed when the
    roster changes later, and moves edit it in place.

    Attributes:
        groups: Groups in display order, each an ordered list of members.
    """

    groups: list[Group] = field(default_factory=list)

    @property
    def group_count(self) -> int:
        """Return number of groups."""
        return len(self.groups)

    @property
    def member_count(self) -> int:
        """Return total number of members across all groups."""
        return sum(len(g) for g in self.groups)

    @property
    def sizes(self) -> list[int]:
        """Return the size of each group, in order."""
        return [len(g) for g in self.groups]

    @property
    def is_empty(self) -> bool:
        """Return True if there are no groups."""
        return not self.groups

    def members(self) -> list[Member]:
        """Return all members, group by group."""
        return [m for group in self.groups for m in group]

    def copy(self) -> Self:
        """Return a copy whose group lists can be edited independently."""
        return type(self)(groups=[list(g) for g in self.groups])

    def to_data(self) -> list[list[dict[str, str]]]:
        """Return the serialized form: a list of groups of member dicts."""
        return [[m.to_dict() for m in group] for group in self.groups]

    @classmethod
    def from_data(cls, data: object) -> Self:
        """Build a GroupSet from its serialized form.

        Args:
            data: List of groups, each a list of {"id", "name"} dicts.

        Returns:
            The deserialized GroupSet.

        Raises:
            ValueError: If the data does not have the expected shape.
        """
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of groups, got {type(data).__name__}")
        groups: list[Group] = []
        for raw_group in data:
            if not isinstance(raw_group, list):
                raise ValueError(f"Expected a list of members, got {type(raw_group).__name__}")
            try:
                groups.append([Member.from_dict(item) for item in raw_group])
            except (KeyError, TypeError, AttributeError) as e:
                raise ValueError(f"Invalid member entry: {e}") from e
        return cls(groups=groups)


@dataclass(frozen=True, slots=True)
class GroupSetRecord:
    """A persisted GroupSet with its save time.

    Attributes:
        data: The saved partition.
        saved_at: Unix timestamp (seconds) of the save.
    """

    data: GroupSet
    saved_at: float = 0.0


def format_group_set(group_set: GroupSet, total_members: int | None = None) -> str:
    """Render a GroupSet as a plain-text listing for export.

    Args:
        group_set: The partition to render.
        total_members: Roster size to report. Defaults to the number of
            members in the set.

    Returns:
        Multi-line text with a header and one numbered section per group.
    """
    total = group_set.member_count if total_members is None else total_members
    lines = [
        "Groups",
        f"Total members: {total}",
        f"Number of groups: {group_set.group_count}",
    ]
    for number, group in enumerate(group_set.groups, start=1):
        lines.append("")
        plural = "" if len(group) == 1 else "s"
        lines.append(f"Group {number} ({len(group)} member{plural})")
        lines.extend(f"  {i}. {member.name}" for i, member in enumerate(group, start=1))
    return "\n".join(lines)
