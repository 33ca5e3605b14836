"""Roster model: the ordered collection of members to be grouped."""

import logging
import re
from collections.abc import Iterable, Iterator

from groupctrl.errors import NotFoundError
from groupctrl.models.member import Member, create_member

logger = logging.getLogger(__name__)

# Free-text input separates names by comma or newline
_NAME_SEPARATOR = re.compile(r"[,\n]")


def parse_names(text: str) -> list[str]:
    """Split free-text input into member names.

    Args:
        text: Names separated by commas and/or newlines.

    Returns:
        Trimmed names in input order, with empty entries dropped.
    """
    return [name.strip() for name in _NAME_SEPARATOR.split(text) if name.strip()]


class Roster:
    """Ordered collection of members, unique by id.

    Insertion order is preserved for display. Two members may share a name.

    Example:
        roster = Roster()
        roster.add_names("Ann, Bob\\nCara")
        roster.update(roster.members[0].id, "Anna")
    """

    def __init__(self, members: Iterable[Member] = ()) -> None:
        """Initialize the roster.

        Args:
            members: Initial members, in display order.
        """
        self._members: list[Member] = list(members)

    @property
    def members(self) -> list[Member]:
        """Return a copy of the members in display order."""
        return list(self._members)

    @property
    def is_empty(self) -> bool:
        """Return True if the roster has no members."""
        return not self._members

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Member]:
        return iter(list(self._members))

    def __contains__(self, member_id: object) -> bool:
        return any(m.id == member_id for m in self._members)

    def _index_of(self, member_id: str) -> int:
        for i, member in enumerate(self._members):
            if member.id == member_id:
                return i
        raise NotFoundError(member_id)

    def get(self, member_id: str) -> Member | None:
        """Get a member by ID.

        Args:
            member_id: The member ID to look up.

        Returns:
            The Member if found, else None.
        """
        for member in self._members:
            if member.id == member_id:
                return member
        return None

    def add(self, name: str) -> Member:
        """Append a new member.

        Args:
            name: Display name.

        Returns:
            The created Member.
        """
        member = create_member(name)
        self._members.append(member)
        return member

    def add_names(self, text: str) -> list[Member]:
        """Append one member per name parsed from free text.

        Args:
            text: Names separated by commas and/or newlines.

        Returns:
            The created members, in input order.
        """
        return [self.add(name) for name in parse_names(text)]

    def update(self, member_id: str, name: str) -> Member:
        """Rename a member in place, keeping its position and id.

        Args:
            member_id: ID of the member to rename.
            name: New display name.

        Returns:
            The updated Member.

        Raises:
            NotFoundError: If no member has this id.
        """
        index = self._index_of(member_id)
        updated = self._members[index].with_name(name)
        self._members[index] = updated
        return updated

    def remove(self, member_id: str) -> Member:
        """Remove a member.

        Args:
            member_id: ID of the member to remove.

        Returns:
            The removed Member.

        Raises:
            NotFoundError: If no member has this id.
        """
        return self._members.pop(self._index_of(member_id))

    def clear(self) -> None:
        """Remove all members."""
        logger.debug("Clearing roster of %d members", len(self._members))
        self._members.clear()
