"""Data models for members, the roster, and group sets."""

from groupctrl.models.group_set import Group, GroupSet, GroupSetRecord, format_group_set
from groupctrl.models.member import Member, create_member
from groupctrl.models.roster import Roster, parse_names

__all__ = [
    "Group",
    "GroupSet",
    "GroupSetRecord",
    "Member",
    "Roster",
    "create_member",
    "format_group_set",
    "parse_names",
]
