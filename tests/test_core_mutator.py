"""Tests for moving members between groups."""

import pytest

from groupctrl.core.mutator import move_member
from groupctrl.errors import IndexOutOfRangeError
from groupctrl.models.group_set import GroupSet
from groupctrl.models.member import Member

A = Member(id="a", name="A")
B = Member(id="b", name="B")
C = Member(id="c", name="C")
D = Member(id="d", name="D")


@pytest.fixture
def group_set() -> GroupSet:
    """Return groups [[A, B], [C]]."""
    return GroupSet(groups=[[A, B], [C]])


class TestMoveMember:
    """Tests for move_member()."""

    def test_move_appends_to_destination(self, group_set: GroupSet) -> None:
        """Test moving B from group 0 to group 1 gives [[A], [C, B]]."""
        result = move_member(group_set, 0, 1, 1)
        assert result.groups == [[A], [C, B]]

    def test_edits_in_place(self, group_set: GroupSet) -> None:
        """Test the same GroupSet is returned and modified."""
        result = move_member(group_set, 0, 0, 1)
        assert result is group_set
        assert group_set.groups == [[B], [C, A]]

    def test_preserves_total(self) -> None:
        """Test the member count is unchanged by a move."""
        group_set = GroupSet(groups=[[A, B], [C, D]])
        move_member(group_set, 1, 0, 0)
        assert group_set.member_count == 4
        assert group_set.groups == [[A, B, C], [D]]

    def test_same_group_is_noop(self, group_set: GroupSet) -> None:
        """Test from == to leaves the group set unchanged."""
        before = group_set.copy()
        result = move_member(group_set, 0, 1, 0)
        assert result is group_set
        assert group_set == before

    def test_move_may_unbalance(self) -> None:
        """Test moves are allowed to leave a group empty."""
        group_set = GroupSet(groups=[[A], [B]])
        move_member(group_set, 0, 0, 1)
        assert group_set.sizes == [0, 2]

    @pytest.mark.parametrize(
        ("from_group", "member_index", "to_group", "kind"),
        [
            (2, 0, 1, "Source group"),
            (-1, 0, 1, "Source group"),
            (0, 0, 5, "Destination group"),
            (0, 0, -1, "Destination group"),
            (0, 2, 1, "Member"),
            (1, -1, 0, "Member"),
        ],
    )
    def test_out_of_range(
        self,
        group_set: GroupSet,
        from_group: int,
        member_index: int,
        to_group: int,
        kind: str,
    ) -> None:
        """Test bad indices raise and leave the group set unchanged."""
        before = group_set.copy()
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            move_member(group_set, from_group, member_index, to_group)
        assert exc_info.value.kind == kind
        assert group_set == before

    def test_empty_group_set(self) -> None:
        """Test any move on an empty group set is out of range."""
        with pytest.raises(IndexOutOfRangeError):
            move_member(GroupSet(), 0, 0, 1)
