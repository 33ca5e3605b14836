"""Tests for GroupSet model and text export."""

import pytest

from groupctrl.models.group_set import GroupSet, GroupSetRecord, format_group_set
from groupctrl.models.member import Member

A = Member(id="a", name="Ann")
B = Member(id="b", name="Bob")
C = Member(id="c", name="Cara")


class TestGroupSet:
    """Tests for GroupSet dataclass."""

    def test_empty_by_default(self) -> None:
        """Test a new GroupSet has no groups."""
        group_set = GroupSet()
        assert group_set.is_empty
        assert group_set.group_count == 0
        assert group_set.member_count == 0

    def test_counts_and_sizes(self) -> None:
        """Test counting properties."""
        group_set = GroupSet(groups=[[A, B], [C]])
        assert group_set.group_count == 2
        assert group_set.member_count == 3
        assert group_set.sizes == [2, 1]
        assert group_set.members() == [A, B, C]

    def test_copy_is_independent(self) -> None:
        """Test editing a copy leaves the original untouched."""
        group_set = GroupSet(groups=[[A, B], [C]])
        copy = group_set.copy()
        copy.groups[0].pop()
        copy.groups[1].append(B)
        assert group_set.groups == [[A, B], [C]]
        assert copy == GroupSet(groups=[[A], [C, B]])

    def test_serialized_form(self) -> None:
        """Test to_data produces nested lists of member dicts."""
        group_set = GroupSet(groups=[[A], [C]])
        assert group_set.to_data() == [
            [{"id": "a", "name": "Ann"}],
            [{"id": "c", "name": "Cara"}],
        ]
        assert GroupSet.from_data(group_set.to_data()) == group_set

    @pytest.mark.parametrize(
        "data",
        [
            {"groups": []},
            [{"id": "a", "name": "Ann"}],
            [[{"name": "no id"}]],
            [["just a string"]],
        ],
    )
    def test_from_data_rejects_bad_shapes(self, data: object) -> None:
        """Test malformed data raises ValueError."""
        with pytest.raises(ValueError):
            GroupSet.from_data(data)

    def test_record_defaults(self) -> None:
        """Test GroupSetRecord stores data and timestamp."""
        record = GroupSetRecord(data=GroupSet(groups=[[A]]))
        assert record.data.member_count == 1
        assert record.saved_at == 0.0


class TestFormatGroupSet:
    """Tests for plain-text export."""

    def test_listing(self) -> None:
        """Test header and numbered groups."""
        text = format_group_set(GroupSet(groups=[[A, B], [C]]), total_members=3)
        assert text.splitlines() == [
            "Groups",
            "Total members: 3",
            "Number of groups: 2",
            "",
            "Group 1 (2 members)",
            "  1. Ann",
            "  2. Bob",
            "",
            "Group 2 (1 member)",
            "  1. Cara",
        ]

    def test_total_defaults_to_member_count(self) -> None:
        """Test the total falls back to the members in the set."""
        text = format_group_set(GroupSet(groups=[[A, B]]))
        assert "Total members: 2" in text

    def test_empty(self) -> None:
        """Test an empty set renders only the header."""
        assert format_group_set(GroupSet()).splitlines()[-1] == "Number of groups: 0"
