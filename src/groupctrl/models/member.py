"""Member model representing a single named roster entry."""

import uuid
from dataclasses import dataclass, replace
from typing import Self


@dataclass(frozen=True, slots=True)
class Member:
    """A named entry in the roster.

    Attributes:
        id: Opaque unique identifier, assigned on creation.
        name: Display name (trimmed, never empty). Duplicates are allowed.
    """

    id: str
    name: str

    def __post_init__(self) -> None:
        """Trim the name and reject empty ones."""
        name = self.name.strip()
        if not name:
            raise ValueError(f"Member {self.id} name must not be empty")
        object.__setattr__(self, "name", name)

    def with_name(self, name: str) -> Self:
        """Return a copy with the name changed and the same id.

        Args:
            name: New display name.

        Returns:
            New Member with updated name.
        """
        return replace(self, name=name)

    def to_dict(self) -> dict[str, str]:
        """Return the serialized form used by storage backends."""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Self:
        """Build a Member from its serialized form.

        Args:
            data: Mapping with "id" and "name" keys.

        Returns:
            The deserialized Member.

        Raises:
            KeyError: If a key is missing.
            ValueError: If the name is empty.
        """
        return cls(id=str(data["id"]), name=str(data["name"]))


def create_member(name: str) -> Member:
    """Create a new Member with a generated ID.

    Args:
        name: Display name.

    Returns:
        New Member with a random unique ID.
    """
    return Member(id=uuid.uuid4().hex[:12], name=name)
