"""Grouping session: the single owner of roster and group-set state.

The session turns user intents (add members, allocate, move) into calls on
the allocator, mutator and storage gateway, and reports every change through
Qt signals. Presentation code connects to the signals and never touches the
state directly.

Group-set saves are fire-and-forget: they are scheduled on the running event
loop in the order the triggering operations completed, and their outcome is
reported through group_set_saved / persistence_failed instead of being
awaited by the caller.
"""

import asyncio
import logging
import random

from PySide6.QtCore import QObject, Signal

from groupctrl.core.allocator import AllocationMode, allocate
from groupctrl.core.mutator import move_member
from groupctrl.errors import (
    IndexOutOfRangeError,
    InvalidTargetError,
    NotFoundError,
    PersistenceError,
)
from groupctrl.models.group_set import GroupSet, format_group_set
from groupctrl.models.member import Member
from groupctrl.models.roster import Roster, parse_names
from groupctrl.storage.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


class GroupingSession(QObject):
    """Roster, group set, mode and edit state for one user session.

    Example:
        session = GroupingSession(MemoryGateway(), rng=random.Random(7))
        session.groups_changed.connect(render_groups)
        session.persistence_failed.connect(lambda e: print(f"Not saved: {e}"))

        await session.load()
        await session.submit_names("Ann, Bob\\nCara")
        session.allocate_groups()
        session.move_member(0, 0, 1)
        await session.wait_for_saves()
    """

    # Data change signals - emit the new value
    # Note: Using object for complex types (PySide6 limitation)
    roster_changed = Signal(object)  # list[Member]
    groups_changed = Signal(object)  # GroupSet
    mode_changed = Signal(object)  # AllocationMode
    target_value_changed = Signal(object)  # int, unbounded
    editing_changed = Signal(object)  # member id, or None when editing ends

    # User-facing messages (empty roster, invalid input, failed writes)
    notice = Signal(str)

    # Persistence result channel
    group_set_saved = Signal(object)  # GroupSet snapshot that was written
    persistence_failed = Signal(object)  # PersistenceError

    def __init__(
        self,
        gateway: PersistenceGateway,
        *,
        mode: AllocationMode = AllocationMode.BY_GROUP_COUNT,
        target_value: int = 2,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the session with empty state.

        Args:
            gateway: Storage backend for members and group sets.
            mode: Initial allocation mode.
            target_value: Initial group count or group size.
            rng: Random source for shuffling. A fresh random.Random()
                when omitted.
        """
        super().__init__()
        self._gateway = gateway
        self._mode = mode
        self._target_value = target_value
        self._rng = rng or random.Random()
        self._roster = Roster()
        self._group_set = GroupSet()
        self._editing_id: str | None = None
        self._pending_saves: set[asyncio.Task[None]] = set()

    # -- State accessors -------------------------------------------------------

    @property
    def gateway(self) -> PersistenceGateway:
        """Return the storage backend."""
        return self._gateway

    @property
    def members(self) -> list[Member]:
        """Return the roster members in display order."""
        return self._roster.members

    @property
    def member_count(self) -> int:
        """Return the number of roster members."""
        return len(self._roster)

    @property
    def group_set(self) -> GroupSet:
        """Return the current group set."""
        return self._group_set

    @property
    def mode(self) -> AllocationMode:
        """Return the allocation mode."""
        return self._mode

    @property
    def target_value(self) -> int:
        """Return the target group count or size."""
        return self._target_value

    @property
    def editing_id(self) -> str | None:
        """Return the ID of the member being edited, or None."""
        return self._editing_id

    def has_member(self, member_id: str) -> bool:
        """Return True if the roster holds a member with this ID."""
        return member_id in self._roster

    @property
    def is_editing(self) -> bool:
        """Return True if a member is being edited."""
        return self._editing_id is not None

    @property
    def pending_save_count(self) -> int:
        """Return the number of group-set saves still in flight."""
        return len(self._pending_saves)

    # -- Loading ---------------------------------------------------------------

    async def load(self) -> None:
        """Open storage and load the roster and the latest group set.

        Failures are logged and reported; the session stays usable with
        whatever state was loaded.
        """
        try:
            await self._gateway.init()
        except PersistenceError as e:
            self._report_failure("initialize storage", e)
            self.notice.emit("Failed to initialize storage")
            return

        await self._reload_members()

        try:
            record = await self._gateway.get_latest_group_set()
        except PersistenceError as e:
            self._report_failure("load latest group set", e)
            return
        if record is not None:
            self._group_set = record.data
            self.groups_changed.emit(self._group_set)

    async def _reload_members(self) -> None:
        try:
            members = await self._gateway.get_all_members()
        except PersistenceError as e:
            self._report_failure("load members", e)
            return
        self._roster = Roster(members)
        self.roster_changed.emit(self._roster.members)

    # -- Roster intents --------------------------------------------------------

    async def submit_names(self, text: str) -> bool:
        """Add members from free text, or rename the member being edited.

        In edit mode only the first parsed name is used.

        Args:
            text: Names separated by commas and/or newlines.

        Returns:
            True if the input was accepted and stored.
        """
        if not text.strip():
            self.notice.emit("Please enter member names")
            return False
        names = parse_names(text)
        if not names:
            self.notice.emit("Please enter valid member names")
            return False

        try:
            if self._editing_id is not None:
                await self._gateway.update_member(self._editing_id, names[0])
                self._set_editing(None)
            else:
                for name in names:
                    await self._gateway.add_member(name)
        except NotFoundError as e:
            logger.warning("Ignoring rename of missing member: %s", e)
            self._set_editing(None)
        except PersistenceError as e:
            self._report_failure("save members", e)
            self.notice.emit("Failed to save data")
            return False

        await self._reload_members()
        return True

    def begin_edit(self, member_id: str) -> Member | None:
        """Enter edit mode for a member.

        Args:
            member_id: ID of the member to edit.

        Returns:
            The member to prefill the input with, or None if unknown.
        """
        member = self._roster.get(member_id)
        if member is None:
            logger.debug("Cannot edit unknown member %s", member_id)
            return None
        self._set_editing(member_id)
        return member

    def cancel_edit(self) -> None:
        """Leave edit mode without changes."""
        self._set_editing(None)

    def _set_editing(self, member_id: str | None) -> None:
        if member_id != self._editing_id:
            self._editing_id = member_id
            self.editing_changed.emit(member_id)

    async def delete_member(self, member_id: str) -> bool:
        """Delete a member from the roster.

        Confirmation is the caller's job. Deleting the member being edited
        also leaves edit mode.

        Args:
            member_id: ID of the member to delete.

        Returns:
            False if storage failed, else True.
        """
        try:
            await self._gateway.delete_member(member_id)
        except NotFoundError as e:
            logger.warning("Ignoring delete of missing member: %s", e)
        except PersistenceError as e:
            self._report_failure("delete member", e)
            self.notice.emit("Failed to delete data")
            return False

        if self._editing_id == member_id:
            self._set_editing(None)
        await self._reload_members()
        return True

    async def reset(self) -> bool:
        """Delete all members and group sets, in storage and in memory.

        In-flight saves are drained first so none of them can write a
        stale group set after the reset.

        Returns:
            False if storage failed, else True.
        """
        await self.wait_for_saves()
        try:
            await self._gateway.clear_all_members()
            await self._gateway.clear_all_group_sets()
        except PersistenceError as e:
            self._report_failure("reset data", e)
            self.notice.emit("Failed to reset data")
            return False

        self._roster = Roster()
        self._group_set = GroupSet()
        self._set_editing(None)
        self.roster_changed.emit([])
        self.groups_changed.emit(self._group_set)
        return True

    # -- Allocation settings ---------------------------------------------------

    def set_mode(self, mode: AllocationMode) -> None:
        """Set how the target value is interpreted.

        Args:
            mode: New allocation mode.
        """
        if mode is not self._mode:
            self._mode = mode
            self.mode_changed.emit(mode)

    def toggle_mode(self) -> AllocationMode:
        """Switch between group-count and group-size mode.

        Returns:
            The new mode.
        """
        if self._mode is AllocationMode.BY_GROUP_COUNT:
            self.set_mode(AllocationMode.BY_GROUP_SIZE)
        else:
            self.set_mode(AllocationMode.BY_GROUP_COUNT)
        return self._mode

    def set_target_value(self, value: int) -> None:
        """Set the target group count or size. Validated at allocation time.

        Args:
            value: New target value.
        """
        if value != self._target_value:
            self._target_value = value
            self.target_value_changed.emit(value)

    # -- Group intents ---------------------------------------------------------

    def allocate_groups(self) -> GroupSet | None:
        """Replace the group set with a fresh allocation of the roster.

        The save is scheduled on the running event loop and not awaited.
        Without a running loop the allocation still stands and the save
        failure is reported on persistence_failed.

        Returns:
            The new GroupSet, or None if the roster is empty or the target
            value is invalid (a notice is emitted instead).
        """
        if self._roster.is_empty:
            self.notice.emit("No members yet. Please add members first.")
            return None
        try:
            group_set = allocate(self._roster.members, self._target_value, self._mode, self._rng)
        except InvalidTargetError as e:
            logger.debug("Allocation rejected: %s", e)
            self.notice.emit("Value must be greater than 0")
            return None

        self._group_set = group_set
        logger.info(
            "Allocated %d members into %d groups %s",
            group_set.member_count,
            group_set.group_count,
            group_set.sizes,
        )
        self.groups_changed.emit(group_set)
        self._schedule_save()
        return group_set

    def move_member(self, from_group: int, member_index: int, to_group: int) -> bool:
        """Move one member to the end of another group.

        Malformed moves are logged and ignored.

        Args:
            from_group: Index of the source group.
            member_index: Index of the member within the source group.
            to_group: Index of the destination group.

        Returns:
            True if a member was moved.
        """
        if from_group == to_group:
            return False
        try:
            move_member(self._group_set, from_group, member_index, to_group)
        except IndexOutOfRangeError as e:
            logger.warning("Ignoring malformed move: %s", e)
            return False

        self.groups_changed.emit(self._group_set)
        self._schedule_save()
        return True

    def export_text(self) -> str:
        """Return the current group set as a plain-text listing."""
        return format_group_set(self._group_set, len(self._roster))

    # -- Persistence -----------------------------------------------------------

    def _schedule_save(self) -> None:
        """Start saving a snapshot of the group set without awaiting it."""
        snapshot = self._group_set.copy()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            self._report_failure("schedule group set save", PersistenceError("save_group_set", e))
            return
        task = loop.create_task(self._save_group_set(snapshot))
        self._pending_saves.add(task)
        task.add_done_callback(self._pending_saves.discard)

    async def _save_group_set(self, snapshot: GroupSet) -> None:
        try:
            await self._gateway.save_group_set(snapshot)
        except PersistenceError as e:
            self._report_failure("save group set", e)
            return
        except OSError as e:
            self._report_failure("save group set", PersistenceError("save_group_set", e))
            return
        logger.debug("Saved group set with %d groups", snapshot.group_count)
        self.group_set_saved.emit(snapshot)

    async def wait_for_saves(self) -> None:
        """Wait until every scheduled group-set save has finished."""
        while self._pending_saves:
            await asyncio.gather(*self._pending_saves)

    def _report_failure(self, action: str, error: PersistenceError) -> None:
        logger.error("Failed to %s: %s", action, error)
        self.persistence_failed.emit(error)
