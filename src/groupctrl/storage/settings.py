"""Durable storage backend using QSettings.

Members and group-set history are stored as JSON strings so the layout
is identical for native and INI-file backends:
- roster/members: [{"id": ..., "name": ...}, ...]
- groups/history: [{"saved_at": ..., "data": [[member, ...], ...]}, ...]
"""

import json
import logging
import time
from pathlib import Path

from PySide6.QtCore import QSettings

from groupctrl.errors import PersistenceError
from groupctrl.models.group_set import GroupSet, GroupSetRecord
from groupctrl.models.member import Member
from groupctrl.models.roster import Roster
from groupctrl.storage.gateway import PersistenceGateway

logger = logging.getLogger(__name__)

_KEY_MEMBERS = "roster/members"
_KEY_HISTORY = "groups/history"

DEFAULT_HISTORY_LIMIT = 20


class SettingsGateway(PersistenceGateway):
    """QSettings-backed store for the roster and saved group sets.

    Every write is followed by sync() and a status check, so access or
    format errors surface as PersistenceError instead of being lost.

    Example:
        store = SettingsGateway(path="groups.ini")
        await store.init()
        member = await store.add_member("Ann")
    """

    def __init__(
        self,
        organization: str = "GroupCTRL",
        application: str = "GroupCTRL",
        *,
        path: str | Path | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        """Initialize the gateway.

        Args:
            organization: Organization name for native QSettings.
            application: Application name for native QSettings.
            path: INI file to use instead of the native location.
            history_limit: Number of saved group sets to keep.
        """
        if path is not None:
            self._settings = QSettings(str(path), QSettings.Format.IniFormat)
        else:
            self._settings = QSettings(organization, application)
        self._history_limit = max(1, history_limit)

    @property
    def settings(self) -> QSettings:
        """Return the underlying QSettings instance."""
        return self._settings

    @property
    def history_limit(self) -> int:
        """Return the number of saved group sets kept."""
        return self._history_limit

    # -- Low-level helpers -----------------------------------------------------

    def _read_json(self, key: str, operation: str) -> list[object]:
        raw = self._settings.value(key, "", str)
        if not raw:
            return []
        try:
            data = json.loads(str(raw))
        except json.JSONDecodeError as e:
            raise PersistenceError(operation, e) from e
        if not isinstance(data, list):
            raise PersistenceError(operation, f"{key} is not a list")
        return data

    def _write_json(self, key: str, data: list[object], operation: str) -> None:
        self._settings.setValue(key, json.dumps(data))
        self._sync(operation)

    def _sync(self, operation: str) -> None:
        self._settings.sync()
        status = self._settings.status()
        if status != QSettings.Status.NoError:
            raise PersistenceError(operation, status.name)

    def _load_roster(self, operation: str) -> Roster:
        members: list[Member] = []
        for item in self._read_json(_KEY_MEMBERS, operation):
            if not isinstance(item, dict):
                logger.warning("Skipping invalid member entry: %r", item)
                continue
            try:
                members.append(Member.from_dict(item))
            except (KeyError, ValueError) as e:
                logger.warning("Skipping invalid member entry: %s", e)
        return Roster(members)

    def _save_roster(self, roster: Roster, operation: str) -> None:
        self._write_json(_KEY_MEMBERS, [m.to_dict() for m in roster], operation)

    def _load_history(self, operation: str) -> list[dict[str, object]]:
        return [item for item in self._read_json(_KEY_HISTORY, operation) if isinstance(item, dict)]

    # -- Gateway API -----------------------------------------------------------

    async def init(self) -> None:
        if not self._settings.isWritable():
            raise PersistenceError("init", f"{self._settings.fileName()} is not writable")
        self._sync("init")
        logger.debug("Settings store ready at %s", self._settings.fileName())

    async def get_all_members(self) -> list[Member]:
        return self._load_roster("get_all_members").members

    async def add_member(self, name: str) -> Member:
        roster = self._load_roster("add_member")
        member = roster.add(name)
        self._save_roster(roster, "add_member")
        return member

    async def update_member(self, member_id: str, name: str) -> Member:
        roster = self._load_roster("update_member")
        member = roster.update(member_id, name)
        self._save_roster(roster, "update_member")
        return member

    async def delete_member(self, member_id: str) -> None:
        roster = self._load_roster("delete_member")
        roster.remove(member_id)
        self._save_roster(roster, "delete_member")

    async def clear_all_members(self) -> None:
        self._settings.remove(_KEY_MEMBERS)
        self._sync("clear_all_members")

    async def get_latest_group_set(self) -> GroupSetRecord | None:
        history = self._load_history("get_latest_group_set")
        if not history:
            return None
        latest = history[-1]
        try:
            data = GroupSet.from_data(latest.get("data"))
        except ValueError as e:
            raise PersistenceError("get_latest_group_set", e) from e
        saved_at = latest.get("saved_at", 0.0)
        return GroupSetRecord(
            data=data,
            saved_at=float(saved_at) if isinstance(saved_at, (int, float)) else 0.0,
        )

    async def save_group_set(self, group_set: GroupSet) -> None:
        history: list[object] = list(self._load_history("save_group_set"))
        history.append({"saved_at": time.time(), "data": group_set.to_data()})
        self._write_json(_KEY_HISTORY, history[-self._history_limit :], "save_group_set")

    async def clear_all_group_sets(self) -> None:
        self._settings.remove(_KEY_HISTORY)
        self._sync("clear_all_group_sets")
