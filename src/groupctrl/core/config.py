"""Configuration manager using QSettings for persistent storage."""

import logging
from pathlib import Path

from PySide6.QtCore import QSettings

from groupctrl.core.allocator import AllocationMode

logger = logging.getLogger(__name__)

# Settings keys, all under one group so a shared INI file keeps other data
_GROUP = "preferences"
_KEY_MODE = f"{_GROUP}/allocation/mode"
_KEY_TARGET_VALUE = f"{_GROUP}/allocation/target_value"
_KEY_HISTORY_LIMIT = f"{_GROUP}/storage/history_limit"

_DEFAULT_TARGET_VALUE = 2
_MAX_TARGET_VALUE = 999
_DEFAULT_HISTORY_LIMIT = 20
_MAX_HISTORY_LIMIT = 100


class ConfigManager:
    """Wrapper around QSettings for type-safe preference access.

    QSettings stores config in platform-specific locations:
    - Windows: HKEY_CURRENT_USER\\Software\\GroupCTRL\\GroupCTRL
    - macOS: ~/Library/Preferences/com.GroupCTRL.GroupCTRL.plist
    - Linux: ~/.config/GroupCTRL/GroupCTRL.conf

    Example:
        config = ConfigManager()
        mode = config.get_mode()
        config.set_target_value(4)
    """

    def __init__(
        self,
        organization: str = "GroupCTRL",
        application: str = "GroupCTRL",
        *,
        path: str | Path | None = None,
    ) -> None:
        """Initialize the config manager.

        Args:
            organization: Organization name for QSettings.
            application: Application name for QSettings.
            path: INI file to use instead of the native location.
        """
        if path is not None:
            self._settings = QSettings(str(path), QSettings.Format.IniFormat)
        else:
            self._settings = QSettings(organization, application)

    @property
    def settings(self) -> QSettings:
        """Return the underlying QSettings instance."""
        return self._settings

    # -- Allocation settings ---------------------------------------------------

    def get_mode(self) -> AllocationMode:
        """Return the allocation mode.

        Returns:
            Saved mode, or BY_GROUP_COUNT if unset or invalid.
        """
        value = self._settings.value(_KEY_MODE, AllocationMode.BY_GROUP_COUNT.value, str)
        try:
            return AllocationMode(str(value))
        except ValueError:
            logger.warning("Ignoring invalid allocation mode %r", value)
            return AllocationMode.BY_GROUP_COUNT

    def set_mode(self, mode: AllocationMode) -> None:
        """Set the allocation mode.

        Args:
            mode: Mode to remember.
        """
        self._settings.setValue(_KEY_MODE, mode.value)

    def get_target_value(self) -> int:
        """Return the target group count or size.

        Returns:
            Target value (default 2, range 1-999).
        """
        value = self._settings.value(_KEY_TARGET_VALUE, _DEFAULT_TARGET_VALUE, int)
        return max(1, min(_MAX_TARGET_VALUE, int(value)))  # type: ignore[arg-type]

    def set_target_value(self, value: int) -> None:
        """Set the target group count or size.

        Args:
            value: Target value (1-999).
        """
        self._settings.setValue(_KEY_TARGET_VALUE, max(1, min(_MAX_TARGET_VALUE, value)))

    # -- Storage settings ------------------------------------------------------

    def get_history_limit(self) -> int:
        """Return how many saved group sets to keep.

        Returns:
            Limit (default 20, range 1-100).
        """
        value = self._settings.value(_KEY_HISTORY_LIMIT, _DEFAULT_HISTORY_LIMIT, int)
        return max(1, min(_MAX_HISTORY_LIMIT, int(value)))  # type: ignore[arg-type]

    def set_history_limit(self, limit: int) -> None:
        """Set how many saved group sets to keep.

        Args:
            limit: Limit (1-100).
        """
        self._settings.setValue(_KEY_HISTORY_LIMIT, max(1, min(_MAX_HISTORY_LIMIT, limit)))

    # -- General settings ------------------------------------------------------

    def clear(self) -> None:
        """Clear all preferences (useful for testing or reset).

        Other keys in the same settings file, such as a SettingsGateway
        roster, are left alone.
        """
        self._settings.remove(_GROUP)

    def sync(self) -> None:
        """Force settings to be written to disk."""
        self._settings.sync()
