"""Tests for ConfigManager using QSettings."""

from pathlib import Path

import pytest

from groupctrl.core.allocator import AllocationMode
from groupctrl.core.config import ConfigManager


@pytest.fixture
def config(tmp_path: Path) -> ConfigManager:
    """Return a fresh ConfigManager for each test."""
    # INI file per test to avoid touching the user's settings
    return ConfigManager(path=tmp_path / "config.ini")


class TestConfigManagerAllocation:
    """Test allocation preferences."""

    def test_defaults(self, config: ConfigManager) -> None:
        """Test defaults when nothing is stored."""
        assert config.get_mode() is AllocationMode.BY_GROUP_COUNT
        assert config.get_target_value() == 2
        assert config.get_history_limit() == 20

    def test_mode_round_trip(self, config: ConfigManager) -> None:
        """Test the mode is stored and read back."""
        config.set_mode(AllocationMode.BY_GROUP_SIZE)
        assert config.get_mode() is AllocationMode.BY_GROUP_SIZE

    def test_invalid_mode_falls_back(self, config: ConfigManager) -> None:
        """Test an unknown stored mode falls back to group count."""
        config.settings.setValue("preferences/allocation/mode", "sideways")
        assert config.get_mode() is AllocationMode.BY_GROUP_COUNT

    @pytest.mark.parametrize(("value", "expected"), [(5, 5), (0, 1), (-3, 1), (5000, 999)])
    def test_target_value_clamped(self, config: ConfigManager, value: int, expected: int) -> None:
        """Test target value is clamped to 1-999."""
        config.set_target_value(value)
        assert config.get_target_value() == expected

    @pytest.mark.parametrize(("value", "expected"), [(10, 10), (0, 1), (500, 100)])
    def test_history_limit_clamped(self, config: ConfigManager, value: int, expected: int) -> None:
        """Test history limit is clamped to 1-100."""
        config.set_history_limit(value)
        assert config.get_history_limit() == expected


class TestConfigManagerPersistence:
    """Test values reach disk."""

    def test_survives_reopen(self, tmp_path: Path) -> None:
        """Test a second manager on the same file sees synced values."""
        path = tmp_path / "config.ini"
        config = ConfigManager(path=path)
        config.set_mode(AllocationMode.BY_GROUP_SIZE)
        config.set_target_value(4)
        config.sync()

        reopened = ConfigManager(path=path)
        assert reopened.get_mode() is AllocationMode.BY_GROUP_SIZE
        assert reopened.get_target_value() == 4

    def test_clear(self, config: ConfigManager) -> None:
        """Test clear restores defaults."""
        config.set_target_value(9)
        config.clear()
        assert config.get_target_value() == 2

    def test_clear_keeps_shared_file_data(self, config: ConfigManager) -> None:
        """Test clear only removes preferences from a file shared with storage."""
        config.set_target_value(9)
        config.settings.setValue("roster/members", "[]")
        config.clear()
        assert config.get_target_value() == 2
        assert config.settings.value("roster/members") == "[]"
