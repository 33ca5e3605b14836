"""Storage backends for the roster and group-set snapshots."""

from groupctrl.storage.gateway import PersistenceGateway
from groupctrl.storage.memory import MemoryGateway
from groupctrl.storage.settings import SettingsGateway

__all__ = ["MemoryGateway", "PersistenceGateway", "SettingsGateway"]
