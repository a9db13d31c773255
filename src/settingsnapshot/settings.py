"""
Settings: optional base class for configuration types.

Inheriting from Settings is not required to scan an object; it adds
convenience accessors. Everything declared here is scaffolding: discovery
never reports Settings' own members (see config.get_marker_types).

    @dataclass
    class ServiceConfig(Settings):
        timeout: int = 30
        name: str = "svc"

    cfg = ServiceConfig()
    registry = cfg.settings()
    registry["timeout"].value = "45"   # coerced to 45
    registry.reset_all()
"""

import logging
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from settingsnapshot.registry import SettingsRegistry


class Settings:
    """Marker base class for user configuration objects."""

    @property
    def settings_logger(self) -> Optional[logging.Logger]:
        """Sink for failed writes of this object's settings (None = package default)."""
        return getattr(self, '_settings_logger', None)

    @settings_logger.setter
    def settings_logger(self, value: Optional[logging.Logger]) -> None:
        # Bypass __setattr__ overrides of validating subclasses
        object.__setattr__(self, '_settings_logger', value)

    def settings(self) -> 'SettingsRegistry':
        """Scan this object; each call captures fresh defaults."""
        from settingsnapshot.registry import SettingsRegistry
        return SettingsRegistry(self, logger=self.settings_logger)
