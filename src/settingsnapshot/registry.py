"""
SettingsRegistry: all Settings of one target object.

Scans the target once and keeps the resulting handles, giving name lookup
and batch operations (reload_all, reset_all) over them. Batch operations
never stop on a failed write; the failure is logged by the Setting and the
sweep moves on to the next one.

Thread safety: Not thread-safe (same contract as Setting).
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from settingsnapshot.setting import Setting, scan
from settingsnapshot.snapshot_model import RegistrySnapshot, SettingSnapshot

logger = logging.getLogger(__name__)


class SettingsRegistry:
    """Settings of a single target, keyed by member name."""

    def __init__(self, target: Any, logger: Optional[logging.Logger] = None):
        """
        Scan target and keep one Setting per eligible member.

        Args:
            target: Settings object to introspect
            logger: Sink for failed writes, passed to every Setting

        Raises:
            ValueError: target is None
        """
        self._target = target
        self._settings: Dict[str, Setting] = {s.name: s for s in scan(target, logger)}

    @property
    def target(self) -> Any:
        return self._target

    @property
    def names(self) -> List[str]:
        return list(self._settings)

    def __iter__(self) -> Iterator[Setting]:
        return iter(self._settings.values())

    def __len__(self) -> int:
        return len(self._settings)

    def __contains__(self, name: object) -> bool:
        return name in self._settings

    def __getitem__(self, name: str) -> Setting:
        try:
            return self._settings[name]
        except KeyError:
            raise KeyError(f"{type(self._target).__qualname__} has no setting '{name}'") from None

    def get(self, name: str, default: Optional[Setting] = None) -> Optional[Setting]:
        return self._settings.get(name, default)

    # ==================== CHANGE TRACKING ====================

    def changed(self) -> List[Setting]:
        """Settings whose value differs from their default."""
        return [s for s in self._settings.values() if s.changed]

    @property
    def is_changed(self) -> bool:
        return any(s.changed for s in self._settings.values())

    # ==================== BASELINE OPERATIONS ====================

    def reload(self, name: str) -> None:
        self[name].reload()

    def reset(self, name: str) -> None:
        self[name].reset()

    def reload_all(self) -> None:
        """Make every current value the new default."""
        for setting in self._settings.values():
            setting.reload()
        logger.debug(f"Reloaded {len(self._settings)} setting(s) of {type(self._target).__qualname__}")

    def reset_all(self) -> None:
        """Write every default back to the target.

        A failed write is logged by its Setting and the sweep continues.
        """
        for setting in self._settings.values():
            setting.reset()
        logger.debug(f"Reset {len(self._settings)} setting(s) of {type(self._target).__qualname__}")

    # ==================== DIAGNOSTICS ====================

    def snapshot(self) -> RegistrySnapshot:
        """Capture value, default and changed flag of every setting."""
        return RegistrySnapshot(
            target_type=f'{type(self._target).__module__}.{type(self._target).__qualname__}',
            settings=tuple(SettingSnapshot.from_setting(s) for s in self._settings.values()),
        )

    def describe(self) -> List[str]:
        """One diagnostic line per setting, e.g. 'int app.Config.timeout* = 45'."""
        return [str(s) for s in self._settings.values()]

    def __repr__(self) -> str:
        return f'SettingsRegistry({type(self._target).__qualname__}, settings={self.names})'

