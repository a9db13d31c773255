"""
Snapshot dataclasses for settings diagnostics.

Immutable records of what a SettingsRegistry looked like at a point in time:
value, default and changed flag per setting. Data only, no references to the
target object, so snapshots stay valid after the target moves on.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple
import time


@dataclass(frozen=True)
class SettingSnapshot:
    """Immutable capture of a single Setting."""
    name: str
    declaring_type: str
    type_name: str
    value: Any
    default: Any
    changed: bool

    @classmethod
    def from_setting(cls, setting) -> 'SettingSnapshot':
        """Capture a live Setting (reads its value once)."""
        return cls(
            name=setting.name,
            declaring_type=setting.declaring_type,
            type_name=setting.descriptor.value_type_name,
            value=setting.value,
            default=setting.default,
            changed=setting.changed,
        )

    def to_dict(self) -> Dict:
        """Export to dict."""
        return {
            'name': self.name,
            'declaring_type': self.declaring_type,
            'type_name': self.type_name,
            'value': self.value,
            'default': self.default,
            'changed': self.changed,
        }


@dataclass(frozen=True)
class RegistrySnapshot:
    """Immutable capture of every Setting of one target."""
    target_type: str
    settings: Tuple[SettingSnapshot, ...]
    timestamp: float = field(default_factory=time.time)

    @property
    def changed_names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self.settings if s.changed)

    def __getitem__(self, name: str) -> SettingSnapshot:
        for snapshot in self.settings:
            if snapshot.name == name:
                return snapshot
        raise KeyError(name)

    def to_dict(self) -> Dict:
        """Export to dict."""
        return {
            'target_type': self.target_type,
            'timestamp': self.timestamp,
            'settings': [s.to_dict() for s in self.settings],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'RegistrySnapshot':
        """Import from dict produced by to_dict()."""
        return cls(
            target_type=data['target_type'],
            settings=tuple(SettingSnapshot(**s) for s in data['settings']),
            timestamp=data['timestamp'],
        )
