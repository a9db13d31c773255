"""
Runtime settings introspection for arbitrary configuration objects.

Every writable member of a configuration object becomes a Setting: a live
handle that knows the member's current value, the value it had when last
synchronized (its default), and whether the two differ.

Key Features:
- Discovery of writable properties, annotated attributes and slots via stdlib introspection
- Baseline capture, reload (baseline <- current) and reset (current <- baseline)
- Loose-to-declared type coercion on write ("45" -> 45) backed by pydantic
- Best-effort writes: failures are logged, never raised
- Float change detection with single-precision tolerance

Quick Start:
    >>> from dataclasses import dataclass
    >>> from settingsnapshot import scan
    >>>
    >>> @dataclass
    ... class ServiceConfig:
    ...     timeout: int = 30
    ...     name: str = "svc"
    >>>
    >>> timeout, name = scan(ServiceConfig())
    >>> timeout.value = "45"
    >>> timeout.value, timeout.changed
    (45, True)
    >>> timeout.reload()
    >>> timeout.changed
    False

Modules:
    - setting: Setting handle and scan()
    - members: member discovery and MemberDescriptor
    - coercion: total value conversion (Conversion results)
    - registry: SettingsRegistry batch operations over one object
    - settings: Settings marker base class
    - snapshot_model: immutable diagnostic snapshots
    - config: framework configuration (marker types, write-failure logger)
"""

# Marker base
from settingsnapshot.settings import Settings

# Config
from settingsnapshot.config import (
    register_marker_type,
    unregister_marker_type,
    get_marker_types,
    set_write_failure_logger,
    get_write_failure_logger,
)

# Discovery
from settingsnapshot.members import (
    MemberDescriptor,
    discover_members,
    format_type,
)

# Coercion
from settingsnapshot.coercion import (
    Conversion,
    convert,
)

# Handles
from settingsnapshot.setting import (
    FLT_EPSILON,
    Setting,
    scan,
)

# Registry
from settingsnapshot.registry import SettingsRegistry

# Snapshots
from settingsnapshot.snapshot_model import (
    RegistrySnapshot,
    SettingSnapshot,
)

__all__ = [
    # Marker base
    'Settings',
    # Config
    'register_marker_type',
    'unregister_marker_type',
    'get_marker_types',
    'set_write_failure_logger',
    'get_write_failure_logger',
    # Discovery
    'MemberDescriptor',
    'discover_members',
    'format_type',
    # Coercion
    'Conversion',
    'convert',
    # Handles
    'FLT_EPSILON',
    'Setting',
    'scan',
    # Registry
    'SettingsRegistry',
    # Snapshots
    'RegistrySnapshot',
    'SettingSnapshot',
]

__version__ = '0.1.0'
