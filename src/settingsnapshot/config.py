"""
Framework configuration for settings discovery.

Module-level storage for the pluggable parts of the framework:
- Marker types: base classes whose own members are scaffolding, never settings
- Write-failure logger: package-wide sink for failed setting writes

The Settings base class is always a marker type and cannot be unregistered.
"""

import logging
from typing import List, Optional, Type

from settingsnapshot.settings import Settings


logger = logging.getLogger(__name__)

# Extra marker types registered by the host, in registration order
_marker_types: List[Type] = []

# None means "use the setting module's own logger"
_write_failure_logger: Optional[logging.Logger] = None


def register_marker_type(marker_type: Type) -> None:
    """Exclude every member declared directly on marker_type from discovery."""
    if not isinstance(marker_type, type):
        raise TypeError(f"Marker type must be a class, got {marker_type!r}")
    if marker_type not in _marker_types:
        _marker_types.append(marker_type)
        _clear_discovery_cache()
        logger.debug(f"Registered marker type: {marker_type.__qualname__}")


def unregister_marker_type(marker_type: Type) -> None:
    if marker_type in _marker_types:
        _marker_types.remove(marker_type)
        _clear_discovery_cache()
        logger.debug(f"Unregistered marker type: {marker_type.__qualname__}")


def get_marker_types() -> tuple:
    """Get all marker types, Settings first."""
    return (Settings, *_marker_types)


def set_write_failure_logger(sink: Optional[logging.Logger]) -> None:
    """Set the package-wide logger for failed writes (None restores the default).

    Args:
        sink: Logger receiving one WARNING record per failed write
    """
    global _write_failure_logger
    _write_failure_logger = sink


def get_write_failure_logger() -> Optional[logging.Logger]:
    """Get the package-wide write-failure logger, None if not overridden."""
    return _write_failure_logger


def _clear_discovery_cache() -> None:
    # Discovery results depend on the marker set
    from settingsnapshot.members import clear_cache
    clear_cache()
