"""
Type coercion for setting writes.

convert() never raises: every outcome is a Conversion carrying either the
converted value or the error, so callers decide what a failure means.
Conversion itself is delegated to pydantic in lax mode ("45" -> 45, 5 -> 5.0,
5 -> "5").
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

from pydantic import ConfigDict, PydanticUserError, TypeAdapter

from settingsnapshot.members import format_type

logger = logging.getLogger(__name__)

_LAX_CONFIG = ConfigDict(coerce_numbers_to_str=True, arbitrary_types_allowed=True)


@dataclass(frozen=True)
class Conversion:
    """Outcome of convert(): a value, or the error explaining why there is none."""
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> 'Conversion':
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> 'Conversion':
        return cls(error=error)


@lru_cache(maxsize=None)
def _adapter_for(target_type: Any) -> TypeAdapter:
    try:
        return TypeAdapter(target_type, config=_LAX_CONFIG)
    except PydanticUserError:
        # Models, dataclasses and TypedDicts bring their own config
        return TypeAdapter(target_type)


def convert(value: Any, target_type: Any) -> Conversion:
    """Convert value to target_type.

    None, values already of exactly target_type, and untyped (Any) targets
    pass through unchanged.

    Args:
        value: Incoming value, possibly loosely typed (e.g. text from a form)
        target_type: Declared type of the member being written

    Returns:
        Conversion whose error is a ValueError chained to the underlying cause
    """
    if value is None or target_type is Any or type(value) is target_type:
        return Conversion.success(value)

    try:
        converted = _adapter_for(target_type).validate_python(value)
    except Exception as e:
        # ValidationError, schema generation errors, unhashable type objects
        error = ValueError(f"Cannot convert {value!r} to {format_type(target_type)}: {e}")
        error.__cause__ = e
        return Conversion.failure(error)

    logger.debug(f"Converted {value!r} to {converted!r} ({format_type(target_type)})")
    return Conversion.success(converted)
