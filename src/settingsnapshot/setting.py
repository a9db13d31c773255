"""
Setting: live handle on one writable member of a settings object.

A Setting never caches the member's value. It remembers a baseline (default)
captured when the handle is created and compares the live value against it:

    value    -> getattr(target, name), read on every access
    default  -> baseline, advanced by reload(), written back by reset()
    changed  -> value differs from default (float values compared in single precision)

Writes are best-effort: a value that cannot be converted or stored is logged
at WARNING level and dropped, never raised. One broken setting must not abort
a sweep over the others.
"""

import logging
import math
import numbers
import struct
from typing import Any, Iterator, Optional

from settingsnapshot.coercion import convert
from settingsnapshot.config import get_write_failure_logger
from settingsnapshot.members import MemberDescriptor, discover_members

logger = logging.getLogger(__name__)

# Single-precision machine epsilon, used for double values too
FLT_EPSILON = 2.0 ** -23


def _to_single(number: float) -> float:
    """Round a float to the nearest IEEE-754 single-precision value."""
    try:
        return struct.unpack('f', struct.pack('f', number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


class Setting:
    """Handle on one eligible member of a target object.

    The target must outlive the handle; the handle does not own it.
    Not thread-safe: callers serialize access to the target themselves.
    """

    def __init__(
        self,
        target: Any,
        descriptor: MemberDescriptor,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Bind a handle to target and capture the current value as default.

        Args:
            target: Object owning the member
            descriptor: Member metadata from discover_members()
            logger: Sink for failed writes (package default when None)
        """
        if target is None:
            raise ValueError("Setting target must not be None")
        self._target = target
        self._descriptor = descriptor
        self._logger = logger
        self.default: Any = self.value

    @property
    def descriptor(self) -> MemberDescriptor:
        return self._descriptor

    @property
    def name(self) -> str:
        return self._descriptor.name

    @property
    def declaring_type(self) -> str:
        return self._descriptor.declaring_type_name

    @property
    def type(self) -> Any:
        """Declared type of the member (typing.Any when unannotated)."""
        return self._descriptor.value_type

    @property
    def value(self) -> Any:
        return getattr(self._target, self.name)

    @value.setter
    def value(self, new_value: Any) -> None:
        error = self._write(new_value)
        if error is not None:
            self._sink.warning(
                f"Unable to set new value {new_value!r} for '{self._describe()}': {error}",
                exc_info=error,
            )

    @property
    def changed(self) -> bool:
        """True if the live value differs from the baseline."""
        value = self.value
        default = self.default
        if isinstance(value, float):
            if not isinstance(default, numbers.Real):
                return True
            return abs(_to_single(value) - _to_single(float(default))) > FLT_EPSILON
        return value != default

    def reload(self) -> None:
        """Make the current value the new baseline."""
        self.default = self.value

    def reset(self) -> None:
        """Write the baseline back to the target (logged, not raised, on failure)."""
        self.value = self.default

    @property
    def _sink(self) -> logging.Logger:
        if self._logger is not None:
            return self._logger
        return get_write_failure_logger() or logger

    def _write(self, new_value: Any) -> Optional[Exception]:
        """Convert and store new_value, returning the error instead of raising it."""
        if new_value is not None and type(new_value) is not self.type:
            conversion = convert(new_value, self.type)
            if not conversion.ok:
                return conversion.error
            new_value = conversion.value

        try:
            setattr(self._target, self.name, new_value)
        except Exception as e:
            # Read-only backing field, validation in the target's setter, ...
            return e
        return None

    def _describe(self) -> str:
        try:
            return str(self)
        except Exception:
            # The target may be unreadable after a rejected write
            return f'{self.declaring_type}.{self.name}'

    def __str__(self) -> str:
        marker = '*' if self.changed else ''
        return f'{self._descriptor.value_type_name} {self.declaring_type}.{self.name}{marker} = {self.value}'

    def __repr__(self) -> str:
        return f'Setting(name={self.name!r}, value={self.value!r}, default={self.default!r})'


def scan(target: Any, logger: Optional[logging.Logger] = None) -> Iterator[Setting]:
    """Create one Setting per eligible member of target, lazily.

    Each Setting captures its default when the iterator reaches it, so a
    partially consumed scan only builds handles for the consumed members.

    Args:
        target: Settings object to introspect
        logger: Sink for failed writes, shared by every produced Setting

    Returns:
        Single-pass iterator of Settings in discovery order

    Raises:
        ValueError: target is None (raised immediately, not on first next())
    """
    if target is None:
        raise ValueError("Cannot scan settings of None")

    descriptors = discover_members(type(target))
    return (Setting(target, descriptor, logger) for descriptor in descriptors)
