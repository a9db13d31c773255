"""
Member discovery for settings objects.

Finds the instance-level, publicly writable members of a type using stdlib
introspection and describes each with an immutable MemberDescriptor.

Eligible members (walking the MRO, most derived class first):
- properties with a setter
- annotated instance attributes (dataclass fields, plain annotations), except ClassVar/InitVar
- __slots__ member descriptors

Never eligible:
- names starting with an underscore
- anything declared on a marker type (see settingsnapshot.config)
- any member of a frozen dataclass (setattr always fails)
- annotated names backed by a non-data descriptor, and NamedTuple fields

Discovery runs once per type; descriptors are shared by every Setting for that type.
"""

import dataclasses
import inspect
import logging
import types
import typing
import weakref
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple, Type

from settingsnapshot.config import get_marker_types

logger = logging.getLogger(__name__)

_MISSING = object()

# Weak keys so classes created at runtime (tests, factories) can be collected
_descriptor_cache: 'weakref.WeakKeyDictionary[type, Tuple[MemberDescriptor, ...]]' = weakref.WeakKeyDictionary()


@dataclass(frozen=True)
class MemberDescriptor:
    """Static metadata for one eligible member of a settings type."""
    name: str
    declaring_type: Optional[type]
    value_type: Any = Any  # Declared type; Any when the member is unannotated

    @property
    def declaring_type_name(self) -> str:
        """Fully qualified name of the declaring class, or '' if unknown."""
        if self.declaring_type is None:
            return ''
        return f'{self.declaring_type.__module__}.{self.declaring_type.__qualname__}'

    @property
    def value_type_name(self) -> str:
        return format_type(self.value_type)


def format_type(tp: Any) -> str:
    """Readable name for a declared type: 'int', 'pkg.mod.Color', 'typing.Optional[int]'."""
    # Parameterized builtins (list[int]) pass isinstance(_, type) on some versions
    if isinstance(tp, type) and not typing.get_args(tp):
        if tp.__module__ == 'builtins':
            return tp.__qualname__
        return f'{tp.__module__}.{tp.__qualname__}'
    return repr(tp)


def discover_members(target_type: Type) -> Tuple[MemberDescriptor, ...]:
    """Get the eligible members of target_type in stable discovery order.

    Args:
        target_type: Class of the object being scanned

    Returns:
        Tuple of descriptors, cached per type
    """
    try:
        return _descriptor_cache[target_type]
    except KeyError:
        pass
    except TypeError:
        # Not weak-referenceable; discover without caching
        return tuple(_walk_mro(target_type))

    descriptors = tuple(_walk_mro(target_type))
    _descriptor_cache[target_type] = descriptors
    logger.debug(
        f"Discovered {len(descriptors)} setting(s) on {target_type.__qualname__}: "
        f"{[d.name for d in descriptors]}"
    )
    return descriptors


def clear_cache() -> None:
    """Drop all cached discovery results."""
    _descriptor_cache.clear()


def _walk_mro(target_type: Type) -> Iterator[MemberDescriptor]:
    if _is_frozen_dataclass(target_type):
        logger.debug(f"{target_type.__qualname__} is a frozen dataclass, no writable members")
        return

    markers = get_marker_types()
    seen = set()

    for cls in target_type.__mro__:
        if cls is object:
            continue
        is_marker = cls in markers
        hints = _class_hints(cls)

        for name, attr, annotated in _declared_names(cls):
            # Most derived declaration wins, even when it is not eligible itself
            if name in seen:
                continue
            seen.add(name)

            if is_marker or name.startswith('_'):
                continue

            if isinstance(attr, property):
                if attr.fset is None:
                    continue
                yield MemberDescriptor(name, cls, _property_type(attr, hints.get(name, _MISSING)))
            elif isinstance(attr, types.MemberDescriptorType):
                yield MemberDescriptor(name, cls, _normalize(hints.get(name, _MISSING)))
            elif annotated:
                hint = hints.get(name, _MISSING)
                if _is_class_level(hint) or _is_read_only_descriptor(attr):
                    continue
                # NamedTuple fields are immutable tuple items
                if issubclass(cls, tuple):
                    continue
                yield MemberDescriptor(name, cls, _normalize(hint))


def _declared_names(cls: type) -> Iterator[Tuple[str, Any, bool]]:
    """Yield (name, class attribute or _MISSING, is_annotated) for names declared on cls itself."""
    namespace = vars(cls)
    annotations = _own_annotations(cls)
    for name in annotations:
        yield name, namespace.get(name, _MISSING), True
    for name, attr in namespace.items():
        if name not in annotations:
            yield name, attr, False


def _own_annotations(cls: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(cls))
    except Exception as e:
        logger.debug(f"Could not read annotations of {cls.__qualname__}: {e}")
        return {}


def _class_hints(cls: type) -> Dict[str, Any]:
    """Resolved annotations of cls, falling back to the raw ones."""
    try:
        return typing.get_type_hints(cls)
    except Exception as e:
        logger.debug(f"Unresolvable annotations on {cls.__qualname__}, using raw: {e}")
        return _own_annotations(cls)


def _property_type(prop: property, class_hint: Any) -> Any:
    if prop.fget is not None:
        try:
            hint = typing.get_type_hints(prop.fget).get('return', _MISSING)
        except Exception:
            hint = getattr(prop.fget, '__annotations__', {}).get('return', _MISSING)
        if hint is not _MISSING:
            return _normalize(hint)
    return _normalize(class_hint)


def _normalize(hint: Any) -> Any:
    # Unresolved forward references are treated as untyped
    if hint is _MISSING or isinstance(hint, (str, typing.ForwardRef)):
        return Any
    return hint


def _is_class_level(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.split('[', 1)[0].rsplit('.', 1)[-1] in ('ClassVar', 'InitVar')
    if hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar:
        return True
    return isinstance(hint, dataclasses.InitVar) or hint is dataclasses.InitVar


def _is_read_only_descriptor(attr: Any) -> bool:
    """Class attribute that binds on access but cannot be assigned through.

    Covers methods, classmethods, staticmethods and other non-data descriptors.
    """
    if attr is _MISSING:
        return False
    attr_type = type(attr)
    return hasattr(attr_type, '__get__') and not hasattr(attr_type, '__set__')


def _is_frozen_dataclass(target_type: type) -> bool:
    params = getattr(target_type, '__dataclass_params__', None)
    return dataclasses.is_dataclass(target_type) and bool(getattr(params, 'frozen', False))
