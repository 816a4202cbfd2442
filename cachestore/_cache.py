from __future__ import annotations

import copy
import logging

from collections.abc import Iterator, Mapping
from enum import Enum
from types import UnionType
from typing import Any, Callable, Generic, Optional, TypeVar, Union, get_args, get_origin

from ._errors import MissingValueError


__all__ = (
    "MISSING",
    "Observer",
    "TypedCache",
    "Unsubscribe",
    "Updater",
)


K = TypeVar("K", bound=Enum)
T = TypeVar("T")


_logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


Observer = Callable[[K], None]
Unsubscribe = Callable[[], None]
Updater = Callable[[Optional[T]], Optional[T]]


def _matches(value: Any, as_type: Any) -> bool:
    if as_type is None or as_type is Any:
        return True

    runtime_type = get_origin(as_type) or as_type

    if runtime_type is Union or runtime_type is UnionType:
        return any(_matches(value, arg) for arg in get_args(as_type))

    if not isinstance(runtime_type, type):
        return True

    return isinstance(value, runtime_type)


def _detached(value: Any) -> Any:
    if isinstance(value, (list, dict, set, bytearray)):
        return copy.copy(value)

    return value


def _empty_value(as_type: Any) -> Any:
    """Zero value for ``as_type``: ``0``, ``""``, ``[]``, an empty model..."""
    if as_type is None:
        return None

    runtime_type = get_origin(as_type) or as_type

    if not isinstance(runtime_type, type) or runtime_type is UnionType:
        return None

    try:
        return runtime_type()
    except (TypeError, ValueError):
        return None


class TypedCache(Generic[K]):
    """Mapping from enum keys to values of any type.

    Values are stored type-erased; readers name the type they expect and
    get a fallback instead of an exception when the stored value is absent
    or of another type. Every mutation is reported to the subscribed
    observers with the key that changed.

    Readers get shallow copies of list, dict and set values; only
    :meth:`update` hands out the stored object itself.
    """

    _values: dict[K, Any]
    _observers: list[Observer]

    def __init__(self, initial_values: Optional[Mapping[K, Any]] = None) -> None:
        self._values = dict(initial_values or {})
        self._observers = []

    def _notify(self, key: K) -> None:
        for observer in list(self._observers):
            observer(key)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TypedCache({self._values!r})"

    def contains(self, key: K) -> bool:
        return key in self._values

    def keys(self) -> Iterator[K]:
        return iter(list(self._values))

    def snapshot(self) -> dict[K, Any]:
        return dict(self._values)

    def get(self, key: K, as_type: Any = None, default: Any = MISSING) -> Any:
        if key in self._values:
            value = self._values[key]

            if _matches(value, as_type):
                return _detached(value)

            _logger.debug(
                "Cached %r holds %s, expected %r; using fallback",
                key,
                type(value).__qualname__,
                as_type
            )

        if default is not MISSING:
            return default

        return _empty_value(as_type)

    def resolve(self, key: K, as_type: Any = None) -> Any:
        if key not in self._values:
            raise MissingValueError(key, as_type)

        value = self._values[key]

        if not _matches(value, as_type):
            raise MissingValueError(key, as_type)

        return _detached(value)

    def set(self, key: K, value: Any) -> None:
        self._values[key] = value
        self._notify(key)

    def update(self, key: K, as_type: Any, updater: Updater) -> None:
        current = self._values.get(key)

        if current is not None and not _matches(current, as_type):
            _logger.debug("Ignoring mismatched %r during update", key)
            current = None

        updated = updater(current)

        if updated is not None:
            self._values[key] = updated

        self._notify(key)

    def remove(self, key: K) -> None:
        if key not in self._values:
            return

        del self._values[key]
        self._notify(key)

    def subscribe(self, observer: Observer) -> Unsubscribe:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe
