from __future__ import annotations

from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

from ._cache import TypedCache
from ._effect import Effect


__all__ = (
    "ActionHandler",
    "HandlerFunction",
)


A = TypeVar("A")
E = TypeVar("E")
K = TypeVar("K", bound=Enum)


HandlerFunction = Callable[[TypedCache[K], A, E], Optional[Effect[A]]]


class ActionHandler(Generic[K, A, E]):
    """Maps an action to cache mutations plus an optional follow-up effect.

    Either wrap a function (usable as a decorator) or subclass and override
    :meth:`handle`. Handlers must not await anything: asynchronous work is
    returned as ``Effect.run`` so that handling stays synchronous.
    """

    def __init__(self, handler: Optional[HandlerFunction] = None) -> None:
        self._handler = handler

    def handle(self, cache: TypedCache[K], action: A, environment: E) -> Effect[A]:
        if self._handler is None:
            raise NotImplementedError

        effect = self._handler(cache, action, environment)

        if effect is None:
            return Effect.none()

        if not isinstance(effect, Effect):
            raise TypeError(
                f"handler returned {type(effect).__qualname__}, expected Effect"
            )

        return effect

    def __call__(self, cache: TypedCache[K], action: A, environment: E) -> Effect[A]:
        return self.handle(cache, action, environment)
