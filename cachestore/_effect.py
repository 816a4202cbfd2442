from __future__ import annotations

from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar, Union


__all__ = (
    "Effect",
    "EffectKind",
    "Recover",
    "Work",
)


A = TypeVar("A")


Work = Callable[[], Union[Awaitable[Optional[A]], Optional[A]]]
Recover = Callable[[Exception], Optional[A]]


class EffectKind(Enum):
    NONE = "none"
    SEND = "send"
    RUN = "run"


class Effect(Generic[A]):
    """Follow-up work returned by an action handler.

    ``Effect.none()`` ends the dispatch, ``Effect.send(action)`` dispatches
    ``action`` right away in the same critical section and ``Effect.run(work)``
    schedules ``work`` outside of it. ``work`` is either a coroutine function
    or a plain callable (run on a worker thread); whatever action it returns
    is dispatched when it finishes, ``None`` means nothing further happens.

    If ``work`` raises, the store reports the error to its error listeners
    and dispatches ``recover(error)`` instead. Without ``recover`` a failed
    effect ends quietly.
    """

    __slots__ = ("kind", "action", "work", "recover")

    kind: EffectKind
    action: Optional[A]
    work: Optional[Work[A]]
    recover: Optional[Recover[A]]

    def __init__(
        self,
        kind: EffectKind,
        action: Optional[A] = None,
        work: Optional[Work[A]] = None,
        recover: Optional[Recover[A]] = None
    ) -> None:
        self.kind = kind
        self.action = action
        self.work = work
        self.recover = recover

    @classmethod
    def none(cls) -> Effect[A]:
        return cls(EffectKind.NONE)

    @classmethod
    def send(cls, action: A) -> Effect[A]:
        return cls(EffectKind.SEND, action=action)

    @classmethod
    def run(cls, work: Work[A], recover: Optional[Recover[A]] = None) -> Effect[A]:
        if not callable(work):
            raise TypeError("work must be callable")

        return cls(EffectKind.RUN, work=work, recover=recover)

    @property
    def is_none(self) -> bool:
        return self.kind is EffectKind.NONE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Effect):
            return NotImplemented

        return (
            self.kind is other.kind
            and self.action == other.action
            and self.work is other.work
        )

    def __hash__(self) -> int:
        return hash((self.kind, id(self.work)))

    def __repr__(self) -> str:
        if self.kind is EffectKind.SEND:
            return f"Effect.send({self.action!r})"

        if self.kind is EffectKind.RUN:
            name = getattr(self.work, "__qualname__", repr(self.work))
            return f"Effect.run({name})"

        return "Effect.none()"
