from __future__ import annotations

import asyncio
import inspect
import logging

from asyncio import AbstractEventLoop, Lock, Task
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from ._cache import MISSING, Observer, TypedCache, Unsubscribe, Updater
from ._effect import Effect, EffectKind, Recover, Work
from ._errors import InvalidStateError
from ._handler import ActionHandler


__all__ = (
    "ErrorListener",
    "Store",
    "StoreStatus",
)


A = TypeVar("A")
E = TypeVar("E")
K = TypeVar("K", bound=Enum)


_logger = logging.getLogger(__name__)


ErrorListener = Callable[[BaseException], None]


class StoreStatus(Enum):
    IDLE = "idle"
    HANDLING = "handling"
    AWAITING_EFFECT = "awaiting-effect"
    CLOSED = "closed"


class Store(Generic[K, A, E]):
    """Owns a :class:`TypedCache` and drives actions through a handler.

    Every dispatch runs under one lock on the store's event loop, so cache
    mutations never interleave. Deferred effects run outside the lock and
    re-enter :meth:`dispatch` with the action they produce.

    There is no cancellation between effects: if two fetches are in flight
    the one that finishes last wins, whichever was started first.

    Closing the store cancels in-flight effects and awaits the
    environment's ``aclose()`` when it has one.
    """

    environment: E

    _cache: TypedCache[K]
    _handler: ActionHandler[K, A, E]

    _lock: Lock
    _loop: Optional[AbstractEventLoop]
    _tasks: set[Task]

    _error_listeners: list[ErrorListener]

    _handling: bool
    _closed: bool
    _debug: bool

    def __init__(
        self,
        initial_values: Optional[Mapping[K, Any]],
        action_handler: ActionHandler[K, A, E],
        environment: E
    ) -> None:
        self.environment = environment

        self._cache = TypedCache(initial_values)
        self._handler = action_handler

        self._lock = Lock()
        self._loop = None
        self._tasks = set()

        self._error_listeners = []

        self._handling = False
        self._closed = False
        self._debug = False

    @property
    def status(self) -> StoreStatus:
        if self._closed:
            return StoreStatus.CLOSED

        if self._handling:
            return StoreStatus.HANDLING

        if self._tasks:
            return StoreStatus.AWAITING_EFFECT

        return StoreStatus.IDLE

    @property
    def is_debugging(self) -> bool:
        return self._debug

    def debug(self) -> Store[K, A, E]:
        if self._debug:
            return self

        self._debug = True
        self._cache.subscribe(self._log_mutation)

        return self

    def _log_mutation(self, key: K) -> None:
        _logger.info(
            "[Store] %s = %r",
            key,
            self._cache.get(key, default=None)
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvalidStateError("store is closed")

    # Cache surface

    def get(self, key: K, as_type: Any = None, default: Any = MISSING) -> Any:
        return self._cache.get(key, as_type, default)

    def resolve(self, key: K, as_type: Any = None) -> Any:
        return self._cache.resolve(key, as_type)

    def contains(self, key: K) -> bool:
        return self._cache.contains(key)

    def snapshot(self) -> dict[K, Any]:
        return self._cache.snapshot()

    def set(self, key: K, value: Any) -> None:
        self._ensure_open()
        self._cache.set(key, value)

    def update(self, key: K, as_type: Any, updater: Updater) -> None:
        self._ensure_open()
        self._cache.update(key, as_type, updater)

    def remove(self, key: K) -> None:
        self._ensure_open()
        self._cache.remove(key)

    def subscribe(self, observer: Observer) -> Unsubscribe:
        return self._cache.subscribe(observer)

    # Errors

    def subscribe_errors(self, listener: ErrorListener) -> Unsubscribe:
        self._error_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._error_listeners:
                self._error_listeners.remove(listener)

        return unsubscribe

    def report_error(self, error: BaseException) -> None:
        for listener in list(self._error_listeners):
            listener(error)

    # Dispatch

    async def dispatch(self, action: A) -> None:
        self._ensure_open()
        self._loop = asyncio.get_running_loop()

        async with self._lock:
            self._ensure_open()
            self._handling = True

            try:
                pending: Optional[A] = action

                while pending is not None:
                    effect = self._handle(pending)
                    pending = None

                    if effect.kind is EffectKind.SEND:
                        pending = effect.action
                    elif effect.kind is EffectKind.RUN:
                        assert effect.work is not None
                        self._schedule(self._run(effect.work, effect.recover))
            finally:
                self._handling = False

    def _handle(self, action: A) -> Effect[A]:
        effect = self._handler.handle(self._cache, action, self.environment)

        if self._debug:
            _logger.info("[Store] %r -> %r", action, effect)

        return effect

    def send(self, action: A) -> Task:
        """Dispatch from synchronous code running on the store's loop."""
        self._ensure_open()

        return self._schedule(self.dispatch(action))

    def send_threadsafe(self, action: A) -> None:
        """Dispatch from a thread other than the one running the loop."""
        self._ensure_open()

        if self._loop is None:
            raise InvalidStateError("store has not been bound to a loop yet")

        self._loop.call_soon_threadsafe(self.send, action)

    def bind(self, loop: Optional[AbstractEventLoop] = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def _schedule(self, coroutine: Any) -> Task:
        task = asyncio.get_running_loop().create_task(coroutine)

        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

        return task

    def _on_task_done(self, task: Task) -> None:
        self._tasks.discard(task)

        if task.cancelled():
            return

        error = task.exception()

        if error is None:
            return

        _logger.error("Store task failed", exc_info=error)
        self.report_error(error)

    async def _run(self, work: Work[A], recover: Optional[Recover[A]]) -> None:
        try:
            if inspect.iscoroutinefunction(work):
                result = await work()
            else:
                result = await asyncio.to_thread(work)

                if inspect.isawaitable(result):
                    result = await result
        except Exception as error:
            _logger.debug("Effect %r failed", work, exc_info=True)
            self.report_error(error)

            if recover is None:
                return

            result = recover(error)

        if result is None or self._closed:
            return

        await self.dispatch(result)

    async def wait_idle(self) -> None:
        """Wait until no deferred effect is in flight."""
        while self._tasks:
            await asyncio.wait(list(self._tasks))

    async def close(self) -> None:
        if self._closed:
            return

        self._closed = True

        tasks = list(self._tasks)

        for task in tasks:
            task.cancel()

        await asyncio.gather(*tasks, return_exceptions=True)

        self._tasks.clear()

        aclose = getattr(self.environment, "aclose", None)

        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> Store[K, A, E]:
        self.bind()

        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
