from ._cache import MISSING, Observer, TypedCache, Unsubscribe, Updater
from ._effect import Effect, EffectKind, Recover, Work
from ._errors import (
    InvalidStateError,
    MissingValueError,
    StoreError,
    UnhandledActionError
)
from ._handler import ActionHandler, HandlerFunction
from ._store import ErrorListener, Store, StoreStatus


__all__ = (
    "MISSING",
    "ActionHandler",
    "Effect",
    "EffectKind",
    "ErrorListener",
    "HandlerFunction",
    "InvalidStateError",
    "MissingValueError",
    "Observer",
    "Recover",
    "Store",
    "StoreError",
    "StoreStatus",
    "TypedCache",
    "UnhandledActionError",
    "Unsubscribe",
    "Updater",
    "Work",
)
