"""Tagged payload and registration types used at the store API boundary.

A single-key ``set`` takes either a :class:`Value` (literal replacement) or
an :class:`Updater` (``old -> new`` function).  The caller picks the variant;
the store never guesses by checking whether a payload is callable, so
functions can be stored as plain values.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

Listener = Callable[[Any], Any]
"""Change callback; receives the key's new value only."""


class Value(BaseModel):
    """Literal replacement value for a single key."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = None

    def __init__(self, value: Any = None, /, **data: Any) -> None:
        data.setdefault("value", value)
        super().__init__(**data)


class Updater(BaseModel):
    """Function computing a key's new value from its current value."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fn: Callable[[Any], Any]

    def __init__(self, fn: Callable[[Any], Any] | None = None, /, **data: Any) -> None:
        if fn is not None:
            data.setdefault("fn", fn)
        super().__init__(**data)

    def apply(self, current: Any) -> Any:
        return self.fn(current)


SetPayload = Value | Updater


class DestroyKind(StrEnum):
    RECORD = "record"
    STORE = "store"


class ListenerRegistration(BaseModel):
    """A (key, callback) pair recorded by ``subscribe``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: Hashable
    callback: Listener

    def shares_key_or_callback(self, key: Hashable, callback: Listener) -> bool:
        return self.key == key or self.callback == callback

    def matches(self, key: Hashable, callback: Listener) -> bool:
        return self.key == key and self.callback == callback
