"""In-memory keyed store with per-key change subscriptions.

Every write deep-copies the incoming value, so the live state never shares
mutable objects with callers' inputs.  Reads are *not* copied: ``get`` and
``get_all`` hand back live references.

Change detection is a shallow dirty-check.  Scalars compare by value (a
bool never equals a number); everything else compares by identity.
Because stored values are deep copies, replacing a container always
counts as a change, while an updater that mutates and returns the stored
object in place does not.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any

from keyedstore._clone import Cloner, Record, as_record, clone_record, deep_clone
from keyedstore._redact import redact_for_log
from keyedstore.config import StoreConfig
from keyedstore.exceptions import KeyedStoreError, StoreDestroyedError
from keyedstore.payloads import DestroyKind, Listener, ListenerRegistration, SetPayload, Updater, Value

_logger = logging.getLogger(__name__)

_SCALAR_TYPES: tuple[type, ...] = (type(None), bool, int, float, complex, str, bytes)


def has_changed(old: Any, new: Any) -> bool:
    """Return True if replacing *old* with *new* should notify listeners."""
    if isinstance(old, _SCALAR_TYPES) and isinstance(new, _SCALAR_TYPES):
        return isinstance(old, bool) is not isinstance(new, bool) or old != new
    return old is not new


def _key_list(keys: Iterable[Hashable] | str | bytes) -> list[Hashable]:
    # A bare string is one key, not a sequence of characters.
    if isinstance(keys, (str, bytes)):
        return [keys]
    return list(keys)


class KeyedObservableStore:
    """Keyed record of values with change listeners and a default snapshot.

    Parameters
    ----------
    defaults : Mapping or pydantic.BaseModel, optional
        Initial record.  When given it becomes the default snapshot and the
        live state is populated from it.
    config : StoreConfig, optional
        Behaviour toggles; defaults to ``StoreConfig()``.
    clone : callable, optional
        Deep-copy function applied on every write.  Defaults to
        :func:`copy.deepcopy`.
    """

    def __init__(
        self,
        defaults: Record | None = None,
        *,
        config: StoreConfig | None = None,
        clone: Cloner = deep_clone,
    ) -> None:
        self._config = config or StoreConfig()
        self._clone = clone
        self._store: dict[Hashable, Any] | None = {}
        self._listeners: list[ListenerRegistration] | None = []
        self._default: dict[Hashable, Any] | None = {}
        self._destroyed = False

        if defaults is not None:
            self.configure_default(defaults).restore_default()

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # ------------------------------------------------------------------
    # Defaults
    # ------------------------------------------------------------------

    def configure_default(self, defaults: Record) -> KeyedObservableStore:
        """Retain a deep copy of *defaults*; live state is untouched."""
        self._check_alive("configure_default")
        self._default = clone_record(defaults, self._clone)
        _logger.debug("Default snapshot configured keys=%d", len(self._default))
        return self

    def restore_default(self, defaults: Record | None = None) -> KeyedObservableStore:
        """Replace live state with *defaults* or the configured snapshot.

        *defaults*, when given, is used for this restore only and does not
        replace the configured snapshot.  Listeners are not notified.
        """
        self._check_alive("restore_default")
        self.clear_store()
        source = defaults if defaults is not None else self._default
        self._store = clone_record(source, self._clone)
        _logger.debug("Store restored to defaults keys=%d explicit=%s", len(self._store), defaults is not None)
        return self

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all(self) -> dict[Hashable, Any]:
        """Return the live state dict itself (not a copy)."""
        self._check_alive("get_all")
        return self._store

    def get(self, key: Hashable) -> Any:
        """Return the current value of *key*, or ``None`` if never set."""
        self._check_alive("get")
        return self._store.get(key)

    def get_many(self, keys: Iterable[Hashable] | str) -> dict[Hashable, Any]:
        """Return ``{key: value}`` for each requested key, in request order."""
        self._check_alive("get_many")
        return {key: self._store.get(key) for key in _key_list(keys)}

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set_all(self, data: Record) -> KeyedObservableStore:
        """Replace the whole live state with a deep copy of *data*, silently."""
        self._check_alive("set_all")
        self._store = clone_record(data, self._clone)
        self._trace("set_all", None, self._store)
        return self

    def set(self, key: Hashable, payload: SetPayload | Any) -> KeyedObservableStore:
        """Update a single key and notify its listeners if it changed.

        *payload* is a :class:`Value` or an :class:`Updater`.  Anything else
        is stored as a literal, including callables.
        """
        self._check_alive("set")
        old = self._store.get(key)

        if isinstance(payload, Updater):
            new = payload.apply(old)
        elif isinstance(payload, Value):
            new = payload.value
        else:
            new = payload

        notify = has_changed(old, new)
        self._store[key] = self._clone(new)
        self._trace("set", key, new)

        if notify:
            self._notify_listeners((key,))
        return self

    def update(self, key: Hashable, fn: Callable[[Any], Any]) -> KeyedObservableStore:
        """Shorthand for ``set(key, Updater(fn))``."""
        return self.set(key, Updater(fn))

    def set_many(self, record: Record) -> KeyedObservableStore:
        """Apply each key of *record* through the single-key path."""
        self._check_alive("set_many")
        for key, value in as_record(record).items():
            self.set(key, Value(value))
        return self

    def mass_update(
        self,
        keys: Iterable[Hashable] | str,
        fn: Callable[[dict[Hashable, Any]], Mapping[Hashable, Any]],
    ) -> KeyedObservableStore:
        """Update several keys at once and notify all of them.

        *fn* receives the current values of *keys* and returns the new
        values.  Listeners of every key in *keys* fire whether or not the
        returned values differ.
        """
        self._check_alive("mass_update")
        keys = _key_list(keys)
        result = fn(self.get_many(keys))

        self._store = self._clone({**self._store, **as_record(result)})
        self._trace("mass_update", keys, result)

        self._notify_listeners(keys)
        return self

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, key: Hashable, callback: Listener) -> Callable[[], None]:
        """Register *callback* for changes of *key*.

        Re-subscribing the same (key, callback) pair replaces the earlier
        registration.  Returns a function equivalent to
        ``unsubscribe(key, callback)``.
        """
        self._check_alive("subscribe")
        registration = ListenerRegistration(key=key, callback=callback)

        self._listeners = [entry for entry in self._listeners if not entry.matches(key, callback)]
        self._listeners.append(registration)
        _logger.debug("Listener subscribed key=%r total=%d", key, len(self._listeners))

        return functools.partial(self._remove_listener, key, callback)

    def unsubscribe(self, key: Hashable, callback: Listener) -> KeyedObservableStore:
        """Remove listeners for *key* or *callback*.

        Every registration sharing the key **or** the callback is dropped,
        so a callback subscribed to several keys is removed from all of
        them.
        """
        self._remove_listener(key, callback)
        return self

    def clear_store(self) -> KeyedObservableStore:
        self._check_alive("clear_store")
        self._store = {}
        return self

    def clear_listeners(self) -> KeyedObservableStore:
        self._check_alive("clear_listeners")
        self._listeners = []
        _logger.debug("All listeners cleared")
        return self

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def destroy(self, kind: DestroyKind | str, key: Hashable | None = None) -> bool:
        """Remove one record or tear down the whole store.

        ``destroy("record", key)`` returns whether *key* was present.
        ``destroy("store")`` releases state, listeners and defaults and
        returns True; the store must not be used afterwards.
        """
        kind = DestroyKind(kind)
        self._check_alive("destroy")

        if kind is DestroyKind.RECORD:
            if key is None:
                raise KeyedStoreError("destroy('record') requires a key")
            present = key in self._store
            self._store.pop(key, None)
            _logger.debug("Record destroyed key=%r present=%s", key, present)
            return present

        self._store = None
        self._listeners = None
        self._default = None
        self._destroyed = True
        _logger.debug("Store destroyed")
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_alive(self, operation: str) -> None:
        if self._destroyed and self._config.strict_destroy:
            raise StoreDestroyedError(operation)

    def _remove_listener(self, key: Hashable, callback: Listener) -> None:
        self._check_alive("unsubscribe")
        before = len(self._listeners)
        self._listeners = [
            registration
            for registration in self._listeners
            if not registration.shares_key_or_callback(key, callback)
        ]
        removed = before - len(self._listeners)
        if removed:
            _logger.debug("Listeners removed key=%r count=%d", key, removed)

    def _notify_listeners(self, keys: Iterable[Hashable]) -> None:
        changed = list(keys)
        # Registrations added or removed by a callback take effect on the next notification.
        registrations = tuple(self._listeners)
        _logger.debug("Notifying keys=%r listeners=%d", changed, len(registrations))

        for registration in registrations:
            if registration.key in changed:
                registration.callback(self.get(registration.key))

    def _trace(self, action: str, key: Any, value: Any) -> None:
        if not self._config.trace_enabled:
            return
        _logger.debug(
            "%s key=%r value=%s",
            action,
            key,
            redact_for_log(value, key=key, max_string=self._config.trace_max_string),
        )
