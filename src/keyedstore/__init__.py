"""keyedstore - In-memory keyed store with per-key change subscriptions."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("keyedstore")
except PackageNotFoundError:
    __version__ = "0+local"
from keyedstore.config import StoreConfig
from keyedstore.exceptions import KeyedStoreError, StoreConfigError, StoreDestroyedError
from keyedstore.payloads import DestroyKind, Listener, ListenerRegistration, SetPayload, Updater, Value
from keyedstore.store import KeyedObservableStore, has_changed

__all__ = [
    "__version__",
    "DestroyKind",
    "KeyedObservableStore",
    "KeyedStoreError",
    "Listener",
    "ListenerRegistration",
    "SetPayload",
    "StoreConfig",
    "StoreConfigError",
    "StoreDestroyedError",
    "Updater",
    "Value",
    "has_changed",
]
