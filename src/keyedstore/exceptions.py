"""Custom exception hierarchy for keyedstore."""

from __future__ import annotations


class KeyedStoreError(Exception):
    """Base exception for all keyedstore errors."""


class StoreConfigError(KeyedStoreError):
    """Invalid configuration (e.g. an unparsable environment variable)."""


class StoreDestroyedError(KeyedStoreError):
    """Operation attempted on a store after ``destroy("store")``.

    Only raised when :attr:`StoreConfig.strict_destroy` is enabled.  With
    strict mode off, the store behaves like a nulled object and the
    operation fails with whatever error the missing internals produce.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Store has been destroyed; cannot call {operation}()")
