"""Store configuration for keyedstore."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from keyedstore.exceptions import StoreConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Store configuration.

    Parameters
    ----------
    strict_destroy : bool
        Raise :class:`~keyedstore.exceptions.StoreDestroyedError` from any
        operation performed after ``destroy("store")``.  When disabled the
        store is left with nulled internals and later calls fail with
        ``TypeError``/``AttributeError``.
    trace_enabled : bool
        Log written values at DEBUG level (redacted via
        :func:`keyedstore._redact.redact_for_log`).
    trace_max_string : int
        Strings longer than this are truncated in traced values.
    """

    strict_destroy: bool = True
    trace_enabled: bool = False
    trace_max_string: int = 512

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from ``KEYEDSTORE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        StoreConfigError
            If ``KEYEDSTORE_TRACE_MAX_STRING`` is not an integer.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        if "strict_destroy" not in overrides:
            config_kwargs["strict_destroy"] = _env_bool(env.get("KEYEDSTORE_STRICT_DESTROY"), True)

        if "trace_enabled" not in overrides:
            config_kwargs["trace_enabled"] = _env_bool(env.get("KEYEDSTORE_TRACE_ENABLED"), False)

        max_string_env = env.get("KEYEDSTORE_TRACE_MAX_STRING")
        if max_string_env is not None and "trace_max_string" not in overrides:
            try:
                config_kwargs["trace_max_string"] = int(max_string_env)
            except ValueError as exc:
                raise StoreConfigError(
                    f"KEYEDSTORE_TRACE_MAX_STRING must be an integer, got {max_string_env!r}"
                ) from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
