from __future__ import annotations

import pytest

from keyedstore.config import StoreConfig
from keyedstore.exceptions import StoreConfigError


def test_defaults() -> None:
    config = StoreConfig()
    assert config.strict_destroy is True
    assert config.trace_enabled is False
    assert config.trace_max_string == 512


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KEYEDSTORE_STRICT_DESTROY", "off")
    monkeypatch.setenv("KEYEDSTORE_TRACE_ENABLED", "yes")
    monkeypatch.setenv("KEYEDSTORE_TRACE_MAX_STRING", "64")

    config = StoreConfig.from_env()

    assert config.strict_destroy is False
    assert config.trace_enabled is True
    assert config.trace_max_string == 64


def test_from_env_unrecognised_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KEYEDSTORE_STRICT_DESTROY", "maybe")
    assert StoreConfig.from_env().strict_destroy is True


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KEYEDSTORE_TRACE_ENABLED", "1")
    monkeypatch.setenv("KEYEDSTORE_TRACE_MAX_STRING", "64")

    config = StoreConfig.from_env(trace_enabled=False, trace_max_string=8)

    assert config.trace_enabled is False
    assert config.trace_max_string == 8


def test_from_env_invalid_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KEYEDSTORE_TRACE_MAX_STRING", "lots")
    with pytest.raises(StoreConfigError, match="KEYEDSTORE_TRACE_MAX_STRING"):
        StoreConfig.from_env()
