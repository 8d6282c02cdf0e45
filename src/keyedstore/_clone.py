"""Deep-copy collaborator and record coercion."""

from __future__ import annotations

import copy
from collections.abc import Callable, Hashable, Mapping
from typing import Any

from pydantic import BaseModel

Cloner = Callable[[Any], Any]

Record = Mapping[Hashable, Any] | BaseModel


def deep_clone(value: Any) -> Any:
    """Return a structurally equal copy of *value* sharing no mutable state."""
    return copy.deepcopy(value)


def as_record(data: Record) -> dict[Hashable, Any]:
    """Return *data* as a plain dict.

    Pydantic models are dumped with ``model_dump()``; mappings are shallow
    copied into a new dict.  Values are not copied here.
    """
    if isinstance(data, BaseModel):
        return data.model_dump()
    return dict(data)


def clone_record(data: Record, clone: Cloner = deep_clone) -> dict[Hashable, Any]:
    return clone(as_record(data))
