"""Conversion of generated payloads to plain JSON-compatible data."""

import dataclasses
import json
from enum import Enum
from typing import Any

from pydantic import BaseModel


def to_jsonable(obj: Any) -> Any:
    """Recursively convert payloads to dict/list/str/int/float/bool/None.

    Capability descriptors are dumped with their wire keys (``type``) and
    without unset fields. Dict keys become strings, as JSON requires.
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(by_alias=True, exclude_none=True, mode="json")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, list | tuple | set):
        return [to_jsonable(v) for v in obj]
    return obj


def dumps(obj: Any, indent: int | None = 4) -> str:
    """Stable JSON text (sorted keys) for a payload."""
    return json.dumps(to_jsonable(obj), indent=indent, sort_keys=True)
