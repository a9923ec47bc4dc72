"""
Deterministic encoding of combinations (internal).

Provides a canonical JSON form and a short fingerprint used as the stable
``case_id`` of each combination.

Key design decisions:
- Floats use repr() for full precision, so 0.1 and 0.1000000000000001 differ
- NaN and infinities are encoded by name instead of rejected
- Enum members, floats, Decimals and bytes are tagged so they cannot
  collide with plain strings
- Values of any other type fall back to their type name and repr()
"""

from __future__ import annotations

import dataclasses
import enum
import hashlib
import json
from decimal import Decimal
from typing import Any


def _encode_value(obj: Any) -> Any:
    """Recursively encode a value for canonical JSON serialization."""
    if obj is None or isinstance(obj, bool):
        return obj
    if isinstance(obj, enum.Enum):
        return {"__enum__": f"{type(obj).__qualname__}.{obj.name}"}
    if isinstance(obj, int):
        return obj
    if isinstance(obj, float):
        # repr() keeps full precision and spells out nan/inf
        return {"__float__": repr(obj)}
    if isinstance(obj, Decimal):
        return {"__decimal__": str(obj)}
    if isinstance(obj, str):
        return obj
    if isinstance(obj, bytes):
        return {"__bytes__": obj.hex()}
    if isinstance(obj, (list, tuple)):
        return [_encode_value(item) for item in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted((_encode_value(item) for item in obj), key=canonical)
    if isinstance(obj, dict):
        return {str(k): _encode_value(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _encode_value(dataclasses.asdict(obj))

    return {"__repr__": f"{type(obj).__qualname__}:{obj!r}"}


def canonical(obj: Any) -> str:
    """
    Convert an object to a canonical JSON string.

    Example:
        >>> canonical({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    encoded = _encode_value(obj)
    return json.dumps(encoded, sort_keys=True, separators=(",", ":"))


def fingerprint(obj: Any) -> str:
    """
    Compute a stable fingerprint of an object.

    Uses SHA-256 of the canonical representation, truncated to 16 hex
    characters.
    """
    canonical_str = canonical(obj)
    hash_bytes = hashlib.sha256(canonical_str.encode("utf-8")).digest()
    return hash_bytes.hex()[:16]
