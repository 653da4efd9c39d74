"""
Canonical value normalization for listing diffs.

Two values are considered equal by the diff engine iff their normalized
strings are byte-identical. Normalization:

- unwraps document/record wrappers into plain data
- strips internal identifier keys (``__v``, ``_id``, ``id``) at every level
- sorts mapping keys at every level (sequence order is preserved)
- serializes structured values to compact JSON

Raw structured values must never be compared directly.
"""

import dataclasses
import json
import math
from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum, auto
from typing import Any

# Keys inserted by the persistence layer; never semantic
INTERNAL_ID_KEYS = frozenset({"__v", "_id", "id"})

NULL_MARKER = "null"

# Explicit plain-data conversions, tried in order
_PLAIN_DATA_METHODS = ("to_dict", "model_dump", "to_mongo")


class ValueKind(Enum):
    """Shape of a field value after unwrapping."""
    ABSENT = auto()     # None / missing key
    PRIMITIVE = auto()  # str, number, bool and other scalars
    SEQUENCE = auto()   # list, tuple, set
    RECORD = auto()     # mapping


def to_plain(value: Any) -> Any:
    """
    Unwrap a rich value into plain data.

    Dataclass instances and objects exposing an explicit conversion
    (``to_dict()``, ``model_dump()``, ``to_mongo()``) are converted; every
    other value is returned unchanged. Conversion errors leave the value
    as-is.
    """
    if value is None or isinstance(value, (str, bytes, int, float, Mapping, list, tuple)):
        return value

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)

    for method_name in _PLAIN_DATA_METHODS:
        method = getattr(value, method_name, None)
        if callable(method):
            try:
                return method()
            except Exception:
                continue

    return value


def value_kind(value: Any) -> ValueKind:
    """Classify a value into its ValueKind (after unwrapping)."""
    plain = to_plain(value)

    if plain is None:
        return ValueKind.ABSENT
    if isinstance(plain, Mapping):
        return ValueKind.RECORD
    if isinstance(plain, (list, tuple, set, frozenset)):
        return ValueKind.SEQUENCE
    return ValueKind.PRIMITIVE


def _format_number(value: Any) -> Any:
    # 3.0 and 3 are the same value once persisted as JSON
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        if value.is_integer():
            return int(value)
    return value


def _key_text(key: Any) -> str:
    if isinstance(key, Enum):
        key = key.value
    return str(key)


def _canonicalize(value: Any) -> Any:
    """Recursively convert a value into a JSON-serializable canonical structure."""
    plain = to_plain(value)

    if isinstance(plain, Enum):
        plain = plain.value

    if plain is None or isinstance(plain, (str, bool)):
        return plain

    if isinstance(plain, (int, float)):
        return _format_number(plain)

    if isinstance(plain, Mapping):
        canonical = {}
        for k, v in plain.items():
            key = _key_text(k)
            if key in INTERNAL_ID_KEYS:
                continue
            item = _canonicalize(v)
            # Keys that collide once stringified (1 and "1") keep the value
            # whose serialization sorts last, whatever the insertion order
            if key in canonical and _dumps(canonical[key]) >= _dumps(item):
                continue
            canonical[key] = item
        return {k: canonical[k] for k in sorted(canonical)}

    if isinstance(plain, (list, tuple)):
        return [_canonicalize(item) for item in plain]

    if isinstance(plain, (set, frozenset)):
        members = [_canonicalize(item) for item in plain]
        return sorted(members, key=_dumps)

    return _scalar_text(plain)


def _scalar_text(value: Any) -> str:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def _primitive_text(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        # NaN and infinities must not collide with an absent value
        if not math.isfinite(value):
            return str(value)
        return str(_format_number(value))
    if isinstance(value, str):
        return value
    return _scalar_text(value)


def normalize(value: Any) -> str:
    """
    Normalize a value into a comparison-stable string.

    Args:
        value: Any field value (None, scalar, mapping, sequence or wrapper)

    Returns:
        ``"null"`` for absent values, the string form of scalars, or compact
        key-sorted JSON (internal identifier keys removed) for structures

    Example:
        >>> normalize({"b": 1, "a": [{"_id": "x", "n": 2.0}]})
        '{"a":[{"n":2}],"b":1}'
    """
    kind = value_kind(value)

    if kind is ValueKind.ABSENT:
        return NULL_MARKER
    if kind is ValueKind.PRIMITIVE:
        return _primitive_text(to_plain(value))
    return _dumps(_canonicalize(value))
