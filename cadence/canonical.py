"""
Canonical value form used for every equality check.

Values are reduced to a JSON-like tree before comparison:
    - records (dataclasses, namedtuples, objects with to_dict()) become dicts
    - enum members and subclasses of builtin types lose their alias
    - every real number becomes a float
    - empty sequences and mappings are treated as null

This is the same result as dumping the value to JSON and loading it back,
except that empty containers collapse to None.
"""

from __future__ import annotations

import base64
import dataclasses
import math
import numbers
from collections.abc import Mapping, Sequence
from decimal import Decimal
from enum import Enum
from typing import Any


class CanonicalizationError(TypeError):
    """Raised when a value has no canonical form."""

    def __init__(self, message: str, value: Any = None):
        self.value = value
        super().__init__(message)


def normalize(value: Any) -> Any:
    """
    Convert a value to a JSON-like tree, keeping empty containers.

    Nodes store their values in this form so that navigation still sees
    ``[]`` and ``{}`` as an array and an object.

    Raises:
        CanonicalizationError: If the value (or anything inside it) is unsupported
    """
    try:
        return _normalize(value)
    except RecursionError as e:
        raise CanonicalizationError("Value is self-referencing or nested too deeply", value) from e


def _normalize(value: Any) -> Any:
    if value is None:
        return None

    if isinstance(value, Enum):
        return _normalize(value.value)

    if isinstance(value, bool):
        return bool(value)

    if isinstance(value, numbers.Number):
        return _normalize_number(value)

    if isinstance(value, str):
        return str.__str__(value)

    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")

    if isinstance(value, Mapping):
        return {_normalize_key(k): _normalize(v) for k, v in value.items()}

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _normalize(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }

    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return {k: _normalize(v) for k, v in value._asdict().items()}

    if isinstance(value, Sequence):
        return [_normalize(v) for v in value]

    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return _normalize(to_dict())

    raise CanonicalizationError(
        f"Unsupported value of type {type(value).__name__}", value
    )


def canonicalize(value: Any) -> Any:
    """
    Reduce a value to its canonical form.

    Same as normalize(), plus every empty sequence or mapping becomes None.
    Idempotent: canonicalize(canonicalize(v)) == canonicalize(v).
    """
    return _collapse(normalize(value))


def equal(a: Any, b: Any) -> bool:
    """
    Compare two values by their canonical forms.

    Raises:
        CanonicalizationError: If either value is unsupported
    """
    return _equal_canonical(canonicalize(a), canonicalize(b))


def contains(container: list[Any], item: Any) -> bool:
    """Check whether a normalized list contains an item, canonically."""
    needle = canonicalize(item)
    return any(_equal_canonical(canonicalize(x), needle) for x in container)


def is_subset(subset: Any, value: Any) -> bool:
    """
    Check that every key of a subset mapping is present in value with a
    matching entry.

    Both arguments are normalized values, so an empty nested mapping is
    still a mapping and matches any mapping. Nested mappings are matched
    recursively, lists and scalars must be canonically equal.
    """
    if isinstance(subset, dict) and isinstance(value, dict):
        for key, sub in subset.items():
            if key not in value or not is_subset(sub, value[key]):
                return False
        return True
    return equal(subset, value)


def _normalize_number(value: numbers.Number) -> float:
    if not isinstance(value, (numbers.Real, Decimal)):
        raise CanonicalizationError(
            f"Unsupported number of type {type(value).__name__}", value
        )
    try:
        result = float(value)
    except (OverflowError, ValueError) as e:
        raise CanonicalizationError(f"Number is out of range: {e}", value) from e
    if math.isnan(result) or math.isinf(result):
        raise CanonicalizationError(f"Unsupported number: {result}", value)
    return result


def _normalize_key(key: Any) -> str:
    """Render a mapping key the way json.dumps does."""
    if isinstance(key, Enum):
        key = key.value
    if isinstance(key, str):
        return str.__str__(key)
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, numbers.Integral):
        return str(int(key))
    if isinstance(key, numbers.Real):
        return repr(_normalize_number(key))
    raise CanonicalizationError(
        f"Unsupported mapping key of type {type(key).__name__}", key
    )


def _collapse(value: Any) -> Any:
    if isinstance(value, dict):
        if not value:
            return None
        return {k: _collapse(v) for k, v in value.items()}
    if isinstance(value, list):
        if not value:
            return None
        return [_collapse(v) for v in value]
    return value


def _equal_canonical(a: Any, b: Any) -> bool:
    # bool is an int subclass, so check kinds before comparing
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b

    if isinstance(a, dict):
        if not isinstance(b, dict) or a.keys() != b.keys():
            return False
        return all(_equal_canonical(a[k], b[k]) for k in a)

    if isinstance(a, list):
        if not isinstance(b, list) or len(a) != len(b):
            return False
        return all(_equal_canonical(x, y) for x, y in zip(a, b))

    if isinstance(a, float):
        return isinstance(b, float) and a == b

    if isinstance(a, str):
        return isinstance(b, str) and a == b

    return a is None and b is None
