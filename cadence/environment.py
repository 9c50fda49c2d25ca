"""
Session-scoped key/value store shared by every node of an Expect instance.

Environment is the store itself. It is guarded by a lock so one instance
can be shared between sessions running in different threads.

BoundEnvironment is what tests actually use (via Expect.env() or
Node.env()): it reads and writes the same store, but reports a missing
key or a wrongly typed value as an assertion failure on the chain it is
bound to, instead of raising.
"""

from __future__ import annotations

import fnmatch
import numbers
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from .assertions.models import AssertionType

if TYPE_CHECKING:
    from .assertions.chain import Chain


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Environment:
    """
    Thread-safe store for arbitrary test data.

    Example:
        env = Environment({"token": "abc"})
        env.put("user_id", 42)
        value, found = env.lookup("user_id")
    """

    def __init__(self, data: dict[str, Any] | None = None):
        self._lock = threading.RLock()
        self._data: dict[str, Any] = dict(data or {})

    def put(self, key: str, value: Any) -> None:
        """Store a value, overwriting any previous one."""
        with self._lock:
            self._data[key] = value

    def lookup(self, key: str) -> tuple[Any, bool]:
        """Return (value, True) if the key exists, (None, False) otherwise."""
        with self._lock:
            if key in self._data:
                return self._data[key], True
            return None, False

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        """All keys, sorted."""
        with self._lock:
            return sorted(self._data)

    def glob(self, pattern: str) -> list[str]:
        """Keys matching a shell-style pattern, sorted."""
        return fnmatch.filter(self.keys(), pattern)

    def snapshot(self) -> dict[str, Any]:
        """Shallow copy of the store."""
        with self._lock:
            return dict(self._data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __repr__(self) -> str:
        return f"Environment(keys={self.keys()!r})"


class BoundEnvironment:
    """
    Environment view that reports access failures through a chain.

    Typed getters return the zero value of their type when the key is
    missing or holds a value of another type.
    """

    def __init__(self, environment: Environment, chain: Chain):
        self._environment = environment
        self._chain = chain

    @property
    def store(self) -> Environment:
        return self._environment

    def put(self, key: str, value: Any) -> None:
        self._environment.put(key, value)

    def has(self, key: str) -> bool:
        return self._environment.has(key)

    def delete(self, key: str) -> None:
        self._environment.delete(key)

    def keys(self) -> list[str]:
        return self._environment.keys()

    def glob(self, pattern: str) -> list[str]:
        return self._environment.glob(pattern)

    def get(self, key: str) -> Any:
        """Return the stored value; a missing key is reported as a failure."""
        with self._chain.scope("env.get", key) as chain:
            value, found = self._lookup(chain, key)
            return value if found else None

    def get_bool(self, key: str) -> bool:
        with self._chain.scope("env.get_bool", key) as chain:
            return self._typed(chain, key, (bool,), "bool", False)

    def get_int(self, key: str) -> int:
        with self._chain.scope("env.get_int", key) as chain:
            value, found = self._lookup(chain, key)
            if not found:
                return 0
            if isinstance(value, numbers.Integral) and not isinstance(value, bool):
                return int(value)
            if isinstance(value, float) and value.is_integer():
                return int(value)
            self._type_mismatch(chain, key, value, "int")
            return 0

    def get_float(self, key: str) -> float:
        with self._chain.scope("env.get_float", key) as chain:
            value, found = self._lookup(chain, key)
            if not found:
                return 0.0
            if isinstance(value, numbers.Real) and not isinstance(value, bool):
                return float(value)
            self._type_mismatch(chain, key, value, "float")
            return 0.0

    def get_string(self, key: str) -> str:
        with self._chain.scope("env.get_string", key) as chain:
            return self._typed(chain, key, (str,), "str", "")

    def get_bytes(self, key: str) -> bytes:
        with self._chain.scope("env.get_bytes", key) as chain:
            value = self._typed(chain, key, (bytes, bytearray), "bytes", b"")
            return bytes(value)

    def get_duration(self, key: str) -> timedelta:
        with self._chain.scope("env.get_duration", key) as chain:
            return self._typed(chain, key, (timedelta,), "timedelta", timedelta(0))

    def get_time(self, key: str) -> datetime:
        with self._chain.scope("env.get_time", key) as chain:
            return self._typed(chain, key, (datetime,), "datetime", _EPOCH)

    def _lookup(self, chain: Chain, key: str) -> tuple[Any, bool]:
        if not isinstance(key, str):
            chain.fail(
                AssertionType.USAGE,
                f"unexpected key of type {type(key).__name__}, expected str",
                actual=repr(key),
            )
            return None, False
        value, found = self._environment.lookup(key)
        if not found:
            chain.fail(
                AssertionType.CONTAINS_KEY,
                f"expected: environment contains key {key!r}",
                actual=self._environment.keys(),
                expected=key,
            )
        return value, found

    def _typed(
        self,
        chain: Chain,
        key: str,
        types: tuple[type, ...],
        type_name: str,
        zero: Any,
    ) -> Any:
        value, found = self._lookup(chain, key)
        if not found:
            return zero
        if not isinstance(value, types):
            self._type_mismatch(chain, key, value, type_name)
            return zero
        return value

    @staticmethod
    def _type_mismatch(chain: Chain, key: str, value: Any, type_name: str) -> None:
        chain.fail(
            AssertionType.TYPE,
            f"expected: environment value {key!r} is {type_name}",
            f"actual type: {type(value).__name__}",
            actual=repr(value),
        )


def load_environment(path: str | Path) -> Environment:
    """
    Create an Environment from the `env:` block of a YAML file.

    A file without an `env:` block yields an empty environment.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If `env:` is present but is not a mapping
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: file must contain a YAML object")
    env = data.get("env") or {}
    if not isinstance(env, dict):
        raise ValueError(f"{path}: 'env' must be an object (key-value pairs)")
    return Environment({str(k): v for k, v in env.items()})
