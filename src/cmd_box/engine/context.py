"""Shared execution context for an interpreter and its commands."""

import copy
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from cmd_box.exceptions import ContextKeyError


class ExecutionContext:
    """Key/value store shared by the host and the commands it runs.

    The host may enumerate the keys commands are allowed to write. Without
    an enumeration every key is accepted. Values are not type-checked.

    Example:
        ctx = ExecutionContext({"x": 1}, keys=["x", "y"])
        ctx.set("y", 2)
        ctx.set("z", 3)  # raises ContextKeyError
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        keys: Iterable[str] | None = None,
    ) -> None:
        self._keys: frozenset[str] | None = frozenset(keys) if keys is not None else None
        self._data: dict[str, Any] = {}
        for key, value in (data or {}).items():
            self.set(key, value)

    @property
    def keys(self) -> frozenset[str] | None:
        """The declared keys, or None when any key is accepted."""
        return self._keys

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._check_key(key)
        self._data[key] = value

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        self._check_key(key)
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of the current values."""
        return copy.deepcopy(self._data)

    def _check_key(self, key: str) -> None:
        if self._keys is not None and key not in self._keys:
            raise ContextKeyError(
                f"Context key '{key}' is not declared "
                f"(declared: {', '.join(sorted(self._keys))})"
            )

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data!r})"
