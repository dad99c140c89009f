"""Key-value store interface and the in-memory backend."""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Protocol


class KeyValueStore(Protocol):
    """Namespaced get/set/delete access used by every handler."""

    namespace: str

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> bool: ...

    def keys(self) -> List[str]: ...


class InMemoryStore:
    """Dict-backed store; contents are lost when the process exits."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        self._data: Dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._data)


__all__ = ["InMemoryStore", "KeyValueStore"]
