"""Key-value storage abstractions."""

from dataclasses import dataclass, field
from typing import Protocol


class KeyValueStore(Protocol):
    """Storage interface for JSON-compatible values."""

    def get(self, key: str) -> object | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: object) -> None:
        """Store a value under a key, replacing any previous value."""

    def delete(self, key: str) -> None:
        """Remove a key if present."""

    def keys(self, prefix: str) -> list[str]:
        """Return all keys starting with a prefix."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store for development and tests."""

    _entries: dict[str, object] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        """Return a stored value."""
        return self._entries.get(key)

    def set(self, key: str, value: object) -> None:
        """Store a value."""
        self._entries[key] = value

    def delete(self, key: str) -> None:
        """Remove a key."""
        self._entries.pop(key, None)

    def keys(self, prefix: str) -> list[str]:
        """Return keys with the given prefix in insertion order."""
        return [key for key in self._entries if key.startswith(prefix)]


@dataclass
class NamespacedStore:
    """Builds app keys under a common prefix."""

    store: KeyValueStore
    prefix: str = "@nutriguide"

    def key(self, name: str) -> str:
        """Return the full key for a record name."""
        return f"{self.prefix}_{name}"

    def clear(self) -> int:
        """Delete every key under the prefix."""
        keys = self.store.keys(self.key(""))
        for key in keys:
            self.store.delete(key)
        return len(keys)
