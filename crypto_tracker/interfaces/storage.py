"""Key-value store protocol — persistent string storage abstraction."""
from typing import Protocol


class KeyValueStore(Protocol):
    """Abstract interface for a small persistent string-to-string store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...
