"""Key-value persistence interface."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Durable string storage addressed by fixed keys."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if nothing was saved under key."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...
