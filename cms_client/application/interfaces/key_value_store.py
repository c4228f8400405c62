"""Abstract persistence backend (port) for durable client-side state."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """String key → string value storage, one namespace per client profile."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Create or replace the value for a key."""
        ...

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is a no-op."""
        ...
