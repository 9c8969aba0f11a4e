"""Abstract key-value store interface."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """String-keyed document store holding serialized JSON values."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the backend."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize backend schema (create tables)."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the raw value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            StorageError: If the write could not be persisted
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove key. Removing an absent key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List all stored keys."""
        pass
