# cookbook/client/storage/base.py
"""
Abstract base class for client-side key/value storage.
This interface stands in for browser local storage so state can be injected.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for string key/value persistence.

    Implementations:
    - MemoryKeyValueStore: per-instance dict, for tests
    - JsonFileKeyValueStore: single JSON file on disk

    Implementations raise StorageError when the backend is unavailable.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read a value.

        Returns:
            The stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        pass
