"""
Key-value persistence port.

Session-scoped state that must survive restarts (the admin credential, the
admin conversation and notes) is stored as JSON strings under fixed keys.
Any backing that can get, set and remove a string by key satisfies the port.

Concrete implementations: 'InMemoryKeyValueStore', 'JsonFileKeyValueStore'.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract string-to-string store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass
