from abc import ABC, abstractmethod


class StorageBackend(ABC):
    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        """Save data and return the storage path."""
        ...
