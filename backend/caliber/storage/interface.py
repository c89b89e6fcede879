"""
Storage Interface - Abstract base class for durable blob storage.
Entries are persisted as a single blob under one well-known key.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageInterface(ABC):
    """
    Abstract storage interface that defines the contract for all storage implementations.
    """

    @abstractmethod
    async def save(self, path: str, content: bytes | str) -> bool:
        """
        Save content to the specified path, replacing any previous content.

        Args:
            path: Relative key (e.g., "caliber_entries.json")
            content: Content to save (bytes for binary files or str for text)

        Returns:
            bool: True if save was successful, False otherwise
        """
        pass

    @abstractmethod
    async def load(self, path: str) -> Optional[bytes]:
        """
        Load content from the specified path.

        Args:
            path: Relative key to load from

        Returns:
            Optional[bytes]: Content as bytes, or None if it doesn't exist
        """
        pass
