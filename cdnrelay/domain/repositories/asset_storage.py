"""
Asset Storage Interface

Physical storage of asset files, independent of delivery metadata.
"""

from abc import ABC, abstractmethod
from typing import List


class IAssetStorage(ABC):
    """Interface for asset file storage implementations."""

    @abstractmethod
    def save(self, asset_id: str, content: bytes) -> None:
        """Write ``content`` under ``asset_id``, replacing any existing file."""
        pass

    @abstractmethod
    def read(self, asset_id: str) -> bytes:
        """
        Read a stored asset.

        Raises:
            AssetNotFoundError: If the asset does not exist
        """
        pass

    @abstractmethod
    def delete(self, asset_id: str) -> None:
        """
        Delete a stored asset.

        Raises:
            AssetNotFoundError: If the asset does not exist
        """
        pass

    @abstractmethod
    def exists(self, asset_id: str) -> bool:
        pass

    @abstractmethod
    def list_names(self) -> List[str]:
        """Names of stored assets, sorted, excluding the manifest file."""
        pass
