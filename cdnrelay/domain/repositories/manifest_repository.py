"""
Manifest Repository Interface

This module defines the interface for the durable store of delivery
metadata, keyed by content-addressed asset name.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from cdnrelay.domain.entities.manifest import DeliveryAttributes, ManifestEntry


class IManifestRepository(ABC):
    """Interface for Manifest repository implementations."""

    @abstractmethod
    def upsert(self, asset_id: str, attributes: DeliveryAttributes) -> ManifestEntry:
        """
        Insert or replace the entry for an asset.

        Any other entry sharing the same logical base name is removed, so a
        logical asset maps to exactly one physical file.

        Args:
            asset_id: Content-addressed asset name
            attributes: Delivery attributes to store

        Returns:
            The stored entry
        """
        pass

    @abstractmethod
    def remove(self, asset_id: str) -> None:
        """Delete the entry for an asset; absent entries are ignored."""
        pass

    @abstractmethod
    def rebuild_from_disk(self, file_names: Iterable[str]) -> List[ManifestEntry]:
        """
        Recompute the whole manifest from the current stored files.

        Args:
            file_names: Names of every file currently in the asset store

        Returns:
            The rebuilt entries
        """
        pass

    @abstractmethod
    def list(self) -> List[ManifestEntry]:
        """Return entries in insertion order."""
        pass

    @abstractmethod
    def get(self, asset_id: str) -> Optional[ManifestEntry]:
        """Return the entry for an asset, if any."""
        pass
