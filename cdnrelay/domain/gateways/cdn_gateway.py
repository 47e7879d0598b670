"""
CDN Gateway Interface - Domain Layer

This module defines the interface the asset loader uses to query the
relay server for the preferred origin and the delivery manifest.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from cdnrelay.domain.entities.manifest import ManifestEntry


class ICdnGateway(ABC):
    """Interface for the relay server's public query endpoints."""

    @abstractmethod
    async def get_alive_origin(self) -> Optional[str]:
        """
        Retrieve the base URL of the preferred healthy origin.

        Returns:
            The origin base URL, or None when no origin is healthy

        Raises:
            Exception: If communication with the relay server fails
        """
        pass

    @abstractmethod
    async def get_manifest(self) -> List[ManifestEntry]:
        """
        Retrieve the delivery manifest in manifest order.

        Raises:
            Exception: If communication with the relay server fails
        """
        pass
