"""
Repositories Package

This package contains interfaces defining repository contracts
for data access operations. Specific implementations are provided
by the infrastructure layer.
"""

from .asset_storage import IAssetStorage
from .manifest_repository import IManifestRepository

__all__ = ["IAssetStorage", "IManifestRepository"]
