"""
Repositories Package - Infrastructure Layer

This package contains concrete implementations of the repository
interfaces defined in the domain layer. These implementations
handle the details of data persistence.
"""

from .filesystem_asset_storage import FilesystemAssetStorage
from .json_manifest_repository import JsonManifestRepository

__all__ = ["FilesystemAssetStorage", "JsonManifestRepository"]
