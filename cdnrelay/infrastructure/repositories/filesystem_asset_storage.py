"""
Filesystem Asset Storage - Infrastructure Layer

Stores asset files flat in a single directory.
"""

import os
from pathlib import Path
from typing import List

from cdnrelay.domain.entities.errors import AssetNotFoundError, AssetStorageError
from cdnrelay.domain.repositories.asset_storage import IAssetStorage
from cdnrelay.domain.services.asset_naming import validate_asset_name
from cdnrelay.shared import MANIFEST_FILENAME, get_logger

logger = get_logger(__name__)


class FilesystemAssetStorage(IAssetStorage):
    """Directory-backed implementation of IAssetStorage."""

    def __init__(self, assets_dir: str, manifest_filename: str = MANIFEST_FILENAME):
        """
        Initialize the storage, creating the directory if needed.

        Args:
            assets_dir: Directory holding the asset files
            manifest_filename: File name reserved for the persisted manifest
        """
        self.root = Path(assets_dir).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self._manifest_filename = manifest_filename

    def _path(self, asset_id: str) -> Path:
        return self.root / validate_asset_name(asset_id)

    def save(self, asset_id: str, content: bytes) -> None:
        path = self._path(asset_id)
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            tmp_path.write_bytes(content)
            os.replace(tmp_path, path)
        except OSError as exc:
            raise AssetStorageError(
                f"Failed to store asset {asset_id}", {"error": str(exc)}
            ) from exc
        logger.info("storage.asset.saved", asset_id=asset_id, size=len(content))

    def read(self, asset_id: str) -> bytes:
        path = self._path(asset_id)
        if not path.is_file():
            raise AssetNotFoundError(asset_id)
        return path.read_bytes()

    def delete(self, asset_id: str) -> None:
        path = self._path(asset_id)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise AssetNotFoundError(asset_id) from exc
        logger.info("storage.asset.deleted", asset_id=asset_id)

    def exists(self, asset_id: str) -> bool:
        return self._path(asset_id).is_file()

    def list_names(self) -> List[str]:
        return sorted(
            entry.name
            for entry in self.root.iterdir()
            if entry.is_file()
            and entry.name != self._manifest_filename
            and not entry.name.startswith(".")
        )
