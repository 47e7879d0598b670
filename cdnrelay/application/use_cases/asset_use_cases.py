"""
Asset Use Cases - Application Layer

This module defines use cases for storing, deleting and listing assets
and for reading or rebuilding the delivery manifest. Every mutation
keeps the asset store and the manifest consistent.
"""

import asyncio
import mimetypes
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Tuple

from cdnrelay.application.dtos.manifest_dto import (
    AssetFileDTO,
    AssetUploadDTO,
    ManifestEntryDTO,
)
from cdnrelay.domain.entities.errors import AssetValidationError
from cdnrelay.domain.entities.manifest import DeliveryAttributes
from cdnrelay.domain.repositories.asset_storage import IAssetStorage
from cdnrelay.domain.repositories.manifest_repository import IManifestRepository
from cdnrelay.domain.services.asset_naming import ContentAddressedNamer
from cdnrelay.domain.services.rule_engine import RuleEngine
from cdnrelay.shared import get_logger

logger = get_logger(__name__)


class LogicalAssetLocks:
    """
    Serialise mutations of the asset store.

    Uploads and deletes hold the lock of their logical name, so mutations
    of different assets still run concurrently. A rebuild holds the store
    exclusively: it waits for running mutations to finish and keeps new
    ones out until it is done. A name's lock is dropped once nobody holds
    or waits for it.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}
        self._holders: Dict[str, int] = {}
        self._active = 0
        self._exclusive = False
        self._state = asyncio.Condition()

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def for_name(self, logical_name: str) -> AsyncIterator[None]:
        async with self._state:
            await self._state.wait_for(lambda: not self._exclusive)
            self._active += 1

        lock = self._locks.setdefault(logical_name, asyncio.Lock())
        self._holders[logical_name] = self._holders.get(logical_name, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[logical_name] -= 1
            if not self._holders[logical_name]:
                del self._holders[logical_name]
                del self._locks[logical_name]
            async with self._state:
                self._active -= 1
                self._state.notify_all()

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator[None]:
        async with self._state:
            await self._state.wait_for(lambda: not self._exclusive)
            self._exclusive = True
            try:
                await self._state.wait_for(lambda: self._active == 0)
            except BaseException:
                self._exclusive = False
                self._state.notify_all()
                raise
        try:
            yield
        finally:
            async with self._state:
                self._exclusive = False
                self._state.notify_all()


class UploadAssetUseCase:
    """Store a new version of an asset and record its delivery attributes."""

    def __init__(
        self,
        asset_storage: IAssetStorage,
        manifest_repository: IManifestRepository,
        rule_engine: RuleEngine,
        namer: ContentAddressedNamer,
        locks: LogicalAssetLocks,
    ):
        self.asset_storage = asset_storage
        self.manifest_repository = manifest_repository
        self.rule_engine = rule_engine
        self.namer = namer
        self.locks = locks

    def _resolve_attributes(
        self, filename: str, overrides: AssetUploadDTO
    ) -> DeliveryAttributes:
        derived = self.rule_engine.classify(filename)
        return DeliveryAttributes(
            critical=(
                derived.critical if overrides.critical is None else overrides.critical
            ),
            mode=overrides.mode or derived.mode,
            priority=overrides.priority or derived.priority,
        )

    async def execute(
        self,
        filename: str,
        content: bytes,
        overrides: Optional[AssetUploadDTO] = None,
    ) -> ManifestEntryDTO:
        """
        Store ``content`` under a content-addressed name.

        The manifest entries of older physical versions of the same logical
        asset are superseded, and their files deleted, only once the new
        version is stored.

        Raises:
            AssetValidationError: If the file is empty or its name is invalid
            AssetStorageError: If the new version cannot be written
        """
        if not content:
            raise AssetValidationError("Uploaded file is empty", {"name": filename})

        asset_id = self.namer.name_for(filename, content)
        logical = self.namer.logical_name(asset_id)
        attributes = self._resolve_attributes(filename, overrides or AssetUploadDTO())

        async with self.locks.for_name(logical):
            names = await asyncio.to_thread(self.asset_storage.list_names)
            stale = [
                name
                for name in names
                if name != asset_id and self.namer.logical_name(name) == logical
            ]

            await asyncio.to_thread(self.asset_storage.save, asset_id, content)
            entry = self.manifest_repository.upsert(asset_id, attributes)

            for name in stale:
                await asyncio.to_thread(self.asset_storage.delete, name)

        logger.info(
            "assets.upload.completed",
            original_name=filename,
            asset_id=asset_id,
            replaced=stale,
        )
        return ManifestEntryDTO.from_domain(entry)


class DeleteAssetUseCase:
    """Delete a stored asset together with its manifest entry."""

    def __init__(
        self,
        asset_storage: IAssetStorage,
        manifest_repository: IManifestRepository,
        namer: ContentAddressedNamer,
        locks: LogicalAssetLocks,
    ):
        self.asset_storage = asset_storage
        self.manifest_repository = manifest_repository
        self.namer = namer
        self.locks = locks

    async def execute(self, asset_id: str) -> None:
        """
        Raises:
            AssetNotFoundError: If the asset is not stored
        """
        async with self.locks.for_name(self.namer.logical_name(asset_id)):
            await asyncio.to_thread(self.asset_storage.delete, asset_id)
            self.manifest_repository.remove(asset_id)
        logger.info("assets.delete.completed", asset_id=asset_id)


class ListAssetsUseCase:
    """List stored asset files."""

    def __init__(self, asset_storage: IAssetStorage):
        self.asset_storage = asset_storage

    async def execute(self) -> List[AssetFileDTO]:
        names = await asyncio.to_thread(self.asset_storage.list_names)
        return [AssetFileDTO.for_name(name) for name in names]


class GetAssetContentUseCase:
    """Read a stored asset and guess its media type."""

    def __init__(self, asset_storage: IAssetStorage):
        self.asset_storage = asset_storage

    async def execute(self, asset_id: str) -> Tuple[bytes, str]:
        content = await asyncio.to_thread(self.asset_storage.read, asset_id)
        media_type, _ = mimetypes.guess_type(asset_id)
        return content, media_type or "application/octet-stream"


class GetManifestUseCase:
    """Return the delivery manifest in manifest order."""

    def __init__(self, manifest_repository: IManifestRepository):
        self.manifest_repository = manifest_repository

    async def execute(self) -> List[ManifestEntryDTO]:
        return [
            ManifestEntryDTO.from_domain(entry)
            for entry in self.manifest_repository.list()
        ]


class RebuildManifestUseCase:
    """Re-derive every manifest entry from the files currently stored."""

    def __init__(
        self,
        asset_storage: IAssetStorage,
        manifest_repository: IManifestRepository,
        locks: LogicalAssetLocks,
    ):
        self.asset_storage = asset_storage
        self.manifest_repository = manifest_repository
        self.locks = locks

    async def execute(self) -> List[ManifestEntryDTO]:
        async with self.locks.exclusive():
            names = await asyncio.to_thread(self.asset_storage.list_names)
            entries = self.manifest_repository.rebuild_from_disk(names)
        logger.info("manifest.rebuild.completed", entries=len(entries))
        return [ManifestEntryDTO.from_domain(entry) for entry in entries]
