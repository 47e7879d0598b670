"""
JSON Manifest Repository - Infrastructure Layer

This module implements the ManifestRepository interface on top of a
JSON file stored next to the assets it describes.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from cdnrelay.domain.entities.manifest import DeliveryAttributes, ManifestEntry
from cdnrelay.domain.repositories.manifest_repository import IManifestRepository
from cdnrelay.domain.services.asset_naming import ContentAddressedNamer
from cdnrelay.domain.services.rule_engine import RuleEngine
from cdnrelay.shared import MANIFEST_FILENAME, PROBE_FILENAME, get_logger

logger = get_logger(__name__)


class JsonManifestRepository(IManifestRepository):
    """File-backed manifest; the whole file is rewritten on every change."""

    def __init__(
        self,
        manifest_path: str,
        rule_engine: RuleEngine,
        namer: ContentAddressedNamer,
        reserved_names: Iterable[str] = (PROBE_FILENAME,),
    ):
        """
        Initialize the repository and load the persisted manifest.

        Args:
            manifest_path: Location of the JSON manifest file
            rule_engine: Classifier used when rebuilding
            namer: Resolves content-addressed names to logical names
            reserved_names: File names never listed in the manifest
        """
        self.path = Path(manifest_path)
        self._rule_engine = rule_engine
        self._namer = namer
        self._excluded = {self.path.name, MANIFEST_FILENAME, *reserved_names}
        self._entries: Dict[str, ManifestEntry] = self._load()

    def _load(self) -> Dict[str, ManifestEntry]:
        if not self.path.exists():
            return {}
        try:
            documents = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(documents, list):
                raise ValueError("manifest root must be a list")
            entries = [ManifestEntry.from_document(doc) for doc in documents]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning(
                "manifest.load.malformed", path=str(self.path), error=str(exc)
            )
            return {}

        logger.info("manifest.loaded", path=str(self.path), entries=len(entries))
        return {entry.asset_id: entry for entry in entries}

    def _save(self) -> None:
        documents: List[Dict[str, Any]] = [
            entry.to_document() for entry in self._entries.values()
        ]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(documents, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def upsert(self, asset_id: str, attributes: DeliveryAttributes) -> ManifestEntry:
        logical = self._namer.logical_name(asset_id)
        superseded = [
            existing
            for existing in self._entries
            if existing != asset_id and self._namer.logical_name(existing) == logical
        ]
        for existing in superseded:
            del self._entries[existing]

        entry = ManifestEntry.from_attributes(asset_id, attributes)
        self._entries.pop(asset_id, None)
        self._entries[asset_id] = entry
        self._save()

        logger.info(
            "manifest.entry.upserted",
            asset_id=asset_id,
            superseded=superseded,
            critical=entry.critical,
            mode=entry.mode.value,
        )
        return entry

    def remove(self, asset_id: str) -> None:
        if self._entries.pop(asset_id, None) is None:
            return
        self._save()
        logger.info("manifest.entry.removed", asset_id=asset_id)

    def rebuild_from_disk(self, file_names: Iterable[str]) -> List[ManifestEntry]:
        entries = [
            ManifestEntry.from_attributes(name, self._rule_engine.classify(name))
            for name in file_names
            if name not in self._excluded
        ]
        self._entries = {entry.asset_id: entry for entry in entries}
        self._save()
        logger.info("manifest.rebuilt", entries=len(entries))
        return list(entries)

    def list(self) -> List[ManifestEntry]:
        return [
            entry
            for entry in self._entries.values()
            if entry.asset_id not in self._excluded
        ]

    def get(self, asset_id: str) -> Optional[ManifestEntry]:
        return self._entries.get(asset_id)
