from __future__ import annotations

import json

import pytest

from cdnrelay.domain.entities.manifest import DeliveryAttributes, DeliveryMode
from cdnrelay.domain.services.asset_naming import ContentAddressedNamer
from cdnrelay.domain.services.rule_engine import RuleEngine
from cdnrelay.infrastructure.repositories.json_manifest_repository import (
    JsonManifestRepository,
)

SCRIPT_V1 = "app-000000000001.js"
SCRIPT_V2 = "app-000000000002.js"


@pytest.fixture()
def manifest_path(tmp_path):
    return tmp_path / "manifest.json"


def _repository(path) -> JsonManifestRepository:
    return JsonManifestRepository(str(path), RuleEngine(), ContentAddressedNamer())


def test_missing_file_loads_empty(manifest_path) -> None:
    assert _repository(manifest_path).list() == []


def test_malformed_file_loads_empty(manifest_path) -> None:
    manifest_path.write_text("{not json", encoding="utf-8")
    assert _repository(manifest_path).list() == []

    manifest_path.write_text(json.dumps({"hashed": "a.js"}), encoding="utf-8")
    assert _repository(manifest_path).list() == []


def test_upsert_persists_and_reloads(manifest_path) -> None:
    repository = _repository(manifest_path)
    repository.upsert(SCRIPT_V1, DeliveryAttributes(True, DeliveryMode.SYNC, 1))

    documents = json.loads(manifest_path.read_text(encoding="utf-8"))
    assert documents == [
        {"hashed": SCRIPT_V1, "critical": True, "mode": "sync", "priority": 1}
    ]

    reloaded = _repository(manifest_path)
    entry = reloaded.get(SCRIPT_V1)
    assert entry is not None
    assert entry.mode is DeliveryMode.SYNC


def test_upsert_supersedes_previous_version_of_logical_asset(manifest_path) -> None:
    repository = _repository(manifest_path)
    repository.upsert(SCRIPT_V1, DeliveryAttributes(True))
    repository.upsert("theme-000000000001.css", DeliveryAttributes(True))
    repository.upsert(SCRIPT_V2, DeliveryAttributes(False))

    ids = [entry.asset_id for entry in repository.list()]
    assert ids == ["theme-000000000001.css", SCRIPT_V2]


def test_remove_is_noop_for_unknown_entry(manifest_path) -> None:
    repository = _repository(manifest_path)
    repository.remove("missing.js")
    assert not manifest_path.exists()

    repository.upsert(SCRIPT_V1, DeliveryAttributes())
    repository.remove(SCRIPT_V1)
    assert repository.list() == []
    assert json.loads(manifest_path.read_text(encoding="utf-8")) == []


def test_rebuild_classifies_files_and_excludes_reserved_names(manifest_path) -> None:
    repository = _repository(manifest_path)
    names = ["manifest.json", "ping.txt", SCRIPT_V1, "logo-000000000001.png"]

    entries = repository.rebuild_from_disk(names)

    assert [e.asset_id for e in entries] == [SCRIPT_V1, "logo-000000000001.png"]
    assert entries[0].critical is True
    assert entries[0].mode is DeliveryMode.DEFER
    assert entries[1].critical is False
    assert entries[1].mode is DeliveryMode.SYNC


def test_rebuild_is_idempotent(manifest_path) -> None:
    repository = _repository(manifest_path)
    names = [SCRIPT_V1, "theme-000000000001.css"]

    repository.rebuild_from_disk(names)
    first = manifest_path.read_text(encoding="utf-8")
    repository.rebuild_from_disk(names)

    assert manifest_path.read_text(encoding="utf-8") == first


def test_list_hides_excluded_names_loaded_from_disk(manifest_path) -> None:
    manifest_path.write_text(
        json.dumps([{"hashed": "ping.txt"}, {"hashed": SCRIPT_V1}]),
        encoding="utf-8",
    )
    assert [e.asset_id for e in _repository(manifest_path).list()] == [SCRIPT_V1]
