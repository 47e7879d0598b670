from __future__ import annotations

import pytest
from dependency_injector import providers

from cdnrelay.application.use_cases.asset_use_cases import UploadAssetUseCase
from cdnrelay.domain.entities.origin import OriginState
from cdnrelay.infrastructure.services import OriginHealthMonitor
from cdnrelay.main.config import AppSettings
from cdnrelay.main.container import app_lifespan, get_container, init_container


@pytest.fixture()
def settings(monkeypatch, tmp_path) -> AppSettings:
    monkeypatch.setenv("STORAGE_ASSETS_DIR", str(tmp_path / "buckets"))
    monkeypatch.setenv("MONITOR_INTERVAL_SECONDS", "60")
    return AppSettings()


def test_init_and_get_container(settings) -> None:
    container = init_container(settings)

    assert get_container() is container
    assert container.health_monitor() is container.health_monitor()
    assert [o.name for o in container.health_monitor().origins] == ["AWS", "Azure"]
    assert container.rule_engine().classify("a.css").critical is True
    assert isinstance(container.upload_asset_use_case(), UploadAssetUseCase)


def test_storage_and_manifest_share_directory(settings, tmp_path) -> None:
    container = init_container(settings)

    storage = container.asset_storage()
    manifest = container.manifest_repository()

    assert storage.root == (tmp_path / "buckets").resolve()
    assert manifest.path.parent.resolve() == storage.root


@pytest.mark.asyncio
async def test_app_lifespan_starts_and_stops_monitor(
    settings, origins, stub_probe_factory
) -> None:
    container = init_container(settings)
    probe = stub_probe_factory({"Azure": OriginState.HEALTHY})
    container.origin_probe.override(providers.Object(probe))

    async with app_lifespan() as yielded:
        monitor: OriginHealthMonitor = yielded.health_monitor()
        assert yielded is container
        assert monitor.running is True
        await monitor.run_cycle()
        assert monitor.snapshot()["Azure"].is_healthy

    assert monitor.running is False
