"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List

from dependency_injector import containers, providers

from cdnrelay.application.use_cases.asset_use_cases import (
    DeleteAssetUseCase,
    GetAssetContentUseCase,
    GetManifestUseCase,
    ListAssetsUseCase,
    LogicalAssetLocks,
    RebuildManifestUseCase,
    UploadAssetUseCase,
)
from cdnrelay.application.use_cases.health_use_cases import (
    GetAliveOriginUseCase,
    GetHealthStatusUseCase,
    StreamOriginStatusUseCase,
)
from cdnrelay.domain.entities.manifest import Rule
from cdnrelay.domain.entities.origin import Origin
from cdnrelay.domain.services.asset_naming import ContentAddressedNamer
from cdnrelay.domain.services.rule_engine import RuleEngine
from cdnrelay.infrastructure.repositories import (
    FilesystemAssetStorage,
    JsonManifestRepository,
)
from cdnrelay.infrastructure.services import (
    HttpOriginProbe,
    OriginHealthMonitor,
    StatusBroadcaster,
)
from cdnrelay.shared import get_logger

from .config import AppSettings, OriginConfig, RuleConfig

logger = get_logger(__name__)


def _build_origins(origins: List[Dict[str, Any]]) -> List[Origin]:
    return [OriginConfig.model_validate(item).to_domain() for item in origins]


def _build_rules(rules: List[Dict[str, Any]]) -> List[Rule]:
    return [RuleConfig.model_validate(item).to_domain() for item in rules]


def _manifest_path(assets_dir: str, manifest_filename: str) -> str:
    return str(Path(assets_dir) / manifest_filename)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Domain services
    rule_engine = providers.Singleton(
        RuleEngine,
        rules=providers.Callable(_build_rules, config.rules.rules),
    )

    namer = providers.Singleton(ContentAddressedNamer)

    # Infrastructure
    asset_storage = providers.Singleton(
        FilesystemAssetStorage,
        assets_dir=config.storage.assets_dir,
        manifest_filename=config.storage.manifest_filename,
    )

    manifest_repository = providers.Singleton(
        JsonManifestRepository,
        manifest_path=providers.Callable(
            _manifest_path,
            config.storage.assets_dir,
            config.storage.manifest_filename,
        ),
        rule_engine=rule_engine,
        namer=namer,
        reserved_names=config.storage.reserved_names,
    )

    status_broadcaster = providers.Singleton(
        StatusBroadcaster,
        buffer_size=config.monitor.subscriber_buffer_size,
    )

    origin_probe = providers.Singleton(
        HttpOriginProbe,
        connect_timeout=config.monitor.connect_timeout_seconds,
        http_timeout=config.monitor.probe_timeout_seconds,
    )

    health_monitor = providers.Singleton(
        OriginHealthMonitor,
        origins=providers.Callable(_build_origins, config.monitor.origins),
        probe=origin_probe,
        publisher=status_broadcaster,
        interval=config.monitor.interval_seconds,
    )

    asset_locks = providers.Singleton(LogicalAssetLocks)

    # Application (use cases)
    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_monitor=health_monitor,
    )

    get_alive_origin_use_case = providers.Factory(
        GetAliveOriginUseCase,
        health_monitor=health_monitor,
    )

    stream_origin_status_use_case = providers.Factory(
        StreamOriginStatusUseCase,
        health_monitor=health_monitor,
        broadcaster=status_broadcaster,
    )

    upload_asset_use_case = providers.Factory(
        UploadAssetUseCase,
        asset_storage=asset_storage,
        manifest_repository=manifest_repository,
        rule_engine=rule_engine,
        namer=namer,
        locks=asset_locks,
    )

    delete_asset_use_case = providers.Factory(
        DeleteAssetUseCase,
        asset_storage=asset_storage,
        manifest_repository=manifest_repository,
        namer=namer,
        locks=asset_locks,
    )

    list_assets_use_case = providers.Factory(
        ListAssetsUseCase,
        asset_storage=asset_storage,
    )

    get_asset_content_use_case = providers.Factory(
        GetAssetContentUseCase,
        asset_storage=asset_storage,
    )

    get_manifest_use_case = providers.Factory(
        GetManifestUseCase,
        manifest_repository=manifest_repository,
    )

    rebuild_manifest_use_case = providers.Factory(
        RebuildManifestUseCase,
        asset_storage=asset_storage,
        manifest_repository=manifest_repository,
        locks=asset_locks,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for long-running resources.

    Loads the asset store and the persisted manifest, then keeps the
    origin health monitor running for as long as the application lives.
    """
    container = get_container()

    asset_storage = container.asset_storage()
    manifest_repository = container.manifest_repository()
    health_monitor = container.health_monitor()

    logger.info(
        "container.storage.ready",
        assets_dir=str(asset_storage.root),
        manifest_entries=len(manifest_repository.list()),
    )

    try:
        health_monitor.start()
        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.monitor.stop")
        await health_monitor.stop()
        logger.info("container.resources.shutdown")
