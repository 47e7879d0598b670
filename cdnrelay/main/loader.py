#!/usr/bin/env python3
"""
Loader Entry Point - Main Layer

Runs one manifest-driven loader session against a relay server, the
way a page bootstraps its assets, and logs what was loaded from where.
"""

import asyncio

import httpx

from cdnrelay.application.dtos.loader_dto import PageLoadReportDTO
from cdnrelay.application.use_cases.loader_use_cases import LoadPageAssetsUseCase
from cdnrelay.domain.services.asset_loader import AssetLoader
from cdnrelay.infrastructure.gateways import HttpAssetFetcher, HttpCdnGateway
from cdnrelay.main.config import AppSettings, get_settings
from cdnrelay.shared import configure_logging, get_logger, update_logging_from_settings

logger = get_logger(__name__)


async def run_loader(settings: AppSettings) -> PageLoadReportDTO:
    """Compose the loader from settings and run a single session."""
    loader_settings = settings.loader
    gateway = HttpCdnGateway(
        server_url=loader_settings.server_url,
        timeout=loader_settings.timeout_seconds,
    )
    async with httpx.AsyncClient(timeout=loader_settings.timeout_seconds) as client:
        asset_loader = AssetLoader(
            fetcher=HttpAssetFetcher(client),
            local_fallback_base=loader_settings.fallback_base,
        )
        use_case = LoadPageAssetsUseCase(cdn_gateway=gateway, asset_loader=asset_loader)
        report = await use_case.execute()

    for result in [*report.critical, *report.optional]:
        logger.info(
            "loader.asset.result",
            asset_id=result.asset_id,
            outcome=result.outcome.value,
            url=result.url,
        )
    return report


def main() -> int:
    configure_logging()
    settings = get_settings()
    update_logging_from_settings(settings)

    report = asyncio.run(run_loader(settings))
    return 1 if report.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
