"""
Loader Use Cases - Application Layer

Client-side orchestration of one page load: resolve the preferred origin
and the manifest, then hand both to the asset loader.
"""

import asyncio
from typing import List, Optional

from cdnrelay.application.dtos.loader_dto import LoadResultDTO, PageLoadReportDTO
from cdnrelay.domain.entities.manifest import ManifestEntry
from cdnrelay.domain.gateways.cdn_gateway import ICdnGateway
from cdnrelay.domain.services.asset_loader import AssetLoader
from cdnrelay.shared import get_logger

logger = get_logger(__name__)


class LoadPageAssetsUseCase:
    """Use case running one manifest-driven loader session."""

    def __init__(self, cdn_gateway: ICdnGateway, asset_loader: AssetLoader):
        """
        Initialize the use case with its dependencies.

        Args:
            cdn_gateway: Gateway to the relay server's query endpoints
            asset_loader: Loader injecting assets into the page document
        """
        self.cdn_gateway = cdn_gateway
        self.asset_loader = asset_loader

    async def _resolve_origin(self) -> Optional[str]:
        try:
            return await self.cdn_gateway.get_alive_origin()
        except Exception as e:
            logger.warning("loader.origin.unavailable", error=str(e))
            return None

    async def _resolve_manifest(self) -> List[ManifestEntry]:
        try:
            return await self.cdn_gateway.get_manifest()
        except Exception as e:
            logger.warning("loader.manifest.unavailable", error=str(e))
            return []

    async def execute(self, wait_for_optional: bool = True) -> PageLoadReportDTO:
        """
        Load every manifest entry.

        A failure to resolve the origin degrades to local-fallback-only
        loading; a failure to fetch the manifest loads nothing.

        Args:
            wait_for_optional: Also wait for the optional loads to finish
        """
        origin, entries = await asyncio.gather(
            self._resolve_origin(), self._resolve_manifest()
        )
        logger.info("loader.session.started", origin=origin, entries=len(entries))

        critical = await self.asset_loader.load(origin, entries)
        optional = await self.asset_loader.wait_optional() if wait_for_optional else []

        report = PageLoadReportDTO(
            origin=origin,
            critical=[LoadResultDTO.from_domain(r) for r in critical],
            optional=[LoadResultDTO.from_domain(r) for r in optional],
        )
        for result in report.failed:
            logger.warning(
                "loader.asset.failed",
                asset_id=result.asset_id,
                attempted=result.attempted_urls,
            )
        logger.info(
            "loader.session.completed",
            loaded=len(report.critical) + len(report.optional) - len(report.failed),
            failed=len(report.failed),
        )
        return report
