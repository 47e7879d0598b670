"""httpx-backed asset fetcher used by the loader client."""

from __future__ import annotations

import httpx

from cdnrelay.domain.entities.asset import InjectedElement
from cdnrelay.domain.gateways.asset_fetcher import IAssetFetcher
from cdnrelay.shared import get_logger

logger = get_logger(__name__)


class HttpAssetFetcher(IAssetFetcher):
    """Treats an element as loaded when its URL answers with a 2xx status."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def fetch(self, element: InjectedElement) -> bool:
        try:
            response = await self._client.get(element.url)
        except httpx.HTTPError as exc:
            logger.warning(
                "loader.fetch.request_error", url=element.url, error=str(exc)
            )
            return False

        if not response.is_success:
            logger.warning(
                "loader.fetch.bad_status",
                url=element.url,
                status_code=response.status_code,
            )
            return False

        logger.debug(
            "loader.fetch.loaded",
            url=element.url,
            kind=element.kind.value,
            size=len(response.content),
        )
        return True
