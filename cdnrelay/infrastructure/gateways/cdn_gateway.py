"""Relay server gateway implementation - Infrastructure layer."""

from __future__ import annotations

from typing import List, Optional

import httpx

from cdnrelay.domain.entities.manifest import ManifestEntry
from cdnrelay.domain.gateways.cdn_gateway import ICdnGateway
from cdnrelay.shared import get_logger

logger = get_logger(__name__)


class HttpCdnGateway(ICdnGateway):
    """HTTP client for the relay server's query endpoints."""

    ALIVE_ORIGIN_PATH = "/api/alive-cdn.json"
    MANIFEST_PATH = "/api/manifest.json"

    def __init__(self, server_url: str, timeout: float = 5.0):
        """
        Initialize the gateway.

        Args:
            server_url: Base URL of the relay server
            timeout: Timeout in seconds for each request
        """
        self.server_url = server_url.rstrip("/")
        self.timeout = timeout

    async def _get_json(self, path: str) -> object:
        url = f"{self.server_url}{path}"
        headers = {"Cache-Control": "no-store"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "cdn_gateway.http_error",
                status_code=e.response.status_code,
                url=url,
            )
            raise Exception(
                f"Relay server returned HTTP {e.response.status_code} for {path}"
            ) from e

        except httpx.RequestError as e:
            logger.error("cdn_gateway.request_error", error=str(e), url=url)
            raise Exception(f"Failed to communicate with relay server: {e}") from e

    async def get_alive_origin(self) -> Optional[str]:
        data = await self._get_json(self.ALIVE_ORIGIN_PATH)
        if not isinstance(data, dict):
            raise Exception("Unexpected alive origin payload")
        url = data.get("url")
        return str(url) if url else None

    async def get_manifest(self) -> List[ManifestEntry]:
        data = await self._get_json(self.MANIFEST_PATH)
        if not isinstance(data, list):
            raise Exception("Unexpected manifest payload")
        return [ManifestEntry.from_document(item) for item in data]
