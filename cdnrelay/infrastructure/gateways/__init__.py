"""
Gateways Package - Infrastructure Layer

HTTP implementations of the domain gateway interfaces.
"""

from .cdn_gateway import HttpCdnGateway
from .http_asset_fetcher import HttpAssetFetcher

__all__ = ["HttpCdnGateway", "HttpAssetFetcher"]
