"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .asset_fetcher import IAssetFetcher
from .cdn_gateway import ICdnGateway

__all__ = ["IAssetFetcher", "ICdnGateway"]
