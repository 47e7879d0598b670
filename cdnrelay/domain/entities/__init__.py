"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .asset import (
    AssetKind,
    Container,
    InjectedElement,
    LoadOutcome,
    LoadResult,
    PageDocument,
)
from .errors import (
    AssetNotFoundError,
    AssetStorageError,
    AssetValidationError,
    DomainError,
)
from .health import ServiceStatus, SystemHealth, aggregate_status
from .manifest import DeliveryAttributes, DeliveryMode, ManifestEntry, Rule
from .origin import HealthStatus, Origin, OriginState

__all__ = [
    "AssetKind",
    "Container",
    "InjectedElement",
    "LoadOutcome",
    "LoadResult",
    "PageDocument",
    "Origin",
    "OriginState",
    "HealthStatus",
    "ServiceStatus",
    "SystemHealth",
    "aggregate_status",
    "DeliveryAttributes",
    "DeliveryMode",
    "ManifestEntry",
    "Rule",
    "DomainError",
    "AssetNotFoundError",
    "AssetValidationError",
    "AssetStorageError",
]
