"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .asset_use_cases import (
    DeleteAssetUseCase,
    GetAssetContentUseCase,
    GetManifestUseCase,
    ListAssetsUseCase,
    LogicalAssetLocks,
    RebuildManifestUseCase,
    UploadAssetUseCase,
)
from .health_use_cases import (
    GetAliveOriginUseCase,
    GetHealthStatusUseCase,
    StreamOriginStatusUseCase,
)
from .loader_use_cases import LoadPageAssetsUseCase

__all__ = [
    "DeleteAssetUseCase",
    "GetAssetContentUseCase",
    "GetManifestUseCase",
    "ListAssetsUseCase",
    "LogicalAssetLocks",
    "RebuildManifestUseCase",
    "UploadAssetUseCase",
    "GetAliveOriginUseCase",
    "GetHealthStatusUseCase",
    "StreamOriginStatusUseCase",
    "LoadPageAssetsUseCase",
]
