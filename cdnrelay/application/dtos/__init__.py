"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .health_dto import AliveOriginDTO, OriginStatusDTO, SystemHealthDTO
from .loader_dto import LoadResultDTO, PageLoadReportDTO
from .manifest_dto import AssetFileDTO, AssetUploadDTO, ManifestEntryDTO

__all__ = [
    "AliveOriginDTO",
    "OriginStatusDTO",
    "SystemHealthDTO",
    "AssetFileDTO",
    "AssetUploadDTO",
    "ManifestEntryDTO",
    "LoadResultDTO",
    "PageLoadReportDTO",
]
