"""
Manifest DTOs - Application Layer

This module defines Data Transfer Objects for manifest entries and
stored asset files exchanged with the presentation layer.
"""

from typing import Optional
from urllib.parse import quote

from pydantic import BaseModel, Field

from cdnrelay.domain.entities.manifest import DeliveryMode, ManifestEntry


class ManifestEntryDTO(BaseModel):
    """Wire representation of one manifest entry."""

    hashed: str = Field(description="Content-addressed asset name")
    critical: bool = Field(description="Load before dependent page behaviour")
    mode: DeliveryMode = Field(description="Script execution mode")
    priority: int = Field(ge=1, description="Delivery priority (1 is highest)")

    @classmethod
    def from_domain(cls, entry: ManifestEntry) -> "ManifestEntryDTO":
        return cls(
            hashed=entry.asset_id,
            critical=entry.critical,
            mode=entry.mode,
            priority=entry.priority,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "hashed": "green-4539fe064ad4.js",
                "critical": True,
                "mode": "defer",
                "priority": 1,
            }
        }
    }


class AssetUploadDTO(BaseModel):
    """Optional delivery attributes sent along with an upload."""

    critical: Optional[bool] = Field(default=None)
    mode: Optional[DeliveryMode] = Field(default=None)
    priority: Optional[int] = Field(default=None, ge=1)


class AssetFileDTO(BaseModel):
    """A stored asset file and where to download it."""

    filename: str = Field(description="Stored (content-addressed) file name")
    url: str = Field(description="Download path on this server")

    @classmethod
    def for_name(cls, filename: str) -> "AssetFileDTO":
        return cls(filename=filename, url=f"/files/{quote(filename)}")
