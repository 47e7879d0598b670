"""DTOs for origin health and origin selection responses."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from cdnrelay.domain.entities.health import ServiceStatus, SystemHealth
from cdnrelay.domain.entities.origin import HealthStatus, OriginState


class OriginStatusDTO(BaseModel):
    """Serializable representation of one origin's latest probe."""

    name: str = Field(description="Origin identifier")
    status: OriginState = Field(description="State reported by the last probe")
    checked_at: Optional[datetime] = Field(
        default=None, description="Timestamp of the last probe"
    )
    message: Optional[str] = Field(
        default=None, description="Human readable probe outcome"
    )
    latency_ms: Optional[float] = Field(
        default=None, description="Probe latency in milliseconds"
    )

    @classmethod
    def from_domain(cls, status: HealthStatus) -> "OriginStatusDTO":
        return cls(
            name=status.origin_name,
            status=status.state,
            checked_at=status.last_checked_at,
            message=status.message,
            latency_ms=status.latency_ms,
        )


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: ServiceStatus = Field(description="Aggregated origin pool status")
    origins: List[OriginStatusDTO] = Field(
        default_factory=list, description="Per-origin probe results"
    )

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            origins=[OriginStatusDTO.from_domain(o) for o in health.origins],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "degraded",
                "origins": [
                    {
                        "name": "AWS",
                        "status": "unhealthy",
                        "checked_at": "2024-09-09T12:00:00Z",
                        "message": "TCP unreachable: dev.cdn.ai:80",
                        "latency_ms": 1001.2,
                    },
                    {
                        "name": "Azure",
                        "status": "healthy",
                        "checked_at": "2024-09-09T12:00:00Z",
                        "message": "HTTP 200",
                        "latency_ms": 35.4,
                    },
                ],
            }
        }
    }


class AliveOriginDTO(BaseModel):
    """Base URL of the preferred healthy origin, or null."""

    url: Optional[str] = Field(
        default=None, description="Base URL of the first healthy origin"
    )

    model_config = {"json_schema_extra": {"example": {"url": "http://stage.cdn.ai"}}}
