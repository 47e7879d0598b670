"""
Origin domain entities.

This module defines the value objects describing the content-delivery
origins and the health information the monitor keeps about them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Mapping, Optional, Sequence
from urllib.parse import urlsplit


class OriginState(str, Enum):
    """Availability of a single origin as seen by the last probe."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Origin:
    """Statically configured upstream location serving assets."""

    name: str
    base_url: str
    probe_url: str

    @property
    def probe_host(self) -> str:
        return urlsplit(self.probe_url).hostname or ""

    @property
    def probe_port(self) -> int:
        parsed = urlsplit(self.probe_url)
        if parsed.port:
            return parsed.port
        return 443 if parsed.scheme == "https" else 80


@dataclass(frozen=True, slots=True)
class HealthStatus:
    """Result of the most recent probe of one origin."""

    origin_name: str
    state: OriginState = OriginState.UNKNOWN
    last_checked_at: Optional[datetime] = None
    message: Optional[str] = None
    latency_ms: Optional[float] = None

    @property
    def is_healthy(self) -> bool:
        return self.state is OriginState.HEALTHY


def status_payload(
    origins: Sequence[Origin], statuses: Mapping[str, HealthStatus]
) -> Dict[str, Dict[str, Optional[str]]]:
    """
    Render the health table as broadcast to observers.

    Origins that were never probed are reported as unhealthy with no
    check time.
    """
    payload: Dict[str, Dict[str, Optional[str]]] = {}
    for origin in origins:
        status = statuses.get(origin.name)
        healthy = status is not None and status.is_healthy
        checked_at = status.last_checked_at if status is not None else None
        payload[origin.name] = {
            "status": (
                OriginState.HEALTHY.value if healthy else OriginState.UNHEALTHY.value
            ),
            "lastChecked": checked_at.isoformat() if checked_at else None,
        }
    return payload
