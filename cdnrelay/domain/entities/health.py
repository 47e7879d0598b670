"""
Health domain entities.

This module defines value objects for representing the aggregated
availability of the configured origins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from cdnrelay.domain.entities.origin import HealthStatus, OriginState


class ServiceStatus(str, Enum):
    """High-level availability for the origin pool."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class SystemHealth:
    """Aggregated health across every configured origin."""

    status: ServiceStatus
    origins: List[HealthStatus] = field(default_factory=list)


def aggregate_status(statuses: List[HealthStatus]) -> ServiceStatus:
    """Collapse per-origin states into one service status."""
    if not statuses or any(s.state is OriginState.UNKNOWN for s in statuses):
        return ServiceStatus.UNKNOWN

    healthy = sum(1 for s in statuses if s.state is OriginState.HEALTHY)
    if healthy == len(statuses):
        return ServiceStatus.UP
    if healthy:
        return ServiceStatus.DEGRADED
    return ServiceStatus.DOWN
