"""Domain service abstraction for origin health monitoring."""

from __future__ import annotations

from typing import Dict, List, Protocol

from cdnrelay.domain.entities.origin import HealthStatus, Origin


class IOriginHealthMonitor(Protocol):
    """Interface for reading the monitor's current view of the origins."""

    @property
    def origins(self) -> List[Origin]:
        """Configured origins in priority order."""
        ...

    def snapshot(self) -> Dict[str, HealthStatus]:
        """Return an immutable copy of the latest status per origin."""
        ...


class IOriginProbe(Protocol):
    """Performs one reachability + liveness check against an origin."""

    async def probe(self, origin: Origin) -> HealthStatus:
        ...
