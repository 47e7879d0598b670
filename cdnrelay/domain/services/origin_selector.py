"""Failover-by-priority selection of the preferred origin."""

from typing import Mapping, Optional, Sequence

from cdnrelay.domain.entities.origin import HealthStatus, Origin


def select_origin(
    origins: Sequence[Origin], statuses: Mapping[str, HealthStatus]
) -> Optional[Origin]:
    """
    Return the first origin, in configured order, whose status is healthy.

    Origins without a status (never probed) are treated as not healthy.
    """
    for origin in origins:
        status = statuses.get(origin.name)
        if status is not None and status.is_healthy:
            return origin
    return None
