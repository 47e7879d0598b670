"""Infrastructure services package."""

from .origin_health_monitor import HttpOriginProbe, OriginHealthMonitor
from .status_broadcaster import StatusBroadcaster, Subscription

__all__ = [
    "HttpOriginProbe",
    "OriginHealthMonitor",
    "StatusBroadcaster",
    "Subscription",
]
