"""Domain ports package."""

from .health_check import IOriginHealthMonitor, IOriginProbe
from .status_publisher import IStatusChannel, IStatusPublisher, ISubscription

__all__ = [
    "IOriginHealthMonitor",
    "IOriginProbe",
    "IStatusChannel",
    "IStatusPublisher",
    "ISubscription",
]
