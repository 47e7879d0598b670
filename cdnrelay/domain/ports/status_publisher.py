"""Domain ports for pushing health snapshots to observers."""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, Protocol


class IStatusPublisher(Protocol):
    """Fan-out of serialisable state snapshots."""

    def publish(self, state: Dict[str, Any]) -> None:
        """Push ``state`` to every live subscriber without blocking."""
        ...


class ISubscription(Protocol):
    """Handle of one observer; iterating yields serialised snapshots."""

    def __aiter__(self) -> AsyncIterator[str]:
        ...


class IStatusChannel(IStatusPublisher, Protocol):
    """Publisher that also manages its subscribers."""

    def subscribe(self) -> ISubscription:
        ...

    def unsubscribe(self, subscription: ISubscription) -> None:
        ...
