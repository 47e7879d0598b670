"""Use cases for origin health, origin selection and the status stream."""

import json
from typing import AsyncGenerator

from cdnrelay.application.dtos.health_dto import AliveOriginDTO, SystemHealthDTO
from cdnrelay.domain.entities.health import SystemHealth, aggregate_status
from cdnrelay.domain.entities.origin import status_payload
from cdnrelay.domain.ports.health_check import IOriginHealthMonitor
from cdnrelay.domain.ports.status_publisher import IStatusChannel
from cdnrelay.domain.services.origin_selector import select_origin


class GetHealthStatusUseCase:
    """Use case responsible for returning the origin pool health."""

    def __init__(self, health_monitor: IOriginHealthMonitor) -> None:
        self._health_monitor = health_monitor

    async def execute(self) -> SystemHealthDTO:
        snapshot = self._health_monitor.snapshot()
        statuses = [snapshot[o.name] for o in self._health_monitor.origins]
        health = SystemHealth(status=aggregate_status(statuses), origins=statuses)
        return SystemHealthDTO.from_domain(health)


class GetAliveOriginUseCase:
    """Use case returning the preferred healthy origin's base URL."""

    def __init__(self, health_monitor: IOriginHealthMonitor) -> None:
        self._health_monitor = health_monitor

    async def execute(self) -> AliveOriginDTO:
        origin = select_origin(
            self._health_monitor.origins, self._health_monitor.snapshot()
        )
        return AliveOriginDTO(url=origin.base_url if origin else None)


class StreamOriginStatusUseCase:
    """
    Use case producing the serialised status stream for one observer.

    The broadcast channel does not replay history, so the stream starts
    with a snapshot read from the monitor and then relays every published
    state until the consumer goes away.
    """

    def __init__(
        self,
        health_monitor: IOriginHealthMonitor,
        broadcaster: IStatusChannel,
    ) -> None:
        self._health_monitor = health_monitor
        self._broadcaster = broadcaster

    async def execute(self) -> AsyncGenerator[str, None]:
        subscription = self._broadcaster.subscribe()
        try:
            yield json.dumps(
                status_payload(
                    self._health_monitor.origins, self._health_monitor.snapshot()
                )
            )
            async for payload in subscription:
                yield payload
        finally:
            self._broadcaster.unsubscribe(subscription)
