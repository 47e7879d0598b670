"""Infrastructure implementation of the origin health monitor."""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timedelta, timezone
from time import perf_counter
from typing import Callable, Dict, Iterable, List, Optional

import httpx

from cdnrelay.domain.entities.origin import (
    HealthStatus,
    Origin,
    OriginState,
    status_payload,
)
from cdnrelay.domain.ports.health_check import IOriginProbe
from cdnrelay.domain.ports.status_publisher import IStatusPublisher
from cdnrelay.shared import get_logger

logger = get_logger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HttpOriginProbe(IOriginProbe):
    """Two-step probe: raw TCP connect, then a cache-busted liveness GET."""

    def __init__(
        self,
        *,
        connect_timeout: float = 1.0,
        http_timeout: float = 1.0,
        clock: Clock = _utcnow,
    ) -> None:
        self._connect_timeout = connect_timeout
        self._http_timeout = http_timeout
        self._clock = clock

    async def probe(self, origin: Origin) -> HealthStatus:
        checked_at = self._clock()
        start = perf_counter()

        if not await self.is_reachable(origin.probe_host, origin.probe_port):
            return HealthStatus(
                origin_name=origin.name,
                state=OriginState.UNHEALTHY,
                last_checked_at=checked_at,
                message=f"TCP unreachable: {origin.probe_host}:{origin.probe_port}",
                latency_ms=(perf_counter() - start) * 1000,
            )

        state, message = await self.check_liveness(origin.probe_url)
        return HealthStatus(
            origin_name=origin.name,
            state=state,
            last_checked_at=checked_at,
            message=message,
            latency_ms=(perf_counter() - start) * 1000,
        )

    async def is_reachable(self, host: str, port: int) -> bool:
        if not host:
            return False
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=self._connect_timeout
            )
        except (OSError, asyncio.TimeoutError):
            return False

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return True

    async def check_liveness(self, probe_url: str) -> tuple[OriginState, str]:
        params = {"_": str(int(time.time() * 1000))}
        headers = {"Cache-Control": "no-store"}
        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await asyncio.wait_for(
                    client.get(probe_url, params=params, headers=headers),
                    timeout=self._http_timeout,
                )
        except asyncio.TimeoutError:
            return OriginState.UNHEALTHY, "HTTP request timed out"
        except httpx.HTTPError as exc:
            return OriginState.UNHEALTHY, f"HTTP request failed: {exc}"

        if response.is_success:
            return OriginState.HEALTHY, f"HTTP {response.status_code}"
        return OriginState.UNHEALTHY, f"HTTP {response.status_code}"


class OriginHealthMonitor:
    """
    Periodically probe every configured origin and keep its latest status.

    The monitor is the only writer of the status table; readers receive
    copies through :meth:`snapshot`. The first cycle runs as soon as the
    monitor starts, then one cycle is started every ``interval`` seconds.
    A tick that finds the previous cycle still running is skipped, so
    cycles never overlap.
    """

    def __init__(
        self,
        origins: Iterable[Origin],
        probe: IOriginProbe,
        publisher: Optional[IStatusPublisher] = None,
        *,
        interval: float = 5.0,
    ) -> None:
        self._origins: List[Origin] = list(origins)
        self._probe = probe
        self._publisher = publisher
        self._interval = interval
        self._statuses: Dict[str, HealthStatus] = {
            origin.name: HealthStatus(origin_name=origin.name)
            for origin in self._origins
        }
        self._runner: Optional[asyncio.Task[None]] = None
        self._cycle: Optional[asyncio.Task[None]] = None
        self.completed_cycles = 0
        self.skipped_ticks = 0

    @property
    def origins(self) -> List[Origin]:
        return list(self._origins)

    @property
    def running(self) -> bool:
        return self._runner is not None and not self._runner.done()

    def snapshot(self) -> Dict[str, HealthStatus]:
        return dict(self._statuses)

    def to_wire(self) -> Dict[str, Dict[str, Optional[str]]]:
        return status_payload(self._origins, self._statuses)

    async def run_cycle(self) -> None:
        """Probe every origin concurrently and record the results."""
        await asyncio.gather(*(self._probe_origin(o) for o in self._origins))
        self.completed_cycles += 1
        logger.debug("monitor.cycle.completed", cycle=self.completed_cycles)

    async def _probe_origin(self, origin: Origin) -> None:
        try:
            status = await self._probe.probe(origin)
        except Exception as exc:
            logger.error(
                "monitor.probe.crashed",
                origin=origin.name,
                error=str(exc),
                exc_info=exc,
            )
            status = HealthStatus(
                origin_name=origin.name,
                state=OriginState.UNHEALTHY,
                last_checked_at=datetime.now(timezone.utc),
                message=f"Probe failed: {exc}",
            )

        self._record(status)

        if status.is_healthy:
            logger.info(
                "monitor.origin.healthy", origin=origin.name, detail=status.message
            )
        else:
            logger.warning(
                "monitor.origin.unhealthy", origin=origin.name, detail=status.message
            )

        if self._publisher is not None:
            self._publisher.publish(self.to_wire())

    def _record(self, status: HealthStatus) -> None:
        previous = self._statuses.get(status.origin_name)
        checked_at = status.last_checked_at or datetime.now(timezone.utc)
        if (
            previous is not None
            and previous.last_checked_at is not None
            and checked_at <= previous.last_checked_at
        ):
            checked_at = previous.last_checked_at + timedelta(microseconds=1)
        self._statuses[status.origin_name] = HealthStatus(
            origin_name=status.origin_name,
            state=status.state,
            last_checked_at=checked_at,
            message=status.message,
            latency_ms=status.latency_ms,
        )

    def tick(self) -> bool:
        """Start a cycle unless one is in flight; return whether it started."""
        if self._cycle is not None and not self._cycle.done():
            self.skipped_ticks += 1
            logger.warning("monitor.cycle.skipped", reason="previous cycle running")
            return False
        self._cycle = asyncio.create_task(self.run_cycle())
        return True

    async def _run(self) -> None:
        while True:
            self.tick()
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if self.running:
            return
        logger.info(
            "monitor.started",
            origins=[origin.name for origin in self._origins],
            interval=self._interval,
        )
        self._runner = asyncio.create_task(self._run())

    async def stop(self) -> None:
        tasks = [t for t in (self._runner, self._cycle) if t is not None]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._runner = None
        self._cycle = None
        logger.info("monitor.stopped", cycles=self.completed_cycles)
