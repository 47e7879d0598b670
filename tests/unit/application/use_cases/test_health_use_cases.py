from __future__ import annotations

import json

import pytest

from cdnrelay.application.use_cases.health_use_cases import (
    GetAliveOriginUseCase,
    GetHealthStatusUseCase,
    StreamOriginStatusUseCase,
)
from cdnrelay.domain.entities.health import ServiceStatus
from cdnrelay.domain.entities.origin import OriginState
from cdnrelay.infrastructure.services import OriginHealthMonitor, StatusBroadcaster


@pytest.fixture()
def failover_monitor(origins, stub_probe_factory) -> OriginHealthMonitor:
    probe = stub_probe_factory(
        {"AWS": OriginState.UNHEALTHY, "Azure": OriginState.HEALTHY}
    )
    return OriginHealthMonitor(origins, probe)


@pytest.mark.asyncio
async def test_health_is_unknown_before_first_cycle(failover_monitor) -> None:
    result = await GetHealthStatusUseCase(failover_monitor).execute()
    assert result.status is ServiceStatus.UNKNOWN
    assert [o.name for o in result.origins] == ["AWS", "Azure"]


@pytest.mark.asyncio
async def test_health_is_degraded_when_one_origin_fails(failover_monitor) -> None:
    await failover_monitor.run_cycle()

    result = await GetHealthStatusUseCase(failover_monitor).execute()

    assert result.status is ServiceStatus.DEGRADED
    assert result.origins[0].status is OriginState.UNHEALTHY
    assert result.origins[1].status is OriginState.HEALTHY


@pytest.mark.asyncio
async def test_alive_origin_fails_over(failover_monitor) -> None:
    use_case = GetAliveOriginUseCase(failover_monitor)
    assert (await use_case.execute()).url is None

    await failover_monitor.run_cycle()

    assert (await use_case.execute()).url == "http://stage.cdn.ai"


@pytest.mark.asyncio
async def test_stream_starts_with_snapshot_then_relays(failover_monitor) -> None:
    broadcaster = StatusBroadcaster()
    use_case = StreamOriginStatusUseCase(failover_monitor, broadcaster)

    stream = use_case.execute()
    first = json.loads(await stream.__anext__())
    assert first["Azure"] == {"status": "unhealthy", "lastChecked": None}
    assert broadcaster.subscriber_count == 1

    broadcaster.publish({"Azure": {"status": "healthy", "lastChecked": "t"}})
    second = json.loads(await stream.__anext__())
    assert second["Azure"]["status"] == "healthy"

    await stream.aclose()
    assert broadcaster.subscriber_count == 0
