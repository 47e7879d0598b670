from __future__ import annotations

from cdnrelay.domain.entities.health import ServiceStatus, aggregate_status
from cdnrelay.domain.entities.origin import HealthStatus, OriginState


def _status(name: str, state: OriginState) -> HealthStatus:
    return HealthStatus(origin_name=name, state=state)


def test_aggregate_status_all_healthy_is_up() -> None:
    statuses = [
        _status("AWS", OriginState.HEALTHY),
        _status("Azure", OriginState.HEALTHY),
    ]
    assert aggregate_status(statuses) is ServiceStatus.UP


def test_aggregate_status_partial_is_degraded() -> None:
    statuses = [
        _status("AWS", OriginState.UNHEALTHY),
        _status("Azure", OriginState.HEALTHY),
    ]
    assert aggregate_status(statuses) is ServiceStatus.DEGRADED


def test_aggregate_status_none_healthy_is_down() -> None:
    statuses = [
        _status("AWS", OriginState.UNHEALTHY),
        _status("Azure", OriginState.UNHEALTHY),
    ]
    assert aggregate_status(statuses) is ServiceStatus.DOWN


def test_aggregate_status_unknown_before_first_cycle() -> None:
    assert aggregate_status([]) is ServiceStatus.UNKNOWN
    statuses = [_status("AWS", OriginState.HEALTHY), HealthStatus(origin_name="Azure")]
    assert aggregate_status(statuses) is ServiceStatus.UNKNOWN
