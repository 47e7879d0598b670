from __future__ import annotations

from cdnrelay.application.dtos.health_dto import (
    AliveOriginDTO,
    OriginStatusDTO,
    SystemHealthDTO,
)
from cdnrelay.domain.entities.health import ServiceStatus, SystemHealth
from cdnrelay.domain.entities.origin import HealthStatus, OriginState


def test_origin_status_dto_from_domain(dummy_now) -> None:
    domain = HealthStatus(
        origin_name="Azure",
        state=OriginState.HEALTHY,
        last_checked_at=dummy_now,
        message="HTTP 200",
        latency_ms=12.5,
    )
    dto = OriginStatusDTO.from_domain(domain)
    assert dto.name == "Azure"
    assert dto.status is OriginState.HEALTHY
    assert dto.checked_at == dummy_now
    assert dto.latency_ms == 12.5


def test_system_health_dto_from_domain() -> None:
    domain = SystemHealth(
        status=ServiceStatus.UNKNOWN,
        origins=[HealthStatus(origin_name="AWS")],
    )
    dto = SystemHealthDTO.from_domain(domain)
    assert dto.status is ServiceStatus.UNKNOWN
    assert dto.origins[0].status is OriginState.UNKNOWN
    assert dto.origins[0].checked_at is None


def test_alive_origin_dto_serializes_null() -> None:
    assert AliveOriginDTO().model_dump() == {"url": None}
