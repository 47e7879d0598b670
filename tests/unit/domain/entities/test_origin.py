from __future__ import annotations

from datetime import datetime, timezone

from cdnrelay.domain.entities.origin import (
    HealthStatus,
    Origin,
    OriginState,
    status_payload,
)


def test_probe_host_and_default_ports() -> None:
    http_origin = Origin("AWS", "http://dev.cdn.ai", "http://dev.cdn.ai/ping.txt")
    https_origin = Origin("CF", "https://cdn.example", "https://cdn.example/ping.txt")
    custom = Origin("Local", "http://localhost:8080", "http://localhost:8080/ping.txt")

    assert http_origin.probe_host == "dev.cdn.ai"
    assert http_origin.probe_port == 80
    assert https_origin.probe_port == 443
    assert custom.probe_port == 8080


def test_status_payload_reports_never_probed_as_unhealthy(origins) -> None:
    checked = datetime(2024, 9, 9, 12, 0, tzinfo=timezone.utc)
    statuses = {
        "AWS": HealthStatus(origin_name="AWS"),
        "Azure": HealthStatus(
            origin_name="Azure",
            state=OriginState.HEALTHY,
            last_checked_at=checked,
        ),
    }

    payload = status_payload(origins, statuses)

    assert payload == {
        "AWS": {"status": "unhealthy", "lastChecked": None},
        "Azure": {"status": "healthy", "lastChecked": checked.isoformat()},
    }
    assert list(payload) == ["AWS", "Azure"]


def test_status_payload_includes_origins_missing_from_table(origins) -> None:
    payload = status_payload(origins, {})
    assert payload["Azure"] == {"status": "unhealthy", "lastChecked": None}
