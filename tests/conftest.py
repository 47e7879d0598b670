from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cdnrelay.domain.entities.asset import InjectedElement  # noqa: E402
from cdnrelay.domain.entities.origin import (  # noqa: E402
    HealthStatus,
    Origin,
    OriginState,
)


@pytest.fixture()
def origins() -> List[Origin]:
    return [
        Origin(
            name="AWS",
            base_url="http://dev.cdn.ai",
            probe_url="http://dev.cdn.ai/ping.txt",
        ),
        Origin(
            name="Azure",
            base_url="http://stage.cdn.ai",
            probe_url="http://stage.cdn.ai/ping.txt",
        ),
    ]


class StubProbe:
    """Probe answering from a fixed table of origin states."""

    def __init__(self, states: Dict[str, OriginState]) -> None:
        self.states = dict(states)
        self.calls: List[str] = []

    async def probe(self, origin: Origin) -> HealthStatus:
        self.calls.append(origin.name)
        state = self.states.get(origin.name, OriginState.UNHEALTHY)
        return HealthStatus(
            origin_name=origin.name,
            state=state,
            last_checked_at=datetime.now(timezone.utc),
            message="stub",
        )


@pytest.fixture()
def stub_probe_factory():
    return StubProbe


class RecordingFetcher:
    """Fetcher that succeeds only for URLs it was told about."""

    def __init__(self, succeeding: Optional[set] = None) -> None:
        self.succeeding = set(succeeding or ())
        self.fetched: List[str] = []

    async def fetch(self, element: InjectedElement) -> bool:
        self.fetched.append(element.url)
        return element.url in self.succeeding


@pytest.fixture()
def fetcher_factory():
    return RecordingFetcher


@pytest.fixture()
def dummy_now() -> datetime:
    return datetime.now(timezone.utc)
