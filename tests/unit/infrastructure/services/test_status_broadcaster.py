from __future__ import annotations

import json

import pytest

from cdnrelay.infrastructure.services.status_broadcaster import (
    StatusBroadcaster,
    Subscription,
    SubscriptionClosed,
)

STATE = {"AWS": {"status": "healthy", "lastChecked": "2024-09-09T12:00:00+00:00"}}


@pytest.mark.asyncio
async def test_publish_reaches_every_subscriber() -> None:
    broadcaster = StatusBroadcaster()
    first = broadcaster.subscribe()
    second = broadcaster.subscribe()

    broadcaster.publish(STATE)

    for subscription in (first, second):
        payload = await subscription.__aiter__().__anext__()
        assert json.loads(payload) == STATE


def test_publish_without_subscribers_is_a_noop() -> None:
    broadcaster = StatusBroadcaster()
    broadcaster.publish(STATE)
    assert broadcaster.subscriber_count == 0


def test_closed_subscriber_is_dropped_on_publish() -> None:
    broadcaster = StatusBroadcaster()
    alive = broadcaster.subscribe()
    gone = broadcaster.subscribe()
    gone.close()

    broadcaster.publish(STATE)

    assert broadcaster.subscriber_count == 1
    assert alive.closed is False


def test_full_subscriber_is_dropped_without_blocking() -> None:
    broadcaster = StatusBroadcaster(buffer_size=1)
    slow = broadcaster.subscribe()

    broadcaster.publish(STATE)
    broadcaster.publish(STATE)

    assert broadcaster.subscriber_count == 0
    assert slow.closed is True


def test_unsubscribe_closes_subscription() -> None:
    broadcaster = StatusBroadcaster()
    subscription = broadcaster.subscribe()

    broadcaster.unsubscribe(subscription)
    broadcaster.unsubscribe(subscription)

    assert broadcaster.subscriber_count == 0
    with pytest.raises(SubscriptionClosed):
        subscription.write("{}")


def test_late_subscriber_gets_no_replay() -> None:
    broadcaster = StatusBroadcaster()
    broadcaster.publish(STATE)
    late: Subscription = broadcaster.subscribe()
    assert late._queue.empty()
