import asyncio

import pytest

from apps.call_routing.notifier import RealtimeNotifier, NEW_EVENT


class Recorder:
    def __init__(self, fail=False):
        self.messages = []
        self.fail = fail

    async def __call__(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.messages.append(message)


@pytest.mark.asyncio
async def test_publish_reaches_every_observer():
    notifier = RealtimeNotifier()
    first, second = Recorder(), Recorder()
    notifier.subscribe(first)
    notifier.subscribe(second)

    delivered = await notifier.publish(NEW_EVENT, {"CALL_ID": "call-1"})

    assert delivered == 2
    assert first.messages == [{"event": "new_event", "data": {"CALL_ID": "call-1"}}]
    assert second.messages == first.messages


@pytest.mark.asyncio
async def test_failing_observer_is_dropped():
    notifier = RealtimeNotifier()
    healthy, broken = Recorder(), Recorder(fail=True)
    notifier.subscribe(broken)
    notifier.subscribe(healthy)

    assert await notifier.publish(NEW_EVENT, {}) == 1
    assert notifier.observers == [healthy]


@pytest.mark.asyncio
async def test_no_replay_for_late_observers():
    notifier = RealtimeNotifier()
    await notifier.publish(NEW_EVENT, {"CALL_ID": "early"})
    late = Recorder()
    notifier.subscribe(late)
    assert late.messages == []


@pytest.mark.asyncio
async def test_publish_nowait_runs_in_background():
    notifier = RealtimeNotifier()
    recorder = Recorder()
    notifier.subscribe(recorder)

    notifier.publish_nowait(NEW_EVENT, {"CALL_ID": "call-2"})
    assert recorder.messages == []

    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert recorder.messages[0]["data"]["CALL_ID"] == "call-2"


def test_unsubscribe_unknown_observer_is_ignored():
    notifier = RealtimeNotifier()
    notifier.unsubscribe(Recorder())
    assert notifier.observers == []
