"""폴링 연속 실패 중지 테스트"""
import pytest

from app.client.api import ApiError
from app.client.polling import Poller


class FlakyFetch:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.mark.asyncio
async def test_poller_stops_after_consecutive_failures():
    fetch = FlakyFetch([ApiError("down", 500)] * 5)
    poller = Poller(fetch, interval=0, max_failures=3)

    await poller.run()

    assert poller.stopped is True
    assert fetch.calls == 3
    assert poller.consecutive_failures == 3


@pytest.mark.asyncio
async def test_success_resets_failure_count():
    received = []
    fetch = FlakyFetch([ApiError("down", 500), ApiError("down"), ["n1"], ApiError("down", 500)])
    poller = Poller(fetch, received.append, interval=0, max_failures=3)

    for _ in range(4):
        await poller.poll_once()

    assert poller.stopped is False
    assert poller.consecutive_failures == 1
    assert poller.last_result == ["n1"]
    assert received == [["n1"]]


@pytest.mark.asyncio
async def test_stopped_poller_does_not_fetch():
    fetch = FlakyFetch([["n1"]])
    poller = Poller(fetch, interval=0, max_failures=3)
    poller.stop()

    assert await poller.poll_once() is False
    assert fetch.calls == 0


@pytest.mark.asyncio
async def test_unexpected_errors_propagate():
    fetch = FlakyFetch([RuntimeError("bug")])
    poller = Poller(fetch, interval=0, max_failures=3)

    with pytest.raises(RuntimeError):
        await poller.poll_once()
