"""고정 주기 폴링 (알림, 응시 가능한 시험 목록 새로고침)

연속 실패가 max_failures 회에 도달하면 폴링을 멈춘다. 한 번이라도 성공하면 카운터는 0 으로.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

from app.client.api import ApiError
from app.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Poller(Generic[T]):
    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        on_result: Callable[[T], None] | None = None,
        *,
        interval: float | None = None,
        max_failures: int | None = None,
        name: str = "poller",
    ):
        self._fetch = fetch
        self._on_result = on_result
        self.interval = interval if interval is not None else settings.poll_interval_seconds
        self.max_failures = max_failures if max_failures is not None else settings.poll_max_failures
        self.name = name

        self.consecutive_failures = 0
        self.stopped = False
        self.last_result: T | None = None

    async def poll_once(self) -> bool:
        """한 번 가져오기. 성공하면 True."""
        if self.stopped:
            return False

        try:
            data = await self._fetch()
        except ApiError as e:
            self.consecutive_failures += 1
            logger.warning(
                f"[{self.name}] 폴링 실패 {self.consecutive_failures}/{self.max_failures}: "
                f"status={e.status_code}, message={e.message}"
            )
            if self.consecutive_failures >= self.max_failures:
                self.stopped = True
                logger.error(f"[{self.name}] 연속 실패로 폴링 중지")
            return False

        self.consecutive_failures = 0
        self.last_result = data
        if self._on_result is not None:
            self._on_result(data)
        return True

    def stop(self) -> None:
        self.stopped = True

    async def run(self) -> None:
        """중지될 때까지 즉시 1회 + interval 마다 폴링"""
        while not self.stopped:
            await self.poll_once()
            if self.stopped:
                break
            await asyncio.sleep(self.interval)
