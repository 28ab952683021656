"""
BasePoller

모든 Poller의 베이스 클래스.
공통 폴링 로직과 마지막 폴링 시간 관리 제공.

한 번에 하나의 폴링만 실행 (_is_running). 실행 중 들어온 poll()은
저장소를 건드리지 않고 {"skipped": True}를 반환한다.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any

from adapters.interfaces import IBankFeedClient
from core.storage.config_store import ConfigStore
from core.utils.timezone import ensure_utc, now_utc, parse_iso, start_of_month

logger = logging.getLogger(__name__)


class BasePoller(ABC):
    """Poller 베이스 클래스

    주기적으로 은행 API를 호출하여 거래를 수집하는 공통 로직 제공.

    Args:
        client: 은행 피드 클라이언트
        config_store: 설정 저장소 (마지막 폴링 시간 저장)
        poll_interval_seconds: 폴링 간격 (초)
    """

    def __init__(
        self,
        client: IBankFeedClient,
        config_store: ConfigStore,
        poll_interval_seconds: int,
    ):
        self.client = client
        self.config_store = config_store
        self.poll_interval_seconds = poll_interval_seconds

        self._last_poll_time: datetime | None = None
        self._is_running: bool = False

    @property
    @abstractmethod
    def poller_name(self) -> str:
        """Poller 이름 (로깅 및 설정 키용)"""
        ...

    @property
    def config_key(self) -> str:
        """설정 저장 키"""
        return f"poller_{self.poller_name}_last_poll"

    @property
    def is_running(self) -> bool:
        """폴링 실행 중 여부"""
        return self._is_running

    @property
    def last_poll_time(self) -> datetime | None:
        return self._last_poll_time

    async def initialize(self) -> None:
        """초기화: 마지막 폴링 시간 복구"""
        saved_state = await self.config_store.get(self.config_key)

        if saved_state and "last_poll_time" in saved_state:
            last_poll_str = saved_state["last_poll_time"]
            self._last_poll_time = parse_iso(last_poll_str)

            logger.info(
                f"{self.poller_name} Poller 초기화: 마지막 폴링 시간 복구됨",
                extra={"last_poll_time": last_poll_str},
            )
        else:
            self._last_poll_time = None
            logger.info(f"{self.poller_name} Poller 초기화: 첫 실행")

    async def should_poll(self) -> bool:
        """폴링 필요 여부 확인

        마지막 폴링 이후 poll_interval_seconds가 경과했는지 확인.
        """
        if self._is_running:
            return False

        if self._last_poll_time is None:
            return True

        elapsed = (now_utc() - self._last_poll_time).total_seconds()
        return elapsed >= self.poll_interval_seconds

    async def poll(
        self,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> dict[str, Any]:
        """폴링 실행

        Args:
            since: 조회 시작 (None이면 마지막 폴링 기준 자동 계산)
            until: 조회 종료 (None이면 현재)

        Returns:
            폴링 결과:
            {
                "imported": int,
                "poll_time": datetime,
                "duration_ms": float,
                ... (_do_poll 결과)
            }
        """
        if self._is_running:
            logger.warning(f"{self.poller_name} Poller가 이미 실행 중입니다")
            return {"imported": 0, "skipped": True}

        self._is_running = True
        start_time = now_utc()

        try:
            logger.debug(f"{self.poller_name} Poller 시작")

            window_start = ensure_utc(since) if since else self._get_poll_start_time()
            window_end = min(ensure_utc(until), start_time) if until else start_time

            result = await self._do_poll(window_start, window_end)

            if result.get("error") is None and self._covers_pending(window_start, window_end):
                self._last_poll_time = window_end
                await self._save_last_poll_time()

            duration_ms = (now_utc() - start_time).total_seconds() * 1000

            if result.get("imported", 0) > 0:
                logger.info(
                    f"{self.poller_name} Poller 완료",
                    extra={"imported": result["imported"], "duration_ms": duration_ms},
                )
            else:
                logger.debug(f"{self.poller_name} Poller 완료: 신규 거래 없음")

            return {**result, "poll_time": start_time, "duration_ms": duration_ms}

        except Exception as e:
            logger.error(
                f"{self.poller_name} Poller 실패",
                extra={"error": str(e)},
                exc_info=True,
            )
            return {"imported": 0, "error": str(e), "retryable": False}

        finally:
            self._is_running = False

    def _get_poll_start_time(self) -> datetime:
        """폴링 시작 시간 계산

        마지막 폴링 시간이 있으면 1분 겹쳐서 그 이후, 없으면 이번 달 1일부터.
        """
        if self._last_poll_time:
            return self._last_poll_time - timedelta(minutes=1)

        return start_of_month(now_utc())

    def _covers_pending(self, window_start: datetime, window_end: datetime) -> bool:
        """조회 구간이 아직 가져오지 않은 구간의 시작부터 이어지는지 확인

        과거 구간만 다시 조회한 경우 마지막 폴링 시간을 옮기지 않는다.
        """
        if window_start > self._get_poll_start_time():
            return False

        return self._last_poll_time is None or window_end > self._last_poll_time

    async def _save_last_poll_time(self) -> None:
        """마지막 폴링 시간 저장"""
        if self._last_poll_time:
            await self.config_store.set(
                self.config_key,
                {"last_poll_time": self._last_poll_time.isoformat()},
                updated_by=f"poller:{self.poller_name}",
            )

    @abstractmethod
    async def _do_poll(self, since: datetime, until: datetime) -> dict[str, Any]:
        """실제 폴링 로직 구현

        Args:
            since: 조회 시작 시각
            until: 조회 종료 시각

        Returns:
            결과 dict ("imported" 필수, 실패 시 "error")
        """
        ...

    async def stop(self) -> None:
        """Poller 정지"""
        logger.info(f"{self.poller_name} Poller 정지")
        await self._save_last_poll_time()
