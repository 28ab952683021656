"""
Monobank REST API 클라이언트

개인 토큰(X-Token 헤더) 인증으로 명세서와 고객 정보를 조회.

주의: Monobank 개인 API는 같은 엔드포인트를 60초에 1회만 허용 (초과 시 429)
"""

import logging
from typing import Any

import httpx

from adapters.monobank.models import ClientInfo
from core.constants import Defaults, MonobankEndpoints
from core.errors import FeedError, FeedTimeoutError

logger = logging.getLogger(__name__)


class MonobankApiError(FeedError):
    """Monobank API 에러

    Args:
        message: 에러 메시지
        status_code: HTTP 상태 코드 (전송 오류면 None)
    """

    def __init__(self, message: str, status_code: int | None = None):
        retryable = status_code is None or status_code == 429 or status_code >= 500
        super().__init__(message, retryable=retryable)
        self.status_code = status_code


class MonobankRestClient:
    """Monobank REST API 클라이언트

    Args:
        token: 개인 API 토큰
        account: 계좌 ID ("0"은 기본 계좌)
        timeout: HTTP 요청 타임아웃 (초)
        base_url: API 주소 (테스트용 변경 가능)

    사용 예시:
    ```python
    client = MonobankRestClient(token="xxx")
    records = await client.fetch_transactions(from_ts, to_ts)
    await client.close()
    ```
    """

    def __init__(
        self,
        token: str,
        account: str = Defaults.MONOBANK_ACCOUNT,
        timeout: float = Defaults.FETCH_TIMEOUT_SEC,
        base_url: str = MonobankEndpoints.BASE_URL,
    ):
        self.token = token
        self.account = account
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 반환 (lazy init)"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, endpoint: str) -> Any:
        """GET 요청 실행

        Args:
            endpoint: API 엔드포인트 (예: /personal/client-info)

        Returns:
            API 응답 JSON

        Raises:
            FeedTimeoutError: 타임아웃 (재시도 가능)
            MonobankApiError: HTTP 에러, 전송 에러, JSON 디코딩 실패
        """
        client = await self._ensure_client()
        url = f"{self.base_url}{endpoint}"
        headers = {"X-Token": self.token}

        try:
            response = await client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"Monobank request timeout: {endpoint}")
            raise FeedTimeoutError(f"요청 시간 초과 ({self.timeout}s): {e}")
        except httpx.RequestError as e:
            logger.error(f"Request error: {e}")
            raise MonobankApiError(str(e))

        if response.status_code >= 400:
            error_msg = response.text
            try:
                error_msg = response.json().get("errorDescription", error_msg)
            except ValueError:
                pass
            logger.error(
                f"Monobank API error: {response.status_code} - {error_msg}",
                extra={"endpoint": endpoint},
            )
            raise MonobankApiError(error_msg, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise MonobankApiError(f"잘못된 JSON 응답: {e}", response.status_code)

    async def fetch_transactions(
        self,
        from_ts: int,
        to_ts: int,
        account: str | None = None,
    ) -> list[dict[str, Any]]:
        """기간 내 명세서 조회

        Args:
            from_ts: 시작 Unix 타임스탬프 (초)
            to_ts: 종료 Unix 타임스탬프 (초)
            account: 계좌 ID (None이면 기본 계좌)

        Returns:
            명세서 항목 JSON 목록 (디코딩은 import 단계에서 레코드별로 수행)
        """
        account_id = account or self.account
        data = await self._request(
            f"{MonobankEndpoints.STATEMENT}/{account_id}/{from_ts}/{to_ts}"
        )
        if not isinstance(data, list):
            raise MonobankApiError("명세서 응답이 목록이 아닙니다")
        return data

    async def fetch_client_info(self) -> ClientInfo:
        """고객 정보 조회 (토큰 검증용)"""
        data = await self._request(MonobankEndpoints.CLIENT_INFO)
        return ClientInfo.from_api(data)
