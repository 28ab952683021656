"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from adapters.monobank.models import ClientInfo


@runtime_checkable
class IBankFeedClient(Protocol):
    """은행 명세서 피드 클라이언트 인터페이스

    유효한 토큰이면 레코드 목록, 아니면 FeedError 계열 예외.
    금액은 최소 단위 정수 그대로 반환 (변환은 import 단계).
    """

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
            명세서 항목 JSON 목록

        Raises:
            FeedError: 조회 실패 (retryable 속성으로 재시도 여부 표시)
        """
        ...

    async def fetch_client_info(self) -> "ClientInfo":
        """고객 정보 조회 (토큰 검증)"""
        ...

    async def close(self) -> None:
        """연결 종료"""
        ...
