"""
헬스 체크 엔드포인트

GET /api/health - 서버 상태 확인 (check_bank=true면 은행 토큰 검증)
"""

import logging

from fastapi import APIRouter, Depends, Query

from core.errors import FeedError
from core.utils.timezone import now_utc
from feed.statement_poller import StatementPoller
from web.dependencies import get_statement_poller
from web.models.responses import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check(
    check_bank: bool = Query(False, description="은행 API 고객 정보 조회로 토큰 검증"),
    poller: StatementPoller | None = Depends(get_statement_poller),
) -> HealthResponse:
    """서버 상태 확인"""
    if poller is None:
        return HealthResponse(version=API_VERSION, timestamp=now_utc(), bank_feed="disabled")

    if not check_bank:
        return HealthResponse(version=API_VERSION, timestamp=now_utc(), bank_feed="configured")

    try:
        info = await poller.client.fetch_client_info()
    except FeedError as e:
        logger.warning(f"은행 토큰 검증 실패: {e}")
        return HealthResponse(
            status="degraded",
            version=API_VERSION,
            timestamp=now_utc(),
            bank_feed="error",
        )

    return HealthResponse(
        version=API_VERSION,
        timestamp=now_utc(),
        bank_feed="ok",
        bank_client=info.name,
    )
