"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config.loader import get_settings
from core.errors import LedgerValidationError, NotFoundError
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import (
    budget,
    categories,
    currencies,
    health,
    imports,
    summary,
    transactions,
)

logger = logging.getLogger(__name__)

# 자동 폴링 확인 간격 (초)
POLL_CHECK_INTERVAL_SEC = 60


async def _poll_loop(poller) -> None:
    """주기적 명세서 import (poll_interval 경과 시에만 실제 조회)"""
    while True:
        if await poller.should_poll():
            await poller.poll()
        await asyncio.sleep(POLL_CHECK_INTERVAL_SEC)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
    from adapters.monobank.rest_client import MonobankRestClient
    from core.storage.config_store import ConfigStore, init_default_configs
    from core.storage.transaction_store import TransactionStore
    from feed.statement_poller import StatementPoller
    from web.dependencies import set_statement_poller

    settings = get_settings()

    # 시작 시 - DB 스키마 및 기본 설정 자동 초기화
    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db)
        await init_default_configs(db)

    # 은행 피드 (요청 연결과 별도의 전용 연결 사용)
    client = MonobankRestClient(
        token=settings.monobank_token,
        account=settings.monobank_account,
        timeout=settings.fetch_timeout_sec,
    )
    feed_db = SQLiteAdapter(settings.db_path)
    await feed_db.connect()

    poller = StatementPoller(client, ConfigStore(feed_db), TransactionStore(feed_db))
    await poller.initialize()
    set_statement_poller(poller)
    poll_task = asyncio.create_task(_poll_loop(poller))
    logger.info("Web: StatementPoller 초기화 완료")

    yield

    # 종료 시 - 리소스 정리
    poll_task.cancel()
    try:
        await poll_task
    except asyncio.CancelledError:
        pass

    set_statement_poller(None)
    await poller.stop()
    await client.close()
    await feed_db.close()
    logger.info("Web: 종료 완료")


app = FastAPI(
    title="MonthBudget API",
    description="이중 통화 가계부 (환율 추정 기반 집계) API",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================================================
# 예외 처리
# =========================================================================


@app.exception_handler(LedgerValidationError)
async def validation_error_handler(request: Request, exc: LedgerValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "field": exc.field},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(transactions.router)
app.include_router(categories.router)
app.include_router(summary.router)
app.include_router(currencies.router)
app.include_router(budget.router)
app.include_router(imports.router)
